"""
Project-wide constants for the Gemini quiz generator
"""

# ==============================================================================
# Model Configuration
# ==============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"

# ==============================================================================
# File Processing Configuration
# ==============================================================================

# File size limits (in bytes)
_KB = 1024
_MB = 1024 * _KB

# Processing thresholds
INLINE_SIZE_THRESHOLD = 20 * _MB  # Size threshold for inline vs Files API

# Files API processing
FILE_POLL_INTERVAL = 5.0  # seconds
MAX_POLL_ATTEMPTS = 120  # 10 minutes at the default interval

# Accepted upload types
SUPPORTED_MIME_PREFIXES = ("image/",)
SUPPORTED_MIME_TYPES = ("application/pdf",)

# ==============================================================================
# Quiz Configuration
# ==============================================================================

DEFAULT_QUESTION_COUNT = 5
OPTION_COUNT = 4
