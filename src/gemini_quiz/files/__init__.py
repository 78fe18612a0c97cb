"""
File handling for uploaded documents
"""

from .storage import TempStorage

__all__ = ["TempStorage"]
