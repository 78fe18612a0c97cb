"""
Global test configuration with support for different test types.
"""

from contextlib import suppress
import logging
import os
from pathlib import Path

import pytest

from gemini_quiz.config import FrozenConfig
from gemini_quiz.core.types import AssetState, Document, RemoteAsset
from gemini_quiz.files.storage import TempStorage


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )
        monkeypatch.setattr(
            "gemini_quiz.config.resolver.load_dotenv",
            lambda *_args, **_kwargs: False,
            raising=False,
        )


@pytest.fixture(autouse=True)
def isolate_gemini_env(monkeypatch):
    """Remove GEMINI_* variables and debug toggles before each test."""
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked adapters",
        "allow_dotenv: Permit python-dotenv to load .env files",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


class CountingStorage(TempStorage):
    """TempStorage that records every release call."""

    def __init__(self, upload_dir: Path | None = None):
        super().__init__(upload_dir)
        self.release_calls: list[Path] = []

    def release(self, document: Document) -> None:
        self.release_calls.append(document.path)
        super().release(document)


class ScriptedAdapter:
    """Adapter whose remote behaviour is scripted per test.

    ``states`` lists the asset states returned by successive ``get_file``
    calls; ``response`` is the text returned from ``generate``. Passing an
    exception instance for ``upload_error``, ``poll_error`` or
    ``generate_error`` makes that call raise it.
    """

    def __init__(
        self,
        *,
        initial_state=AssetState.READY,
        states=(),
        response='{"questions": []}',
        upload_error=None,
        poll_error=None,
        generate_error=None,
    ):
        self.initial_state = initial_state
        self.states = list(states)
        self.response = response
        self.upload_error = upload_error
        self.poll_error = poll_error
        self.generate_error = generate_error
        self.calls: list[tuple[str, object]] = []
        self.generated_parts: list[tuple] = []

    def _asset(self, state):
        return RemoteAsset(
            name="files/abc",
            mime_type="application/pdf",
            uri="https://files.example/files/abc",
            state=state,
        )

    async def upload_file(self, path, *, mime_type, display_name):  # noqa: ARG002
        self.calls.append(("upload_file", path))
        if self.upload_error is not None:
            raise self.upload_error
        return self._asset(self.initial_state)

    async def get_file(self, name):
        self.calls.append(("get_file", name))
        if self.poll_error is not None:
            raise self.poll_error
        state = self.states.pop(0) if self.states else AssetState.READY
        return self._asset(state)

    async def generate(self, *, model_name, parts):
        self.calls.append(("generate", model_name))
        self.generated_parts.append(parts)
        if self.generate_error is not None:
            raise self.generate_error
        return self.response

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)


def quiz_json(count: int = 2) -> str:
    """Well-formed quiz text with ``count`` questions."""
    import json

    return json.dumps(
        {
            "questions": [
                {
                    "question": f"What is fact {i}?",
                    "options": ["A", "B", "C", "D"],
                    "correctAnswer": i % 4,
                }
                for i in range(count)
            ]
        }
    )


@pytest.fixture
def config_factory():
    """Build FrozenConfig instances with test-friendly defaults."""

    def _make(**overrides) -> FrozenConfig:
        values = {
            "api_key": None,
            "model": "gemini-2.5-flash",
            "use_real_api": False,
            "question_count": 2,
            "inline_threshold_bytes": 20 * 1024 * 1024,
            "poll_interval_seconds": 0.01,
            "max_poll_attempts": 5,
            "upload_dir": None,
        }
        values.update(overrides)
        return FrozenConfig(**values)

    return _make


@pytest.fixture
def storage(tmp_path):
    return CountingStorage(tmp_path / "uploads")


@pytest.fixture
def make_document(storage):
    """Store ``size`` bytes through the test storage and return the Document."""

    def _make(
        size: int = 1024,
        *,
        mime_type: str = "application/pdf",
        display_name: str = "notes.pdf",
    ) -> Document:
        return storage.save_bytes(b"x" * size, display_name, mime_type)

    return _make


@pytest.fixture
def scripted_adapter_cls():
    return ScriptedAdapter


@pytest.fixture
def quiz_text():
    return quiz_json
