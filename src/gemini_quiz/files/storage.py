"""
Temporary on-disk storage for uploaded documents
"""

from collections.abc import Iterator
from contextlib import contextmanager
import logging
from pathlib import Path
import tempfile
from typing import Protocol

from ..core.types import Document
from ..exceptions import EncodingError

log = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class AsyncReadable(Protocol):
    """Anything with an awaitable ``read(size)``, e.g. a FastAPI ``UploadFile``."""

    async def read(self, size: int = -1) -> bytes: ...


class TempStorage:
    """Spools uploads to temp files and deletes each one exactly once"""

    def __init__(self, upload_dir: Path | None = None):
        self.upload_dir = upload_dir
        # Paths saved here and not yet released
        self._live: set[Path] = set()

    def _new_file(self, display_name: str):
        if self.upload_dir is not None:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        return tempfile.NamedTemporaryFile(
            delete=False,
            dir=self.upload_dir,
            prefix="quiz-",
            suffix=Path(display_name).suffix,
        )

    async def save_upload(
        self, stream: AsyncReadable, display_name: str, mime_type: str
    ) -> Document:
        """Copy an async byte stream to a temp file and wrap it as a Document.

        The partial file is removed if spooling stops for any reason,
        cancellation included.
        """
        tmp = self._new_file(display_name)
        path = Path(tmp.name)
        size = 0
        try:
            with tmp:
                while chunk := await stream.read(CHUNK_SIZE):
                    tmp.write(chunk)
                    size += len(chunk)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise EncodingError(f"Failed to spool upload {display_name}: {e}") from e
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        log.debug("Spooled %s (%d bytes) to %s", display_name, size, path)
        return self._track(
            Document(
                path=path,
                mime_type=mime_type,
                display_name=display_name,
                size_bytes=size,
            )
        )

    def save_bytes(self, data: bytes, display_name: str, mime_type: str) -> Document:
        """Write in-memory content to a temp file and wrap it as a Document."""
        tmp = self._new_file(display_name)
        path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(data)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise EncodingError(f"Failed to store {display_name}: {e}") from e
        return self._track(
            Document(
                path=path,
                mime_type=mime_type,
                display_name=display_name,
                size_bytes=len(data),
            )
        )

    def _track(self, document: Document) -> Document:
        self._live.add(document.path)
        return document

    @property
    def outstanding(self) -> int:
        """Number of saved documents that have not been released yet."""
        return len(self._live)

    def release(self, document: Document) -> None:
        """Delete the document's backing file.

        Only files saved by this storage are deleted, each at most once;
        later calls for the same document are no-ops.
        """
        if document.path not in self._live:
            log.debug("Document not held by this storage: %s", document.path)
            return
        self._live.discard(document.path)
        try:
            document.path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("Failed to delete temp file %s: %s", document.path, e)
            return
        log.debug("Released %s", document.path)

    @contextmanager
    def claim(self, document: Document) -> Iterator[Document]:
        """Scope ownership of a document; its storage is released on exit."""
        try:
            yield document
        finally:
            self.release(document)
