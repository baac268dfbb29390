"""
Upload Handling

Uploaded files are described once, at the boundary, by an ``Upload``
descriptor: a kind (image or document), the raw bytes and the declared MIME
type. ``Upload.create`` validates the declared type, the size and the
actual content (magic bytes) for the kind, so handlers further in never
re-check a file.

Rules:
- image: ``image/*``, at most 2 MB (profile pictures, school logos)
- document: ``image/*`` or ``application/pdf``, at most 5 MB
  (registration proof)
"""

import asyncio
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import magic

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 2 * 1024 * 1024
MAX_DOCUMENT_BYTES = 5 * 1024 * 1024

_PDF_MIME = "application/pdf"


class UploadKind(str, Enum):
    """What an uploaded file is used for."""

    IMAGE = "image"
    DOCUMENT = "document"


class UploadRejectedError(ValueError):
    """Raised when a file does not satisfy the rules for its kind."""

    def __init__(self, message: str, filename: str | None = None):
        self.message = message
        self.filename = filename
        super().__init__(message)


def _mime_allowed(kind: UploadKind, mime: str) -> bool:
    if mime.startswith("image/"):
        return True
    return kind is UploadKind.DOCUMENT and mime == _PDF_MIME


def _family(mime: str) -> str:
    return "image" if mime.startswith("image/") else mime


def _size_limit(kind: UploadKind, max_bytes: int | None) -> int:
    if max_bytes is not None:
        return max_bytes
    return MAX_IMAGE_BYTES if kind is UploadKind.IMAGE else MAX_DOCUMENT_BYTES


@dataclass(frozen=True)
class Upload:
    """A validated file ready to be sent or stored."""

    kind: UploadKind
    filename: str
    content: bytes
    declared_mime: str

    @classmethod
    def create(
        cls,
        kind: UploadKind,
        filename: str,
        content: bytes,
        declared_mime: str | None = None,
        max_bytes: int | None = None,
    ) -> "Upload":
        """
        Build a descriptor, validating MIME type, size and content for ``kind``.

        The content is sniffed with libmagic; when no MIME type is declared
        the detected one is used.

        Raises:
            UploadRejectedError: If the file is empty, too large, of the wrong
                type or its content does not match the declared type
        """
        if not content:
            raise UploadRejectedError("File is empty", filename)

        detected = magic.from_buffer(content, mime=True).lower()
        mime = (declared_mime or detected).lower()

        allowed = "images" if kind is UploadKind.IMAGE else "images or PDF files"
        if not _mime_allowed(kind, mime):
            raise UploadRejectedError(f"Only {allowed} are allowed", filename)

        limit = _size_limit(kind, max_bytes)
        if len(content) > limit:
            raise UploadRejectedError(
                f"File size should be less than {limit // (1024 * 1024)}MB", filename
            )

        if not _mime_allowed(kind, detected) or _family(detected) != _family(mime):
            # The detected type stays in the logs only
            logger.warning(f"Upload content mismatch: {filename} declared {mime}, found {detected}")
            raise UploadRejectedError(
                f"File content is not valid. Only {allowed} are allowed", filename
            )

        return cls(kind=kind, filename=filename, content=content, declared_mime=mime)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        suffix = Path(self.filename).suffix.lower()
        if suffix:
            return suffix
        return mimetypes.guess_extension(self.declared_mime) or ""

    def as_multipart(self) -> tuple[str, bytes, str]:
        """Return the (filename, content, content_type) triple used by httpx."""
        return (self.filename, self.content, self.declared_mime)


def store_upload(upload: Upload, upload_dir: Path, base_url: str) -> str:
    """
    Persist an upload under ``upload_dir`` with a random name.

    Returns:
        Public URL of the stored file
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    name = f"{uuid.uuid4().hex}{upload.extension}"
    (upload_dir / name).write_bytes(upload.content)

    logger.info(f"Stored {upload.kind.value} upload: {name} ({upload.size} bytes)")
    return f"{base_url.rstrip('/')}/{name}"


async def save_upload(upload: Upload, upload_dir: Path, base_url: str) -> str:
    """``store_upload`` run in a worker thread, for async handlers."""
    return await asyncio.to_thread(store_upload, upload, upload_dir, base_url)


def delete_upload(url: str, upload_dir: Path) -> None:
    """Remove a file stored by ``store_upload``; missing files are ignored."""
    name = url.rsplit("/", 1)[-1]
    (upload_dir / name).unlink(missing_ok=True)
    logger.info(f"Deleted upload: {name}")


async def discard_uploads(urls: list[str], upload_dir: Path) -> None:
    """Delete uploads stored for a request that failed afterwards."""
    for url in urls:
        await asyncio.to_thread(delete_upload, url, upload_dir)
