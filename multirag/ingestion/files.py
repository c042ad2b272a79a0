"""File ingestion: turns raw uploads into transport-ready CaseFiles.

Reads the full content, encodes it as base64, classifies it by MIME type,
and allocates a local preview reference. Batches are all-or-nothing.
"""

import asyncio
import base64
import logging
import mimetypes
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from multirag.ingestion.previews import PreviewRegistry
from multirag.models.schemas import CaseFile, FileCategory

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class RawFile(Protocol):
    """Anything that can be ingested.

    NiceGUI's upload objects satisfy this protocol directly.
    """

    name: str
    content_type: str

    async def read(self) -> bytes: ...


class IngestionError(Exception):
    """Raised when a file cannot be read for ingestion."""

    pass


class LocalFile:
    """Raw file backed by a path on the local filesystem."""

    def __init__(self, path: Path | str, content_type: str | None = None) -> None:
        self.path = Path(path)
        self.name = self.path.name
        self.content_type = (
            content_type or mimetypes.guess_type(self.name)[0] or DEFAULT_MIME_TYPE
        )

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


def get_file_type(mime_type: str) -> FileCategory:
    """Classify a MIME type. Never fails; unknown types map to OTHER."""
    if mime_type.startswith("image/"):
        return FileCategory.IMAGE
    if mime_type.startswith("audio/"):
        return FileCategory.AUDIO
    if mime_type == "application/pdf":
        return FileCategory.PDF
    if mime_type.startswith("video/"):
        return FileCategory.VIDEO
    return FileCategory.OTHER


def encode_content(data: bytes) -> str:
    """Encode raw bytes as base64 text."""
    return base64.b64encode(data).decode("ascii")


async def _read_raw(raw: RawFile) -> bytes:
    """Read the complete content of a raw file.

    Args:
        raw: The file to read.

    Returns:
        File content as bytes.

    Raises:
        IngestionError: If the read fails for any reason.
    """
    try:
        return await raw.read()
    except Exception as e:
        raise IngestionError(f"Failed to read {raw.name}: {e}") from e


def _build_case_file(raw: RawFile, content: bytes, previews: PreviewRegistry) -> CaseFile:
    mime_type = raw.content_type or DEFAULT_MIME_TYPE
    return CaseFile(
        name=raw.name,
        category=get_file_type(mime_type),
        mime_type=mime_type,
        size_bytes=len(content),
        preview_ref=previews.allocate(content, mime_type),
        encoded_content=encode_content(content),
    )


async def ingest_file(raw: RawFile, previews: PreviewRegistry) -> CaseFile:
    """Ingest a single file.

    Args:
        raw: The file to ingest.
        previews: Registry that receives the preview reference.

    Returns:
        The encoded CaseFile.

    Raises:
        IngestionError: If the file cannot be read.
    """
    content = await _read_raw(raw)
    return _build_case_file(raw, content, previews)


async def ingest_batch(
    raws: Iterable[RawFile],
    previews: PreviewRegistry,
) -> tuple[CaseFile, ...]:
    """Ingest files submitted together.

    All reads complete before any preview is allocated, so a failed batch
    leaves nothing behind.

    Args:
        raws: Files to ingest, in submission order.
        previews: Registry that receives the preview references.

    Returns:
        CaseFiles in submission order.

    Raises:
        IngestionError: If any file in the batch cannot be read.
    """
    raws = list(raws)
    results = await asyncio.gather(*(_read_raw(raw) for raw in raws), return_exceptions=True)

    for result in results:
        if isinstance(result, BaseException):
            logger.warning(f"Dropping batch of {len(raws)} file(s): {result}")
            raise result

    return tuple(
        _build_case_file(raw, content, previews)
        for raw, content in zip(raws, results, strict=True)
    )
