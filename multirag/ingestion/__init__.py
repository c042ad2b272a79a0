"""File ingestion for case documents.

Transforms uploaded files into CaseFiles the model can consume directly.

Responsibilities:
    - Full-content read and base64 encoding
    - MIME type classification (image, audio, pdf, video, other)
    - Preview reference allocation and release
    - All-or-nothing batch ingestion
"""

from multirag.ingestion.files import (
    IngestionError,
    LocalFile,
    encode_content,
    get_file_type,
    ingest_batch,
    ingest_file,
)
from multirag.ingestion.previews import PreviewRegistry, get_preview_registry

__all__ = [
    "IngestionError",
    "LocalFile",
    "PreviewRegistry",
    "encode_content",
    "get_file_type",
    "get_preview_registry",
    "ingest_batch",
    "ingest_file",
]
