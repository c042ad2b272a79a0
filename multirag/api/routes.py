"""Preview endpoint for case documents.

Serves the bytes behind a preview reference so the browser can render
thumbnails and players for ingested files.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from multirag.ingestion.previews import get_preview_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/previews", tags=["previews"])


@router.get("/{token}")
async def get_preview(token: str) -> Response:
    """Return the content behind a preview reference.

    Args:
        token: Token part of a ``/previews/<token>`` reference.

    Returns:
        The stored bytes with their original media type.

    Raises:
        404: Reference unknown or already released.
    """
    entry = get_preview_registry().get(token)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Preview not found",
        )

    content, mime_type = entry
    return Response(content=content, media_type=mime_type)
