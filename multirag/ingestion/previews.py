"""In-process registry of local preview references.

A preview reference is a URL path under ``/previews/`` that the API layer
serves back to the browser. Each reference is allocated once at ingestion and
must be released exactly once, when its file leaves its case.
"""

import logging
import secrets

logger = logging.getLogger(__name__)

PREVIEW_PREFIX = "/previews/"


class PreviewRegistry:
    """Owns the bytes behind every live preview reference."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[bytes, str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def allocate(self, content: bytes, mime_type: str) -> str:
        """Store content and return a fresh preview reference.

        Args:
            content: Raw file bytes.
            mime_type: Media type to serve the bytes with.

        Returns:
            URL path of the form ``/previews/<token>``.
        """
        token = secrets.token_urlsafe(16)
        self._entries[token] = (content, mime_type)
        return f"{PREVIEW_PREFIX}{token}"

    def get(self, ref: str) -> tuple[bytes, str] | None:
        """Look up a preview by reference or bare token."""
        return self._entries.get(ref.removeprefix(PREVIEW_PREFIX))

    def release(self, ref: str) -> bool:
        """Free a preview reference.

        Args:
            ref: Reference returned by ``allocate``. Empty references are ignored.

        Returns:
            True if a live entry was freed.
        """
        if not ref:
            return False
        if self._entries.pop(ref.removeprefix(PREVIEW_PREFIX), None) is None:
            logger.warning(f"Release of unknown preview reference: {ref}")
            return False
        return True


# Module-level singleton shared by the UI and the API routes
_preview_registry: PreviewRegistry | None = None


def get_preview_registry() -> PreviewRegistry:
    """Get or create the global preview registry.

    Returns:
        The PreviewRegistry instance.
    """
    global _preview_registry
    if _preview_registry is None:
        _preview_registry = PreviewRegistry()
    return _preview_registry
