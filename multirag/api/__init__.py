"""FastAPI endpoints for Multi-RAG Cases.

Endpoints:
    - GET /health: Service health status
    - GET /previews/{token}: Content behind a document preview reference
"""

from multirag.api.app import app, create_app

__all__ = ["app", "create_app"]
