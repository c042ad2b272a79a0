"""Integration tests for components working together.

Coverage:
    - API endpoints with real HTTP requests via ASGITransport
    - Ingestion feeding the preview endpoint
"""
