"""Test package for Multi-RAG Cases.

Structure:
    - unit/: Ingestion, store, session and analysis client in isolation
    - integration/: HTTP endpoints through the real FastAPI app

The Gemini SDK is mocked in unit tests; no test needs an API key.
"""
