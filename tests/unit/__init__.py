"""Unit tests for individual components in isolation.

Coverage:
    - ingestion/: Classification, encoding, batch atomicity, previews
    - store/: Case lifecycle, file and message replacement
    - session/: Turn state, streaming accumulation, voice capture
    - analysis/: Configuration and request building

Uses fakes for the analysis client and mocks for the google-genai SDK.
"""
