"""Multi-RAG Cases - multimodal case analysis chat over Google Gemini.

Combines NiceGUI for the chat interface, FastAPI for the HTTP surface,
google-genai for model access, and Pydantic for data validation.

Components:
    - models: Case, CaseFile and ChatMessage domain types
    - ingestion: file encoding, classification and preview references
    - store: in-memory case collection with the active-case reference
    - analysis: streaming analysis and audio transcription against Gemini
    - session: per-case conversational turns and voice capture
    - api: health and preview endpoints
    - ui: web interface for cases and chat
"""

__version__ = "0.1.0"
