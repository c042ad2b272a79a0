"""NiceGUI interface - thin visualization layer over the case store.

Responsibilities:
    - Case sidebar (new, select, delete)
    - Document upload, preview and removal
    - Chat transcript with streaming updates
    - Thinking Mode toggle and voice input

Contains minimal business logic. Delegates to the store and session controllers.
"""
