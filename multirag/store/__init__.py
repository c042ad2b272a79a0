"""Case state container.

Injectable replacement for UI-global state: the page owns a CaseStore and
passes it to session controllers explicitly.
"""

from multirag.store.case_store import CaseStore

__all__ = ["CaseStore"]
