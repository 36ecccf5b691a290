"""In-process store for wizard drafts.

Drafts are authoring-session state and are never written to the document
store; abandoning a session simply leaves the draft here until it is
discarded or the process exits.
"""

from __future__ import annotations

import threading

from src.components.wizard import WizardDraft


class InMemoryDraftStore:
    def __init__(self) -> None:
        self._drafts: dict[str, WizardDraft] = {}
        self._lock = threading.Lock()

    def get(self, draft_id: str) -> WizardDraft | None:
        with self._lock:
            return self._drafts.get(draft_id)

    def save(self, draft: WizardDraft) -> None:
        with self._lock:
            self._drafts[draft.id] = draft

    def discard(self, draft_id: str) -> None:
        with self._lock:
            self._drafts.pop(draft_id, None)

    def clear(self) -> None:
        with self._lock:
            self._drafts.clear()
