"""
Translation session state for TransTip.
"""
import threading
from typing import Optional


class TranslationSession:
    """Remembers the last selection sent for translation.

    Only used to tell a repeated lookup of the same text apart from a new
    one. Lives for one application run and is never written to disk.
    """

    def __init__(self) -> None:
        self._previous: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def previous_selection(self) -> Optional[str]:
        with self._lock:
            return self._previous

    def remember(self, selection: Optional[str]) -> None:
        with self._lock:
            self._previous = selection

    def is_repeat(self, selection: str) -> bool:
        """True if `selection` equals the last translated selection."""
        with self._lock:
            return self._previous is not None and self._previous == selection

    def clear(self) -> None:
        self.remember(None)
