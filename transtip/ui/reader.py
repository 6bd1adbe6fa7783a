"""
Reader window for TransTip.

A plain text area with the translation bindings attached: mouse
selections are translated automatically (up to a length limit), one key
translates the selection without a limit and another translates the
sentence around the word at the insert cursor with that word blanked out.
"""
import logging
import tkinter as tk
from tkinter import BOTH, RIGHT, LEFT, Y
from typing import Callable, Dict, Optional, Tuple

import ttkbootstrap as ttk

from transtip.constants import APP_NAME
from transtip.core.gap import PlainTextBoundaries

Anchor = Tuple[int, int]


class ReaderWindow:
    """Text host that turns mouse and key events into translation requests.

    Args:
        root: Root Tk window
        reader_keys: Tk event sequences for 'translate' and 'gapped'
        max_selection_length: Limit for mouse-triggered translation
        on_translate: Called with (text, max_length, anchor)
        on_translate_gapped: Called with (boundaries, position, anchor)
    """

    def __init__(self, root: tk.Tk, reader_keys: Dict[str, str], max_selection_length: int,
                 on_translate: Callable[[str, Optional[int], Anchor], None],
                 on_translate_gapped: Callable[[PlainTextBoundaries, int, Anchor], None]):
        self.root = root
        self.reader_keys = reader_keys
        self.max_selection_length = max_selection_length
        self._on_translate = on_translate
        self._on_translate_gapped = on_translate_gapped

        self.window = tk.Toplevel(root)
        self.window.title(APP_NAME)
        self.window.geometry("760x520")
        self.window.minsize(400, 240)

        frame = ttk.Frame(self.window, padding=8)
        frame.pack(fill=BOTH, expand=True)

        scrollbar = ttk.Scrollbar(frame, orient=tk.VERTICAL)
        scrollbar.pack(side=RIGHT, fill=Y)
        self.text = tk.Text(frame, wrap=tk.WORD, undo=True, font=('Segoe UI', 12),
                            yscrollcommand=scrollbar.set, padx=8, pady=8)
        self.text.pack(side=LEFT, fill=BOTH, expand=True)
        scrollbar.configure(command=self.text.yview)

        self._bind_triggers()

    def _bind_triggers(self):
        # Plain, double- and triple-click drags all end in a button release
        self.text.bind('<ButtonRelease-1>', lambda e: self.text.after_idle(self._on_mouse_selection), add='+')
        self.text.bind(self.reader_keys['translate'], self._on_translate_key)
        self.text.bind(self.reader_keys['gapped'], self._on_gapped_key)
        logging.info(f"Reader keys: translate={self.reader_keys['translate']}, "
                     f"gapped={self.reader_keys['gapped']}")

    # Host queries
    def current_selection_text(self) -> str:
        try:
            return self.text.get(tk.SEL_FIRST, tk.SEL_LAST)
        except tk.TclError:
            return ""  # No selection

    def cursor_position(self) -> int:
        """Insert cursor as a character offset from the start of the text."""
        return len(self.text.get('1.0', tk.INSERT))

    def boundaries(self) -> PlainTextBoundaries:
        """Boundary queries over a snapshot of the current text."""
        return PlainTextBoundaries(self.text.get('1.0', 'end-1c'))

    def cursor_anchor(self) -> Anchor:
        """Screen coordinates just below the insert cursor."""
        bbox = self.text.bbox(tk.INSERT)
        if bbox is None:
            return self.root.winfo_pointerx(), self.root.winfo_pointery()
        x, y, _, height = bbox
        return self.text.winfo_rootx() + x, self.text.winfo_rooty() + y + height

    # Event handlers
    def _on_mouse_selection(self):
        selection = self.current_selection_text()
        if selection:
            self._on_translate(selection, self.max_selection_length, self.cursor_anchor())

    def _on_translate_key(self, event=None):
        self._on_translate(self.current_selection_text(), None, self.cursor_anchor())
        return "break"

    def _on_gapped_key(self, event=None):
        self._on_translate_gapped(self.boundaries(), self.cursor_position(), self.cursor_anchor())
        return "break"

    # Content
    def set_text(self, content: str):
        self.text.delete('1.0', tk.END)
        self.text.insert('1.0', content)
        self.text.mark_set(tk.INSERT, '1.0')

    def open_file(self, path: str):
        """Load a UTF-8 text file into the reader."""
        with open(path, 'r', encoding='utf-8') as f:
            self.set_text(f.read())
        self.window.title(f"{APP_NAME} - {path}")
        logging.info(f"Opened {path}")

    def on_close(self, callback: Callable[[], None]):
        self.window.protocol("WM_DELETE_WINDOW", callback)
