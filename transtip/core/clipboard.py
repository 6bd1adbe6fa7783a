"""
Clipboard access for TransTip.
Reads the foreground application's selection by simulating a copy.
"""
import time
import logging
from typing import Optional

import keyboard
import pyperclip


class ClipboardManager:
    """Clipboard helpers built on pyperclip."""

    @staticmethod
    def get_text() -> str:
        """Get text from clipboard."""
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logging.warning(f"Clipboard read failed: {e}")
            return ""

    @staticmethod
    def set_text(text: str) -> bool:
        """Set clipboard to text."""
        try:
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            logging.warning(f"Clipboard write failed: {e}")
            return False

    @classmethod
    def grab_selection(cls, attempts: int = 3) -> Optional[str]:
        """Get the currently selected text by simulating Ctrl+C.

        The previous clipboard text is restored afterwards.

        Returns:
            The selected text, or None if nothing was copied
        """
        original = cls.get_text()
        selected = None

        for attempt in range(attempts):
            cls.set_text("")
            time.sleep(0.05)

            keyboard.press_and_release('ctrl+c')
            time.sleep(0.15 + (attempt * 0.1))

            text = cls.get_text()
            if text and text.strip():
                selected = text
                break
            logging.debug(f"Copy attempt {attempt + 1} returned nothing")

        cls.set_text(original)
        return selected
