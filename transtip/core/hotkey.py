"""
Global hotkey manager for TransTip.
Uses the keyboard library to listen for system-wide hotkeys.
"""
import time
import logging
import threading
from typing import Callable, Dict

import keyboard

from transtip.constants import HOTKEY_COOLDOWN


class HotkeyManager:
    """Registers the configured global hotkeys and dispatches presses.

    `callback(action)` runs on a fresh daemon thread so that slow work
    (clipboard round-trips) never blocks the keyboard hook.
    """

    def __init__(self, config, callback: Callable[[str], None]):
        self.config = config
        self.callback = callback
        self._handles: Dict[str, object] = {}
        self._last_hotkey_time = 0.0
        self._hotkey_cooldown = HOTKEY_COOLDOWN

    def configured_hotkeys(self) -> Dict[str, str]:
        """Map of action name -> hotkey combo, empty combos left out."""
        if not self.config.get_global_hotkeys_enabled():
            return {}
        combo = self.config.get_global_hotkey()
        return {'translate': combo} if combo else {}

    def register_hotkeys(self) -> int:
        """Register all configured hotkeys.

        Returns:
            Number of hotkeys registered
        """
        self.unregister_all()

        for action, combo in self.configured_hotkeys().items():
            try:
                handle = keyboard.add_hotkey(combo, self._on_hotkey, args=(action,))
            except (ValueError, ImportError, OSError) as e:
                # ImportError: the Linux backend needs root
                logging.error(f"Failed to register hotkey '{combo}' for {action}: {e}")
                continue
            self._handles[action] = handle
            logging.info(f"Registered hotkey: {combo} -> {action}")

        return len(self._handles)

    def _on_hotkey(self, action: str):
        """Handle hotkey press with debounce."""
        current_time = time.time()
        if current_time - self._last_hotkey_time < self._hotkey_cooldown:
            return

        self._last_hotkey_time = current_time
        logging.info(f"Hotkey triggered: {action}")

        threading.Thread(target=lambda: self.callback(action), daemon=True).start()

    def unregister_all(self):
        for action, handle in self._handles.items():
            try:
                keyboard.remove_hotkey(handle)
            except (KeyError, ValueError) as e:
                logging.debug(f"Hotkey for {action} already removed: {e}")
        self._handles.clear()

    def cleanup(self):
        """Unregister everything before shutdown."""
        logging.info("Cleaning up hotkey manager...")
        self.unregister_all()
