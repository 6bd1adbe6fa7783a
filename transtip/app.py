"""
Main Application for TransTip.
"""
import queue
import logging
import tkinter as tk
from typing import Callable, Optional

import ttkbootstrap as ttk

from config import Config
from transtip.constants import VERSION, APP_NAME, QUEUE_POLL_MS
from transtip.core.clipboard import ClipboardManager
from transtip.core.gap import TextBoundaries
from transtip.core.hotkey import HotkeyManager
from transtip.core.process import ProcessInvoker, ProcessSpawnFailure
from transtip.core.session import TranslationSession
from transtip.core.translation import SelectionTranslator, GappedTranslator
from transtip.ui.reader import ReaderWindow, Anchor
from transtip.ui.toast import ToastManager
from transtip.ui.tooltip import TooltipManager


class QueuedPopup:
    """Popup that hands every call to the Tk main loop.

    Translation output arrives on worker threads; Tk widgets may only be
    touched from the thread running mainloop().
    """

    def __init__(self, ui_queue: "queue.Queue[Callable[[], None]]", tooltip: TooltipManager):
        self._queue = ui_queue
        self._tooltip = tooltip

    def show(self, text: str) -> None:
        self._queue.put(lambda: self._tooltip.show(text))

    def hide(self) -> None:
        self._queue.put(self._tooltip.close)


class TranslatorApp:
    """Main application class."""

    def __init__(self, config: Optional[Config] = None, open_path: Optional[str] = None,
                 enable_hotkeys: bool = True):
        self.config = config or Config()

        self.root = ttk.Window(themename=self.config.get_theme())
        self.root.withdraw()
        self.root.protocol("WM_DELETE_WINDOW", self.quit_app)

        # Work posted from worker threads, drained by _check_queue
        self.ui_queue: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self.running = True

        self.invoker = ProcessInvoker()
        self.session = TranslationSession()

        self.toast = ToastManager(self.root)
        self.tooltip_manager = TooltipManager(self.root)
        self.tooltip_manager.configure_callbacks(on_copy=self._on_tooltip_copy)

        popup = QueuedPopup(self.ui_queue, self.tooltip_manager)
        self.selection_translator = SelectionTranslator(self.config, self.session, popup, self.invoker)
        self.gapped_translator = GappedTranslator(self.config, popup, self._notify, self.invoker)

        self.reader = ReaderWindow(
            self.root,
            reader_keys=self.config.get_reader_keys(),
            max_selection_length=self.config.get_max_selection_length(),
            on_translate=self._on_reader_translate,
            on_translate_gapped=self._on_reader_translate_gapped
        )
        self.reader.on_close(self.quit_app)
        if open_path:
            self.reader.open_file(open_path)

        self.hotkey_manager: Optional[HotkeyManager] = None
        if enable_hotkeys:
            self.hotkey_manager = HotkeyManager(self.config, self._on_hotkey)

    def _post(self, func: Callable[[], None]):
        """Run `func` on the main loop."""
        self.ui_queue.put(func)

    def _notify(self, message: str):
        self._post(lambda: self.toast.show_info(message))

    def _report_spawn_failure(self, error: ProcessSpawnFailure):
        message = str(error)
        logging.error(f"Translation failed: {message}")
        self._post(lambda: self.toast.show_error(message))

    def _on_reader_translate(self, text: str, max_length: Optional[int], anchor: Anchor):
        self._post(lambda: self.tooltip_manager.set_anchor(*anchor))
        try:
            self.selection_translator.translate_selection(text, max_length)
        except ProcessSpawnFailure as e:
            self._report_spawn_failure(e)

    def _on_reader_translate_gapped(self, boundaries: TextBoundaries, position: int, anchor: Anchor):
        self._post(lambda: self.tooltip_manager.set_anchor(*anchor))
        try:
            self.gapped_translator.translate_gapped(boundaries, position)
        except ProcessSpawnFailure as e:
            self._report_spawn_failure(e)

    def _on_hotkey(self, action: str):
        """Handle a global hotkey press (runs on a worker thread).

        Args:
            action: Hotkey action name; only 'translate' is bound globally
        """
        if action != 'translate':
            logging.warning(f"Unknown hotkey action: {action}")
            return

        try:
            selected_text = ClipboardManager.grab_selection()
        except (ImportError, OSError) as e:
            logging.error(f"Could not read the selection: {e}")
            self._post(lambda: self.toast.show_error("Could not read the selection"))
            return

        if not selected_text:
            logging.warning("No text selected")
            self._notify("No text selected. Please select text and try again.")
            return

        # Capture mouse position before the popup calls queued by the translator
        self._post(self.tooltip_manager.capture_mouse_position)
        try:
            self.selection_translator.translate_selection(selected_text)
        except ProcessSpawnFailure as e:
            self._report_spawn_failure(e)

    def _on_tooltip_copy(self, text: str) -> bool:
        if not ClipboardManager.set_text(text):
            self.toast.show_error("Could not copy to the clipboard")
            return False
        return True

    def _check_queue(self):
        """Run UI work posted by worker threads."""
        try:
            while True:
                func = self.ui_queue.get_nowait()
                try:
                    func()
                except tk.TclError as e:
                    logging.warning(f"UI update skipped: {e}")
                except Exception as e:
                    logging.error(f"Error processing queue: {e}", exc_info=True)
        except queue.Empty:
            pass

        if self.running:
            try:
                self.root.after(QUEUE_POLL_MS, self._check_queue)
            except tk.TclError as e:
                logging.error(f"Error scheduling queue check: {e}")

    def quit_app(self):
        """Stop translations, release hotkeys and close the windows."""
        if not self.running:
            return
        self.running = False
        logging.info("Shutting down...")

        self.invoker.cancel_all()
        self.toast.dismiss_all()
        if self.hotkey_manager:
            self.hotkey_manager.cleanup()

        try:
            self.root.quit()
            self.root.destroy()
        except tk.TclError as e:
            logging.warning(f"Error closing root window: {e}")

        logging.info("Application shutdown complete")

    def run(self):
        """Run the application."""
        print("=" * 50)
        print(f"{APP_NAME} v{VERSION}")
        print("=" * 50)
        print()
        print(f"Command: {' '.join(self.config.get_command() + self.config.get_extra_args())}")
        keys = self.config.get_reader_keys()
        print(f"Reader: drag to translate (up to {self.config.get_max_selection_length()} chars), "
              f"{keys['translate']} translates the selection, {keys['gapped']} the gapped sentence")

        if self.hotkey_manager and self.hotkey_manager.register_hotkeys():
            print(f"Global: {self.config.get_global_hotkey()} translates the selection in any app")
        print("-" * 50)

        self.root.after(QUEUE_POLL_MS, self._check_queue)

        try:
            logging.info("Starting main loop")
            self.root.mainloop()
        except KeyboardInterrupt:
            logging.info("Keyboard interrupt received")
        finally:
            self.quit_app()
