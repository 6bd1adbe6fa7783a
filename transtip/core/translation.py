"""
Translation services for TransTip.
Send a selection, or a gapped sentence, to the external translation
command and keep a popup updated with the streamed answer.
"""
import logging
from typing import Callable, List, Optional, Protocol

from config import Config
from transtip.constants import ARROW, NO_GAP_MESSAGE
from transtip.core.gap import TextBoundaries, build_gap, fill_gap
from transtip.core.process import ProcessInvoker
from transtip.core.session import TranslationSession


class Popup(Protocol):
    """Where translation results are shown."""

    def show(self, text: str) -> None:
        ...

    def hide(self) -> None:
        ...


def _log_exit(returncode: int, stderr: str) -> None:
    if returncode != 0:
        logging.warning(f"Translation command exited with {returncode}: {stderr.strip()}")


class SelectionTranslator:
    """Translates the selected text and shows it next to the original."""

    def __init__(self, config: Config, session: TranslationSession, popup: Popup,
                 invoker: Optional[ProcessInvoker] = None) -> None:
        self.config = config
        self.session = session
        self.popup = popup
        self.invoker: ProcessInvoker = invoker or ProcessInvoker()

    def build_command(self, selection_text: str) -> List[str]:
        """Command for a lookup of `selection_text`.

        A new selection gets the brief flags; looking up the same text
        again drops them so the tool prints its full answer.
        """
        command = self.config.get_command() + self.config.get_extra_args()
        if not self.session.is_repeat(selection_text):
            command += self.config.get_brief_args()
        return command

    def translate_selection(self, selection_text: str, max_length: Optional[int] = None) -> bool:
        """Translate `selection_text` and show the result in the popup.

        Args:
            selection_text: Text to translate
            max_length: Skip selections longer than this (drag-triggered calls only)

        Returns:
            True if a translation process was started

        Raises:
            ProcessSpawnFailure: if the translation command cannot be started
        """
        if not selection_text:
            logging.debug("Empty selection, nothing to translate")
            return False
        if max_length is not None and len(selection_text) > max_length:
            logging.debug(f"Selection of {len(selection_text)} chars exceeds {max_length}, skipped")
            return False

        self.popup.hide()
        command = self.build_command(selection_text)
        received: List[str] = []

        def on_chunk(chunk: str) -> None:
            received.append(chunk)
            self.popup.show(f"{selection_text}{ARROW}{''.join(received).strip()}")

        logging.info(f"Translating selection: {selection_text[:50]}")
        self.invoker.invoke(command, selection_text, on_chunk, on_exit=_log_exit)
        self.session.remember(selection_text)
        return True


class GappedTranslator:
    """Translates the sentence around a word with the word blanked out."""

    def __init__(self, config: Config, popup: Popup,
                 notify: Callable[[str], None],
                 invoker: Optional[ProcessInvoker] = None) -> None:
        self.config = config
        self.popup = popup
        self.notify = notify
        self.invoker: ProcessInvoker = invoker or ProcessInvoker()

    def build_command(self) -> List[str]:
        return self.config.get_command() + self.config.get_extra_args() + self.config.get_brief_args()

    def translate_gapped(self, boundaries: TextBoundaries, position: int) -> bool:
        """Translate the gapped sentence around the word at `position`.

        Returns:
            True if a translation process was started, False if no word or
            sentence was found (the user is told via `notify`)

        Raises:
            ProcessSpawnFailure: if the translation command cannot be started
        """
        gap = build_gap(boundaries, position, self.config.get_max_context())
        if gap is None:
            logging.info(f"No word/sentence at position {position}")
            self.notify(NO_GAP_MESSAGE)
            return False

        accumulated = ""

        def on_chunk(chunk: str) -> None:
            nonlocal accumulated
            accumulated += " " + chunk.strip()
            self.popup.show(fill_gap(accumulated, gap.target).strip())

        logging.info(f"Translating gapped context for '{gap.target}': {gap.context[:80]}")
        self.invoker.invoke(self.build_command(), gap.context, on_chunk, on_exit=_log_exit)
        return True
