"""
Unit tests for reader.py - how reader events become translation requests.

No Tk window is created; the reader is assembled by hand around a mocked
text widget.
"""
import pytest
from unittest.mock import MagicMock

tk = pytest.importorskip("tkinter")

from transtip.core.gap import PlainTextBoundaries
from transtip.ui.reader import ReaderWindow

CONTENT = "Der Hund schläft. Die Katze spielt."
CURSOR = 24  # inside "Katze"


def _fake_text(selection):
    text = MagicMock()

    def get(start, end=None):
        if (start, end) == (tk.SEL_FIRST, tk.SEL_LAST):
            if selection is None:
                raise tk.TclError('text doesn\'t contain any characters tagged with "sel"')
            return selection
        if (start, end) == ('1.0', tk.INSERT):
            return CONTENT[:CURSOR]
        if (start, end) == ('1.0', 'end-1c'):
            return CONTENT
        raise AssertionError(f"unexpected get({start!r}, {end!r})")

    text.get.side_effect = get
    text.bbox.return_value = (5, 6, 2, 14)
    text.winfo_rootx.return_value = 100
    text.winfo_rooty.return_value = 200
    return text


def _reader(selection="Hund"):
    reader = ReaderWindow.__new__(ReaderWindow)
    reader.root = MagicMock()
    reader.text = _fake_text(selection)
    reader.max_selection_length = 50
    reader._on_translate = MagicMock()
    reader._on_translate_gapped = MagicMock()
    return reader


class TestMouseSelection:

    def test_uses_selection_length_limit(self):
        reader = _reader("Hund")
        reader._on_mouse_selection()
        reader._on_translate.assert_called_once_with("Hund", 50, (105, 220))

    def test_no_selection_does_nothing(self):
        reader = _reader(None)
        reader._on_mouse_selection()
        reader._on_translate.assert_not_called()


class TestTranslateKey:

    def test_translates_without_limit(self):
        reader = _reader("Der Hund schläft.")
        assert reader._on_translate_key() == "break"
        reader._on_translate.assert_called_once_with("Der Hund schläft.", None, (105, 220))

    def test_empty_selection_is_passed_on(self):
        reader = _reader(None)
        reader._on_translate_key()
        reader._on_translate.assert_called_once_with("", None, (105, 220))


class TestGappedKey:

    def test_passes_snapshot_and_cursor_offset(self):
        reader = _reader()
        assert reader._on_gapped_key() == "break"

        boundaries, position, anchor = reader._on_translate_gapped.call_args.args
        assert isinstance(boundaries, PlainTextBoundaries)
        assert position == CURSOR
        assert anchor == (105, 220)
        start, end = boundaries.word_bounds_at(position)
        assert boundaries.text_between(start, end) == "Katze"


class TestCursorAnchor:

    def test_falls_back_to_pointer_when_cursor_hidden(self):
        reader = _reader()
        reader.text.bbox.return_value = None
        reader.root.winfo_pointerx.return_value = 7
        reader.root.winfo_pointery.return_value = 9
        assert reader.cursor_anchor() == (7, 9)
