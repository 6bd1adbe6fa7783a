"""
Unit tests for translation.py - selection and gapped translators.
"""
import pytest
from unittest.mock import MagicMock

from transtip.constants import GAP_PLACEHOLDER, NO_GAP_MESSAGE
from transtip.core.gap import PlainTextBoundaries
from transtip.core.process import ProcessSpawnFailure
from transtip.core.session import TranslationSession
from transtip.core.translation import SelectionTranslator, GappedTranslator

TEXT = "The quick brown fox jumps. Over the lazy dog."


@pytest.fixture
def session():
    return TranslationSession()


@pytest.fixture
def translator(mock_config, session, fake_popup, fake_invoker):
    return SelectionTranslator(mock_config, session, fake_popup, fake_invoker)


@pytest.fixture
def gapped(mock_config, fake_popup, fake_invoker):
    notify = MagicMock()
    return GappedTranslator(mock_config, fake_popup, notify, fake_invoker)


class TestSelectionSkips:
    """Selections that must not start a process."""

    def test_empty_selection(self, translator, session, fake_invoker, fake_popup):
        assert translator.translate_selection("") is False
        assert fake_invoker.calls == []
        assert fake_popup.hidden == 0
        assert session.previous_selection is None

    def test_over_length_selection(self, translator, session, fake_invoker):
        session.remember("earlier")
        assert translator.translate_selection("x" * 51, max_length=50) is False
        assert fake_invoker.calls == []
        assert session.previous_selection == "earlier"

    def test_length_at_limit_is_translated(self, translator, fake_invoker):
        assert translator.translate_selection("x" * 50, max_length=50) is True
        assert len(fake_invoker.calls) == 1

    def test_no_limit_never_skips_long_text(self, translator, fake_invoker):
        assert translator.translate_selection("word " * 500) is True
        assert len(fake_invoker.calls) == 1


class TestSelectionDispatch:
    """Tests for a translation that goes ahead."""

    def test_spawns_once_and_remembers(self, translator, session, fake_invoker):
        assert translator.translate_selection("Hund", max_length=50) is True

        assert len(fake_invoker.calls) == 1
        assert fake_invoker.calls[0]['input'] == "Hund"
        assert session.previous_selection == "Hund"

    def test_hides_popup_before_output(self, translator, fake_invoker, fake_popup):
        translator.translate_selection("Hund")
        fake_invoker.feed("dog\n")

        assert fake_popup.events == [('hide', None), ('show', "Hund → dog")]

    def test_first_lookup_is_brief(self, translator, fake_invoker):
        translator.translate_selection("Hund")
        assert fake_invoker.calls[0]['command'] == ['trans', ':de', '-b']

    def test_repeat_lookup_is_verbose(self, translator, fake_invoker):
        translator.translate_selection("Hund")
        translator.translate_selection("Hund")
        assert fake_invoker.calls[1]['command'] == ['trans', ':de']

    def test_different_selection_is_brief_again(self, translator, fake_invoker):
        translator.translate_selection("Hund")
        translator.translate_selection("Hund")
        translator.translate_selection("Katze")
        assert fake_invoker.calls[2]['command'] == ['trans', ':de', '-b']

    def test_skipped_selection_does_not_count_as_previous(self, translator, fake_invoker):
        translator.translate_selection("Hund")
        translator.translate_selection("", max_length=50)
        translator.translate_selection("Hund")
        assert fake_invoker.calls[1]['command'] == ['trans', ':de']

    def test_popup_text_has_original_arrow_and_trimmed_output(self, translator, fake_invoker, fake_popup):
        translator.translate_selection("Guten Tag")
        fake_invoker.feed("  \n Good day \n\n")

        assert fake_popup.shown[-1] == "Guten Tag → Good day"

    def test_chunks_accumulate(self, translator, fake_invoker, fake_popup):
        translator.translate_selection("Hund")
        fake_invoker.feed("do", "g\n")

        assert fake_popup.shown == ["Hund → do", "Hund → dog"]

    def test_concurrent_invocations_keep_own_output(self, translator, fake_invoker, fake_popup):
        translator.translate_selection("Hund")
        translator.translate_selection("Katze")
        fake_invoker.feed("cat", call=1)
        fake_invoker.feed("dog", call=0)

        assert fake_popup.shown == ["Katze → cat", "Hund → dog"]

    def test_spawn_failure_propagates_and_keeps_state(self, mock_config, session, fake_popup):
        invoker = MagicMock()
        invoker.invoke.side_effect = ProcessSpawnFailure(['trans'], "not found")
        translator = SelectionTranslator(mock_config, session, fake_popup, invoker)

        with pytest.raises(ProcessSpawnFailure):
            translator.translate_selection("Hund")
        assert session.previous_selection is None

    def test_exit_callback_is_passed(self, translator, fake_invoker):
        translator.translate_selection("Hund")
        on_exit = fake_invoker.calls[0]['on_exit']
        assert on_exit is not None
        on_exit(1, "boom")  # only logs


class TestGappedTranslator:
    """Tests for gapped-sentence translation."""

    def test_no_word_notifies_and_skips(self, gapped, fake_invoker, fake_popup):
        text = "   ...   "
        assert gapped.translate_gapped(PlainTextBoundaries(text), 4) is False

        gapped.notify.assert_called_once_with(NO_GAP_MESSAGE)
        assert fake_invoker.calls == []
        assert fake_popup.shown == []

    def test_sends_gapped_context_with_brief_command(self, gapped, fake_invoker):
        assert gapped.translate_gapped(PlainTextBoundaries(TEXT), TEXT.index("fox")) is True

        call = fake_invoker.calls[0]
        assert call['input'] == "The quick brown ____________ jumps."
        assert call['command'] == ['trans', ':de', '-b']
        gapped.notify.assert_not_called()

    def test_uses_configured_context(self, gapped, mock_config, fake_invoker):
        mock_config.get_max_context.return_value = 4
        gapped.translate_gapped(PlainTextBoundaries(TEXT), TEXT.index("fox"))
        assert fake_invoker.calls[0]['input'] == "own " + GAP_PLACEHOLDER + " jum"

    def test_accumulates_and_fills_gap(self, gapped, fake_invoker, fake_popup):
        gapped.translate_gapped(PlainTextBoundaries(TEXT), TEXT.index("fox"))
        fake_invoker.feed("Der schnelle ____________", " springt.\n")

        assert fake_popup.shown == [
            "Der schnelle [fox]",
            "Der schnelle [fox] springt.",
        ]

    def test_gap_arriving_in_later_chunk(self, gapped, fake_invoker, fake_popup):
        gapped.translate_gapped(PlainTextBoundaries(TEXT), TEXT.index("fox"))
        fake_invoker.feed("Der", " schnelle Fuchs ____________")

        assert fake_popup.shown[0] == "Der"
        assert fake_popup.shown[-1] == "Der schnelle Fuchs [fox]"

    def test_only_first_gap_filled(self, gapped, fake_invoker, fake_popup):
        gapped.translate_gapped(PlainTextBoundaries(TEXT), TEXT.index("fox"))
        fake_invoker.feed("____ und ____")

        assert fake_popup.shown[-1] == "[fox] und ____"

    def test_session_untouched(self, mock_config, fake_popup, fake_invoker):
        session = TranslationSession()
        gapped = GappedTranslator(mock_config, fake_popup, MagicMock(), fake_invoker)
        gapped.translate_gapped(PlainTextBoundaries(TEXT), 17)
        assert session.previous_selection is None

    def test_spawn_failure_propagates(self, mock_config, fake_popup):
        invoker = MagicMock()
        invoker.invoke.side_effect = ProcessSpawnFailure(['trans'], "not found")
        gapped = GappedTranslator(mock_config, fake_popup, MagicMock(), invoker)

        with pytest.raises(ProcessSpawnFailure):
            gapped.translate_gapped(PlainTextBoundaries(TEXT), 17)
