"""
Gapped-sentence builder for TransTip.

Blanks out the word at a position inside its sentence so the whole
context can be translated, and puts the word back, bracketed, into the
translated output.
"""
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from transtip.constants import GAP_PLACEHOLDER, GAP_PATTERN

Span = Tuple[int, int]

# Letters and digits; underscores belong to the placeholder, not to words
_WORD_RE = re.compile(r"[^\W_]+")
# Terminal punctuation (with trailing closing quotes/brackets) before
# whitespace or end of text, or a blank line
_SENTENCE_END_RE = re.compile(r"[.!?]+['\"’”)\]]*(?=\s|$)|\n[ \t]*\n")


@dataclass(frozen=True)
class GapSpec:
    """Word taken out of its sentence, and the sentence with a gap in its place."""
    target: str
    context: str


class TextBoundaries(Protocol):
    """Text-boundary queries supplied by whatever holds the text."""

    def word_bounds_at(self, position: int) -> Optional[Span]:
        ...

    def sentence_bounds_at(self, position: int) -> Optional[Span]:
        ...

    def text_between(self, start: int, end: int) -> str:
        ...


class PlainTextBoundaries:
    """Word and sentence boundaries over a plain string.

    Positions are character offsets. A position right after the last
    character of a word still belongs to that word.
    """

    def __init__(self, text: str):
        self.text = text

    def word_bounds_at(self, position: int) -> Optional[Span]:
        if not 0 <= position <= len(self.text):
            return None
        for match in _WORD_RE.finditer(self.text):
            if match.start() > position:
                break
            if position <= match.end():
                return match.span()
        return None

    def sentence_bounds_at(self, position: int) -> Optional[Span]:
        if not 0 <= position <= len(self.text):
            return None
        for start, end in self._sentences():
            if start <= position <= end:
                return start, end
            if start > position:
                break
        return None

    def text_between(self, start: int, end: int) -> str:
        return self.text[start:end]

    def _sentences(self):
        """Yield (start, end) of each sentence, surrounding whitespace excluded."""
        text = self.text
        seg_start = 0
        for match in _SENTENCE_END_RE.finditer(text):
            if match.group().strip():
                seg_end, next_start = match.end(), match.end()
            else:
                seg_end, next_start = match.start(), match.end()
            span = _strip_span(text, seg_start, seg_end)
            if span:
                yield span
            seg_start = next_start
        span = _strip_span(text, seg_start, len(text))
        if span:
            yield span


def _strip_span(text: str, start: int, end: int) -> Optional[Span]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return (start, end) if start < end else None


def build_gap(boundaries: TextBoundaries, position: int, max_context: int) -> Optional[GapSpec]:
    """Build the gapped context around the word at `position`.

    The context keeps at most `max_context` characters on each side of the
    word and never reaches past the enclosing sentence.

    Args:
        boundaries: Boundary queries over the text being read
        position: Cursor offset
        max_context: Characters of context allowed on each side

    Returns:
        GapSpec, or None if no word or no sentence contains `position`
    """
    sentence = boundaries.sentence_bounds_at(position)
    word = boundaries.word_bounds_at(position)
    if sentence is None or word is None:
        return None

    sentence_start, sentence_end = sentence
    word_start, word_end = word
    start = max(sentence_start, word_start - max_context)
    end = min(sentence_end, word_end + max_context)

    return GapSpec(
        target=boundaries.text_between(word_start, word_end),
        context=(boundaries.text_between(start, word_start)
                 + GAP_PLACEHOLDER
                 + boundaries.text_between(word_end, end))
    )


def fill_gap(translated: str, target: str) -> str:
    """Replace the first run of gap characters with the bracketed target."""
    return GAP_PATTERN.sub(lambda m: f"[{target}]", translated, count=1)
