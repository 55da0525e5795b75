"""Greedy longest-match emoji scanner"""

from collections.abc import Iterator
from itertools import accumulate

from emoji_rewriter.infra.sequence_loader import load_sequence_table
from emoji_rewriter.infra.sequence_table import SequenceTable
from emoji_rewriter.models.match import CodepointSequence, MatchSpan
from emoji_rewriter.utils.unicode import (
    UnicodeConstants,
    code_unit_length,
    decode_code_points,
    is_high_surrogate,
    is_low_surrogate,
)


# Stands in for unpaired surrogates during lookup; no emoji contains it
_LOOKUP_PLACEHOLDER = "\ufffd"


def _lookup_char(cp: int) -> str:
    if is_high_surrogate(cp) or is_low_surrogate(cp):
        return _LOOKUP_PLACEHOLDER
    return chr(cp)


class EmojiMatcher:
    """Find emoji sequences in text

    Matching is left to right. At each codepoint the longest registered
    sequence wins. Without a match the scan moves one codepoint on, so a
    surrogate pair is never split. A match followed by U+FE0E asked for
    text presentation and is not reported.
    """

    def __init__(self, table: SequenceTable | None = None) -> None:
        self._table = table if table is not None else load_sequence_table()

    @property
    def table(self) -> SequenceTable:
        return self._table

    def find_matches(self, text: str) -> Iterator[MatchSpan]:
        """Yield non-overlapping matches in order

        Offsets on the spans are UTF-16 code units. Every call scans from
        the start of text.
        """
        if not text:
            return

        scalars = decode_code_points(text)
        lookup = "".join(_lookup_char(cp) for cp, _, _ in scalars)
        unit_offsets = [0, *accumulate(code_unit_length(cp) for cp, _, _ in scalars)]

        i = 0
        count = len(scalars)
        while i < count:
            length = self._table.longest_match(lookup, i)
            if not length or self._text_presentation(scalars, i + length):
                i += 1
                continue
            char_start = scalars[i][1]
            char_end = scalars[i + length - 1][2]
            yield MatchSpan(
                start=unit_offsets[i],
                end=unit_offsets[i + length],
                sequence=CodepointSequence(
                    tuple(cp for cp, _, _ in scalars[i : i + length])
                ),
                text=text[char_start:char_end],
                char_start=char_start,
                char_end=char_end,
            )
            i += length

    @staticmethod
    def _text_presentation(scalars: list[tuple[int, int, int]], index: int) -> bool:
        return (
            index < len(scalars)
            and scalars[index][0] == UnicodeConstants.VARIATION_SELECTOR_15
        )

    def test(self, text: str) -> bool:
        """Check if text contains at least one emoji sequence"""
        return next(self.find_matches(text), None) is not None

    def count(self, text: str) -> int:
        return sum(1 for _ in self.find_matches(text))
