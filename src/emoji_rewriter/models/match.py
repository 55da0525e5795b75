"""Match result models"""

from dataclasses import dataclass
from typing import Self

from emoji_rewriter.utils.unicode import (
    UnicodeConstants,
    decode_code_points,
    from_hex_key,
)


@dataclass(frozen=True)
class CodepointSequence:
    """Scalar values of one matched emoji sequence"""

    code_points: tuple[int, ...]

    @classmethod
    def from_text(cls, text: str) -> Self:
        return cls(tuple(cp for cp, _, _ in decode_code_points(text)))

    @classmethod
    def from_hex(cls, key: str) -> Self:
        return cls.from_text(from_hex_key(key))

    def to_hex(self, separator: str = "-") -> str:
        """Lowercase hex codepoints joined by separator"""
        return separator.join(f"{cp:x}" for cp in self.code_points)

    @property
    def icon_key(self) -> str:
        """Asset file key for this sequence

        Asset sets name files without U+FE0F unless the sequence is a ZWJ
        sequence, where the selector is part of the name.
        """
        if UnicodeConstants.ZERO_WIDTH_JOINER in self.code_points:
            return self.to_hex()
        return "-".join(
            f"{cp:x}"
            for cp in self.code_points
            if cp != UnicodeConstants.VARIATION_SELECTOR_16
        )

    def __len__(self) -> int:
        return len(self.code_points)

    def __str__(self) -> str:
        return "".join(chr(cp) for cp in self.code_points)


@dataclass(frozen=True)
class MatchSpan:
    """One located emoji match

    start/end are UTF-16 code unit offsets ([start, end)), char_start and
    char_end are the matching Python string indices.
    """

    start: int
    end: int
    sequence: CodepointSequence
    text: str
    char_start: int
    char_end: int

    @property
    def key(self) -> str:
        return self.sequence.icon_key

    def as_dict(self) -> dict[str, object]:
        return {
            "start": self.start,
            "end": self.end,
            "key": self.key,
            "text": self.text,
            "code_points": self.sequence.to_hex(),
        }
