"""Unicode constants and codepoint helpers for emoji sequences"""

from typing import Final


class UnicodeConstants:
    """Code points and ranges used by emoji sequence handling"""

    ZERO_WIDTH_JOINER: Final[int] = 0x200D
    VARIATION_SELECTOR_15: Final[int] = 0xFE0E  # text presentation
    VARIATION_SELECTOR_16: Final[int] = 0xFE0F

    # Flag letters; a lone one is an emoji of its own
    REGIONAL_INDICATOR_START: Final[int] = 0x1F1E6
    REGIONAL_INDICATOR_END: Final[int] = 0x1F1FF

    # UTF-16 surrogates
    HIGH_SURROGATE_START: Final[int] = 0xD800
    HIGH_SURROGATE_END: Final[int] = 0xDBFF
    LOW_SURROGATE_START: Final[int] = 0xDC00
    LOW_SURROGATE_END: Final[int] = 0xDFFF
    SUPPLEMENTARY_PLANE_START: Final[int] = 0x10000


def is_high_surrogate(cp: int) -> bool:
    """Check if a code unit is a UTF-16 high (lead) surrogate"""
    return UnicodeConstants.HIGH_SURROGATE_START <= cp <= UnicodeConstants.HIGH_SURROGATE_END


def is_low_surrogate(cp: int) -> bool:
    """Check if a code unit is a UTF-16 low (trail) surrogate"""
    return UnicodeConstants.LOW_SURROGATE_START <= cp <= UnicodeConstants.LOW_SURROGATE_END


def combine_surrogates(high: int, low: int) -> int:
    """Decode a UTF-16 surrogate pair into a single scalar value"""
    return (
        UnicodeConstants.SUPPLEMENTARY_PLANE_START
        + ((high - UnicodeConstants.HIGH_SURROGATE_START) << 10)
        + (low - UnicodeConstants.LOW_SURROGATE_START)
    )


def code_unit_length(cp: int) -> int:
    """Number of UTF-16 code units needed to encode a codepoint"""
    return 2 if cp >= UnicodeConstants.SUPPLEMENTARY_PLANE_START else 1


def decode_code_points(text: str) -> list[tuple[int, int, int]]:
    """Decode text into (code_point, char_start, char_end) triples

    Python strings normally hold scalar values, but text that crossed a
    UTF-16 boundary may still carry surrogate pairs as two separate chars.
    Those pairs are joined here. Unpaired surrogates come back as a single
    unit of their own.
    """
    result: list[tuple[int, int, int]] = []
    i = 0
    length = len(text)
    while i < length:
        cp = ord(text[i])
        if is_high_surrogate(cp) and i + 1 < length:
            low = ord(text[i + 1])
            if is_low_surrogate(low):
                result.append((combine_surrogates(cp, low), i, i + 2))
                i += 2
                continue
        result.append((cp, i, i + 1))
        i += 1
    return result


def to_code_point(text: str, separator: str = "-") -> str:
    """Serialize text as lowercase hex codepoints joined by separator

    >>> to_code_point("\\U0001F600")
    '1f600'
    """
    return separator.join(f"{cp:x}" for cp, _, _ in decode_code_points(text))


def from_code_point(cp: int | str) -> str:
    """Build the string for a single codepoint given as int or hex string"""
    value = int(cp, 16) if isinstance(cp, str) else cp
    return chr(value)


def from_hex_key(key: str, separator: str = "-") -> str:
    """Inverse of to_code_point for a separator-joined key"""
    return "".join(from_code_point(part) for part in key.split(separator) if part)
