"""Sequence pack models

A sequence pack is a YAML file that adjusts the emoji match table:

    version: 1
    include:
      - "1f9d1-200d-1f91d-200d-1f9d1"
    exclude:
      - "a9"
      - "ae"

Sequences are written as hyphen-joined hex codepoints so invisible joiners
and selectors stay readable in the file.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from emoji_rewriter.exceptions import SequencePackError
from emoji_rewriter.models.match import CodepointSequence
from emoji_rewriter.types import JSONValue


HEX_KEY_REGEX: Final[re.Pattern[str]] = re.compile(r"^[0-9a-fA-F]{1,6}(-[0-9a-fA-F]{1,6})*$")
MAX_CODE_POINT: Final[int] = 0x10FFFF


@dataclass
class SequencePack:
    """Sequences to add to and remove from the match table"""

    version: int
    include: list[CodepointSequence] = field(default_factory=list)
    exclude: list[CodepointSequence] = field(default_factory=list)


def parse_hex_key(value: JSONValue, field_name: str) -> CodepointSequence:
    """Parse a "1f468-200d-1f4bb" style key"""
    if not isinstance(value, str) or not HEX_KEY_REGEX.match(value.strip()):
        raise SequencePackError(f"{field_name} entry {value!r} is not a hex key")
    code_points = tuple(int(part, 16) for part in value.strip().split("-"))
    if any(cp > MAX_CODE_POINT for cp in code_points):
        raise SequencePackError(f"{field_name} entry {value!r} is out of range")
    return CodepointSequence(code_points)


def _parse_key_list(data: Mapping[str, JSONValue], field_name: str) -> list[CodepointSequence]:
    raw = data.get(field_name, [])
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SequencePackError(f"{field_name} must be a list")
    return [parse_hex_key(item, field_name) for item in raw]


def parse_sequence_pack(data: Mapping[str, JSONValue]) -> SequencePack:
    """Parse a sequence pack from a dictionary (YAML)"""
    version = data.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool):
        raise SequencePackError("version must be an integer")

    return SequencePack(
        version=version,
        include=_parse_key_list(data, "include"),
        exclude=_parse_key_list(data, "exclude"),
    )
