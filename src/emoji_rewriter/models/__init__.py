"""Data models for emoji-rewriter"""

from emoji_rewriter.models.match import CodepointSequence, MatchSpan
from emoji_rewriter.models.options import RewriteOptions, resolve_options
from emoji_rewriter.models.sequence_pack import SequencePack, parse_sequence_pack


__all__ = [
    "CodepointSequence",
    "MatchSpan",
    "RewriteOptions",
    "SequencePack",
    "parse_sequence_pack",
    "resolve_options",
]
