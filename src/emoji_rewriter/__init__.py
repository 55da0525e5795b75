"""emoji-rewriter - Emoji detection and <img> replacement for text and HTML"""

__version__ = "0.1.0"

from emoji_rewriter.infra.emoji_parser import (
    EmojiParser,
    find_matches,
    get_emoji_parser,
    rewrite_dom,
    rewrite_string,
)
from emoji_rewriter.models import CodepointSequence, MatchSpan, RewriteOptions
from emoji_rewriter.utils.unicode import from_code_point, to_code_point


__all__ = [
    "CodepointSequence",
    "EmojiParser",
    "MatchSpan",
    "RewriteOptions",
    "__version__",
    "find_matches",
    "from_code_point",
    "get_emoji_parser",
    "rewrite_dom",
    "rewrite_string",
    "to_code_point",
]
