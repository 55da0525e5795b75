"""Rewrite emoji in a string as <img> markup"""

import bisect
import re
from typing import Final

from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.models.match import MatchSpan
from emoji_rewriter.models.options import RewriteOptions
from emoji_rewriter.utils.text import escape_html, is_safe_attribute_name


# A well-formed opening or closing tag, comment or declaration. Attribute
# names must be plain tokens, so prose like "a < b" or "a<b x! c>d" is not a tag.
MARKUP_TAG_REGEX: Final[re.Pattern[str]] = re.compile(
    r"""
    <!--.*?-->
    | </[A-Za-z][-A-Za-z0-9:]*\s*>
    | <[!?][A-Za-z][^<>]*>
    | <[A-Za-z][-A-Za-z0-9:]*
      (?:\s+[A-Za-z_:@][-A-Za-z0-9_:.@]*
         (?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?
      )*
      \s*/?>
    """,
    re.VERBOSE | re.DOTALL,
)

# Attributes every generated image carries, in output order
BASE_ATTRIBUTES: Final[tuple[str, ...]] = ("class", "draggable", "alt", "src")


class _TagRegions:
    """Char ranges covered by markup tags, for skipping matches inside them"""

    def __init__(self, text: str) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []
        if "<" not in text:
            return
        for m in MARKUP_TAG_REGEX.finditer(text):
            self._starts.append(m.start())
            self._ends.append(m.end())

    def covers(self, index: int) -> bool:
        pos = bisect.bisect_right(self._starts, index) - 1
        return pos >= 0 and index < self._ends[pos]


def build_image_tag(match: MatchSpan, url: str, options: RewriteOptions) -> str:
    """Markup for one replaced match

    Extra attributes from options.attributes are appended unless they are
    event handlers, malformed names, or already on the tag.
    """
    attrs: dict[str, str] = {
        "class": options.class_name,
        "draggable": "false",
        "alt": str(match.sequence),
        "src": url,
    }
    for name, value in options.extra_attributes(match.key, match.text).items():
        if name in attrs or not is_safe_attribute_name(name):
            continue
        attrs[name] = str(value)

    rendered = " ".join(f'{name}="{escape_html(value)}"' for name, value in attrs.items())
    return f"<img {rendered}/>"


class StringRewriter:
    """Replace emoji in text with image markup"""

    def __init__(self, matcher: EmojiMatcher) -> None:
        self._matcher = matcher

    def rewrite(self, text: str, options: RewriteOptions) -> str:
        """Return text with every accepted match replaced by an <img> tag

        Text without matches is returned unchanged. A match the callback
        declines stays as it was. Matches inside well-formed markup tags are
        left alone, so rewriting the output again changes nothing.
        """
        regions: _TagRegions | None = None
        parts: list[str] = []
        cursor = 0

        for match in self._matcher.find_matches(text):
            if regions is None:
                regions = _TagRegions(text)
            if regions.covers(match.char_start):
                continue

            url = options.asset_url(match.key)
            if url is None:
                continue

            parts.append(text[cursor : match.char_start])
            parts.append(build_image_tag(match, url, options))
            cursor = match.char_end

        if not parts:
            return text
        parts.append(text[cursor:])
        return "".join(parts)
