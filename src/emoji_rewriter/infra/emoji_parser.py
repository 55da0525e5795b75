"""Emoji parser facade

Ties the matcher, both rewriters and the capability probe together.
parse() always rewrites. parse_emoji() and parse_dom_for_emoji() are the
page-level conveniences that step aside when emoji render natively.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any, TypeAlias, TypeVar, overload

from bs4 import Tag

from emoji_rewriter.config.settings import AssetSettings, get_settings
from emoji_rewriter.infra.capability_probe import CapabilityProbe, get_capability_probe
from emoji_rewriter.infra.dom_rewriter import DomRewriter
from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.infra.string_rewriter import StringRewriter
from emoji_rewriter.models.match import MatchSpan
from emoji_rewriter.models.options import (
    ReplacementCallback,
    RewriteOptions,
    resolve_options,
)


log = logging.getLogger(__name__)


OptionsInput: TypeAlias = "RewriteOptions | Mapping[str, Any] | ReplacementCallback | None"
T = TypeVar("T", bound=Tag)


class EmojiParser:
    """Emoji detection and replacement for strings and DOM trees"""

    def __init__(
        self,
        settings: AssetSettings | None = None,
        matcher: EmojiMatcher | None = None,
        probe: CapabilityProbe | None = None,
    ) -> None:
        self._settings = settings or get_settings().assets
        self._matcher = matcher or EmojiMatcher()
        self._probe = probe or get_capability_probe()
        self._strings = StringRewriter(self._matcher)
        self._dom = DomRewriter(self._matcher)

    @property
    def matcher(self) -> EmojiMatcher:
        return self._matcher

    @property
    def probe(self) -> CapabilityProbe:
        return self._probe

    def resolve(self, options: OptionsInput = None) -> RewriteOptions:
        return resolve_options(options, self._settings)

    def fallback_options(self) -> RewriteOptions:
        """Options used by the page-level conveniences"""
        defaults = RewriteOptions.from_settings(self._settings)
        return RewriteOptions(
            base=defaults.base,
            size=defaults.size,
            ext=defaults.ext,
            class_name=self._settings.fallback_class_name,
        )

    # -------------------------------------------------------------------------
    # Primitives (always rewrite)
    # -------------------------------------------------------------------------

    def find_matches(self, text: str) -> Iterator[MatchSpan]:
        return self._matcher.find_matches(text)

    def test(self, text: str) -> bool:
        return self._matcher.test(text)

    def rewrite_string(self, text: str, options: OptionsInput = None) -> str:
        return self._strings.rewrite(text, self.resolve(options))

    def rewrite_dom(self, root: T, options: OptionsInput = None) -> T:
        self._dom.rewrite(root, self.resolve(options))
        return root

    @overload
    def parse(self, target: str, options: OptionsInput = None) -> str: ...
    @overload
    def parse(self, target: T, options: OptionsInput = None) -> T: ...

    def parse(self, target: Any, options: OptionsInput = None) -> Any:
        """Rewrite a string or a DOM tree regardless of native support"""
        if isinstance(target, str):
            return self.rewrite_string(target, options)
        return self.rewrite_dom(target, options)

    def report_asset_error(self, img: Tag) -> None:
        self._dom.report_asset_error(img)

    # -------------------------------------------------------------------------
    # Page-level conveniences
    # -------------------------------------------------------------------------

    def supports_native_emoji(self) -> bool:
        return self._probe.supports_native_emoji()

    def parse_emoji(self, text: str) -> str:
        if self.supports_native_emoji():
            return text
        return self._strings.rewrite(text, self.fallback_options())

    def parse_dom_for_emoji(self, root: T) -> T:
        if self.supports_native_emoji():
            return root
        self._dom.rewrite(root, self.fallback_options())
        return root


_parser: EmojiParser | None = None


def get_emoji_parser() -> EmojiParser:
    """Get emoji parser singleton"""
    global _parser
    if _parser is None:
        _parser = EmojiParser()
        log.info("EmojiParser initialized: sequences=%d", len(_parser.matcher.table))
    return _parser


def find_matches(text: str) -> Iterator[MatchSpan]:
    return get_emoji_parser().find_matches(text)


def rewrite_string(text: str, options: OptionsInput = None) -> str:
    return get_emoji_parser().rewrite_string(text, options)


def rewrite_dom(root: T, options: OptionsInput = None) -> T:
    return get_emoji_parser().rewrite_dom(root, options)
