"""Rewrite emoji inside a BeautifulSoup tree"""

import logging

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement

from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.models.match import MatchSpan
from emoji_rewriter.models.options import RewriteOptions
from emoji_rewriter.utils.dom import (
    ASSET_ERROR_HANDLER_ATTR,
    collect_text_nodes,
    inside_svg,
    owner_document,
)
from emoji_rewriter.utils.text import is_safe_attribute_name
from emoji_rewriter.utils.unicode import UnicodeConstants


log = logging.getLogger(__name__)


_SELECTOR_16 = chr(UnicodeConstants.VARIATION_SELECTOR_16)


def _gap_text(text: str) -> NavigableString:
    return NavigableString(text.replace(_SELECTOR_16, ""))


class DomRewriter:
    """Replace emoji text runs with <img> elements, in place

    Only text nodes that contain matches are replaced, each with a single
    replace_with call. Text around the images loses stray U+FE0F selectors,
    which would otherwise render as boxes next to them. Script-like
    containers and inline SVG are skipped.
    """

    def __init__(self, matcher: EmojiMatcher) -> None:
        self._matcher = matcher

    def rewrite(self, root: Tag, options: RewriteOptions) -> Tag:
        if inside_svg(root):
            return root

        factory = owner_document(root) or BeautifulSoup("", "html.parser")
        replaced = 0
        for node in collect_text_nodes(root):
            if self._rewrite_node(node, factory, options):
                replaced += 1

        if replaced:
            log.debug("Rewrote emoji in %d text node(s)", replaced)
        return root

    def _rewrite_node(
        self,
        node: NavigableString,
        factory: BeautifulSoup,
        options: RewriteOptions,
    ) -> bool:
        text = str(node)
        fragment: list[PageElement] = []
        cursor = 0
        changed = False

        for match in self._matcher.find_matches(text):
            if match.char_start != cursor:
                fragment.append(_gap_text(text[cursor : match.char_start]))
            cursor = match.char_end

            url = options.asset_url(match.key)
            if url is None:
                fragment.append(NavigableString(match.text))
                continue
            fragment.append(self._build_image(factory, match, url, options))
            changed = True

        if not changed:
            return False
        if cursor < len(text):
            fragment.append(_gap_text(text[cursor:]))
        node.replace_with(*fragment)
        return True

    @staticmethod
    def _build_image(
        factory: BeautifulSoup,
        match: MatchSpan,
        url: str,
        options: RewriteOptions,
    ) -> Tag:
        img = factory.new_tag("img")
        img["class"] = options.class_name
        img["draggable"] = "false"
        img["alt"] = str(match.sequence)
        img["src"] = url
        for name, value in options.extra_attributes(match.key, match.text).items():
            if name in img.attrs or not is_safe_attribute_name(name):
                continue
            img[name] = str(value)
        setattr(img, ASSET_ERROR_HANDLER_ATTR, options.onerror)
        return img

    @staticmethod
    def report_asset_error(img: Tag) -> None:
        """Run the error handler registered on an inserted image

        Called by whatever loads the asset. Images this rewriter did not
        create are ignored.
        """
        handler = vars(img).get(ASSET_ERROR_HANDLER_ATTR)
        if handler is not None:
            handler(img)
