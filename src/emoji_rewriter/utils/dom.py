"""BeautifulSoup tree helpers"""

import logging
from typing import Final

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString


log = logging.getLogger(__name__)


# Elements whose text content must never be rewritten
RAW_TEXT_TAGS: Final[frozenset[str]] = frozenset(
    {"iframe", "noframes", "noscript", "script", "select", "style", "textarea"}
)

SVG_ROOT_TAG: Final[str] = "svg"

# Python attribute holding the error handler of an inserted image
ASSET_ERROR_HANDLER_ATTR: Final[str] = "_emoji_asset_error_handler"


def is_text_node(node: PageElement) -> bool:
    """Plain character data (not comments, CDATA, doctype, ...)"""
    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


def is_skipped_element(tag: Tag) -> bool:
    """Raw-text containers and inline SVG are never descended into"""
    name = (tag.name or "").lower()
    return name in RAW_TEXT_TAGS or name == SVG_ROOT_TAG


def inside_svg(node: PageElement) -> bool:
    """Check if node sits somewhere below an <svg> element"""
    return node.find_parent(SVG_ROOT_TAG) is not None


def collect_text_nodes(root: Tag) -> list[NavigableString]:
    """Depth-first list of rewritable text nodes below root"""
    found: list[NavigableString] = []
    stack: list[PageElement] = list(reversed(root.contents))
    while stack:
        node = stack.pop()
        if is_text_node(node):
            found.append(node)  # type: ignore[arg-type]
        elif isinstance(node, Tag) and not is_skipped_element(node):
            stack.extend(reversed(node.contents))
    return found


def owner_document(node: PageElement) -> BeautifulSoup | None:
    """Walk up to the BeautifulSoup object that owns node"""
    current: PageElement = node
    while current.parent is not None:
        current = current.parent
    return current if isinstance(current, BeautifulSoup) else None


def replace_with_alt_text(img: Tag) -> None:
    """Default asset error handler: swap the image for its alt text

    Safe to call more than once. A detached image is left alone.
    """
    if img.parent is None:
        return
    alt = img.get("alt", "")
    img.replace_with(NavigableString(alt if isinstance(alt, str) else "".join(alt)))
    log.debug("Emoji asset failed, fell back to text: src=%s", img.get("src"))
