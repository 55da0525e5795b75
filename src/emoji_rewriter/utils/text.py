"""Markup text helpers"""

import re
from typing import Final


# Five-entity escape table for attribute values
HTML_ESCAPES: Final[dict[str, str]] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39;",
    '"': "&quot;",
}

_ESCAPE_REGEX: Final[re.Pattern[str]] = re.compile(r"[&<>'\"]")

# Event handler attributes (onclick, onload, ...)
EVENT_HANDLER_PREFIX: Final[str] = "on"

_ATTRIBUTE_NAME_REGEX: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")


def escape_html(value: object) -> str:
    """Escape a value for use inside a quoted HTML attribute"""
    return _ESCAPE_REGEX.sub(lambda m: HTML_ESCAPES[m.group(0)], str(value))


def is_safe_attribute_name(name: str) -> bool:
    """Check if a caller supplied attribute name may be placed on a tag

    Event handlers and anything that is not a plain attribute token are
    rejected so callers cannot inject script or break out of the tag.
    """
    if name.lower().startswith(EVENT_HANDLER_PREFIX):
        return False
    return bool(_ATTRIBUTE_NAME_REGEX.match(name))
