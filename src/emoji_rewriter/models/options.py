"""Rewrite options"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from emoji_rewriter.config.settings import AssetSettings, get_settings, to_size_folder
from emoji_rewriter.exceptions import InvalidOptionError
from emoji_rewriter.utils.dom import replace_with_alt_text


if TYPE_CHECKING:
    from bs4 import Tag


ReplacementCallback: TypeAlias = "Callable[[str, RewriteOptions], str | bool | None]"
AttributesCallback: TypeAlias = "Callable[[str, str], Mapping[str, object] | None]"
AssetErrorHandler: TypeAlias = "Callable[[Tag], None]"


def default_asset_url(key: str, options: RewriteOptions) -> str:
    """base + size + "/" + key + ext"""
    return f"{options.base}{options.size}/{key}{options.ext}"


def no_attributes(key: str, raw: str) -> None:
    return None


@dataclass(frozen=True)
class RewriteOptions:
    """Resolved options for one rewrite call

    callback(key, options) returns the asset URL, or a falsy value to leave
    the match as text. attributes(key, raw) returns extra image attributes.
    onerror(img) runs when an inserted image fails to load.
    """

    base: str
    size: str
    ext: str
    class_name: str
    callback: ReplacementCallback = default_asset_url
    attributes: AttributesCallback = no_attributes
    onerror: AssetErrorHandler = replace_with_alt_text

    @classmethod
    def from_settings(cls, settings: AssetSettings | None = None) -> RewriteOptions:
        assets = settings or get_settings().assets
        return cls(
            base=assets.effective_base,
            size=assets.size,
            ext=assets.ext,
            class_name=assets.class_name,
        )

    def asset_url(self, key: str) -> str | None:
        """Run the replacement callback, normalizing falsy results to None"""
        url = self.callback(key, self)
        return str(url) if url else None

    def extra_attributes(self, key: str, raw: str) -> Mapping[str, object]:
        return self.attributes(key, raw) or {}


_CLASS_NAME_KEYS = ("className", "class_name")


def _require_callable(name: str, value: Any) -> Any:
    if not callable(value):
        raise InvalidOptionError(name, "must be callable")
    return value


def _size_from(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise InvalidOptionError("size", "must be a number or a folder name")
    return to_size_folder(value)


def resolve_options(
    options: RewriteOptions | Mapping[str, Any] | ReplacementCallback | None = None,
    settings: AssetSettings | None = None,
) -> RewriteOptions:
    """Build RewriteOptions from the shorthand forms callers may pass

    - None: all defaults
    - a callable: used as the replacement callback
    - a mapping: base, ext, size, folder, className/class_name, callback,
      attributes, onerror. folder wins over size, a numeric size becomes
      "NxN".
    """
    if isinstance(options, RewriteOptions):
        return options

    defaults = RewriteOptions.from_settings(settings)
    if options is None:
        return defaults
    if callable(options):
        return RewriteOptions(
            base=defaults.base,
            size=defaults.size,
            ext=defaults.ext,
            class_name=defaults.class_name,
            callback=options,
        )
    if not isinstance(options, Mapping):
        raise InvalidOptionError(
            "options", "expected a mapping, a callable or RewriteOptions"
        )

    base = options.get("base")
    folder = options.get("folder")
    size = options.get("size")
    class_name = next(
        (options[k] for k in _CLASS_NAME_KEYS if options.get(k)), defaults.class_name
    )

    callback = options.get("callback") or default_asset_url
    attributes = options.get("attributes") or no_attributes
    onerror = options.get("onerror") or replace_with_alt_text

    return RewriteOptions(
        base=base if isinstance(base, str) else defaults.base,
        size=str(folder) if folder else (_size_from(size) if size else defaults.size),
        ext=str(options.get("ext") or defaults.ext),
        class_name=str(class_name),
        callback=_require_callable("callback", callback),
        attributes=_require_callable("attributes", attributes),
        onerror=_require_callable("onerror", onerror),
    )
