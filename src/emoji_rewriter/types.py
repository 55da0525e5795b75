"""Type aliases shared across the package."""

from __future__ import annotations

from typing import TypeAlias


__all__ = ["JSONMapping", "JSONPrimitive", "JSONValue"]

# Values produced by yaml.safe_load / orjson
JSONPrimitive: TypeAlias = "None | bool | int | float | str"
JSONValue: TypeAlias = "JSONPrimitive | list[JSONValue] | dict[str, JSONValue]"
JSONMapping: TypeAlias = "dict[str, JSONValue]"
