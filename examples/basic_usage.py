#!/usr/bin/env python3
"""Basic usage example for emoji-rewriter

Library usage needs nothing running. For the HTTP part start the server
first:
    emoji-rewriter

Then run this example:
    python examples/basic_usage.py
"""

import asyncio

from bs4 import BeautifulSoup

from emoji_rewriter import find_matches, get_emoji_parser, rewrite_dom, rewrite_string
from emoji_rewriter.client import RewriterClient, RewriterClientError


def local_examples() -> None:
    # 1. Plain text
    print("=== String Rewrite ===")
    print(rewrite_string("Hello \U0001f600 world"))
    print()

    # 2. Options: numeric size, custom class, extra attributes
    print("=== Options ===")
    html = rewrite_string(
        "Ship it \U0001f680",
        {
            "size": 36,
            "className": "icon",
            "attributes": lambda key, raw: {"title": key, "onclick": "dropped"},
        },
    )
    print(f"{html}\n")

    # 3. Custom callback: only keep flags as images
    print("=== Callback ===")
    flags_only = rewrite_string(
        "\U0001f1fa\U0001f1f8 vs \U0001f600",
        lambda key, options: f"/flags/{key}.svg" if len(key.split("-")) == 2 else False,
    )
    print(f"{flags_only}\n")

    # 4. Matches with UTF-16 offsets
    print("=== Matches ===")
    for match in find_matches("I \u2764\ufe0f \U0001f9d1\u200d\U0001f91d\u200d\U0001f9d1"):
        print(f"  {match.key} [{match.start}, {match.end})")
    print()

    # 5. HTML tree, script content untouched
    print("=== DOM Rewrite ===")
    soup = BeautifulSoup(
        "<p>\U0001f44d<script>var s = '\U0001f44d';</script></p>", "html.parser"
    )
    rewrite_dom(soup)
    print(f"{soup}\n")

    # 6. Page-level convenience (skipped when emoji render natively)
    parser = get_emoji_parser()
    print(f"Native emoji support: {parser.supports_native_emoji()}")
    fallback = parser.parse_emoji("Fallback \U0001f996")
    print(f"{fallback}\n")


async def remote_examples() -> None:
    async with RewriterClient() as client:
        print("=== HTTP API ===")
        try:
            result = await client.parse_text("Remote \U0001f389", {"size": 72})
        except RewriterClientError as e:
            print(f"Server error: {e}")
            return
        print(f"Rewritten: {result.html} (matches: {result.match_count})")

        matches = await client.matches("\U0001f44d\U0001f3fd")
        print(f"Matches: {[m.key for m in matches]}")


if __name__ == "__main__":
    local_examples()
    asyncio.run(remote_examples())
