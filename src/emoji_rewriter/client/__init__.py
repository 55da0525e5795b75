"""Rewriter Client - talk to a running emoji-rewriter server over HTTP"""

from emoji_rewriter.client.rewriter_client import (
    HtmlParseResult,
    ParseResult,
    RemoteMatch,
    RewriterClient,
    RewriterClientError,
    get_rewriter_client,
)


__all__ = [
    "HtmlParseResult",
    "ParseResult",
    "RemoteMatch",
    "RewriterClient",
    "RewriterClientError",
    "get_rewriter_client",
]
