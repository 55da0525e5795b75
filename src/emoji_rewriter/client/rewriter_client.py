"""Rewriter Client - async HTTP client for a running emoji-rewriter server

Usage:
    async with RewriterClient("http://127.0.0.1:40530") as client:
        html = await client.parse("Hello \U0001f600")

    # Matches with UTF-16 offsets
    for match in await client.matches("I \u2764\ufe0f emoji"):
        print(match.key, match.start, match.end)

    # HTML fragment, markup left intact
    result = await client.parse_html("<p>\U0001f44d</p>", options={"size": 36})
"""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx

from emoji_rewriter.types import JSONMapping, JSONValue


log = logging.getLogger(__name__)


DEFAULT_BASE_URL = "http://127.0.0.1:40530"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass
class ParseResult:
    """Plain text rewrite result"""

    html: str
    match_count: int
    native_supported: bool


@dataclass
class HtmlParseResult:
    """HTML fragment rewrite result"""

    html: str
    native_supported: bool


@dataclass
class RemoteMatch:
    """One emoji match reported by the server"""

    start: int
    end: int
    key: str
    text: str
    code_points: str


class RewriterClientError(RuntimeError):
    """Server answered with an error payload"""

    def __init__(self, status_code: int, error_code: str, message: str) -> None:
        super().__init__(f"{error_code} ({status_code}): {message}")
        self.status_code = status_code
        self.error_code = error_code
        self.message = message


class RewriterClient:
    """High-level client for the emoji rewrite API

    Provides typed methods for:
    - plain text and HTML rewriting
    - match listing
    - native support and health queries
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client

        Args:
            base_url: Server root, e.g. "http://127.0.0.1:40530"
            timeout: Per request timeout in seconds
            headers: Extra headers sent with every request
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = headers or {}
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RewriterClient":
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit"""
        await self.disconnect()

    async def connect(self) -> None:
        if self._http:
            return
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )
        log.info("RewriterClient connected: %s", self._base_url)

    async def disconnect(self) -> None:
        if self._http:
            await self._http.aclose()
            self._http = None
            log.info("RewriterClient disconnected")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def is_connected(self) -> bool:
        return self._http is not None

    async def _request(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> JSONValue:
        if not self._http:
            raise RuntimeError(
                "Client not connected. Use 'async with' or call connect()"
            )

        response = await self._http.request(method, path, json=payload)
        if response.is_error:
            raise self._error_from(response)
        data: JSONValue = response.json()
        return data

    @staticmethod
    def _error_from(response: httpx.Response) -> RewriterClientError:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return RewriterClientError(
                response.status_code,
                str(body.get("error_code", "HTTP_ERROR")),
                str(body.get("message", response.reason_phrase)),
            )
        return RewriterClientError(
            response.status_code, "HTTP_ERROR", response.reason_phrase
        )

    @staticmethod
    def _expect_mapping(value: JSONValue, context: str) -> JSONMapping:
        if not isinstance(value, dict):
            raise TypeError(
                f"{context} returned {type(value).__name__}, expected mapping"
            )
        return value

    @staticmethod
    def _expect_mapping_list(value: JSONValue, context: str) -> list[JSONMapping]:
        if not isinstance(value, list):
            raise TypeError(
                f"{context} returned {type(value).__name__}, expected list of mappings"
            )
        mappings: list[JSONMapping] = []
        for item in value:
            if not isinstance(item, dict):
                raise TypeError(
                    f"{context} returned non-dict item: {type(item).__name__}"
                )
            mappings.append(item)
        return mappings

    # =========================================================================
    # Rewrite Methods
    # =========================================================================

    async def parse_text(
        self,
        text: str,
        options: Mapping[str, Any] | None = None,
        *,
        force: bool = True,
    ) -> ParseResult:
        """Rewrite emoji in plain text

        Args:
            text: Input text
            options: base, size, folder, ext, class_name
            force: Rewrite even when the server renders emoji natively

        Returns:
            ParseResult with the rewritten markup
        """
        body: dict[str, Any] = {"text": text, "force": force}
        if options:
            body["options"] = dict(options)

        result = self._expect_mapping(
            await self._request("POST", "/api/emoji/parses", body), "parses"
        )
        return ParseResult(
            html=str(result["html"]),
            match_count=int(str(result["match_count"])),
            native_supported=bool(result["native_supported"]),
        )

    async def parse(self, text: str, options: Mapping[str, Any] | None = None) -> str:
        """Rewrite emoji in plain text and return only the markup"""
        return (await self.parse_text(text, options)).html

    async def parse_html(
        self,
        html: str,
        options: Mapping[str, Any] | None = None,
        *,
        force: bool = True,
    ) -> HtmlParseResult:
        """Rewrite emoji inside an HTML fragment

        Args:
            html: HTML fragment
            options: base, size, folder, ext, class_name
            force: Rewrite even when the server renders emoji natively
        """
        body: dict[str, Any] = {"html": html, "force": force}
        if options:
            body["options"] = dict(options)

        result = self._expect_mapping(
            await self._request("POST", "/api/emoji/html-parses", body), "html-parses"
        )
        return HtmlParseResult(
            html=str(result["html"]),
            native_supported=bool(result["native_supported"]),
        )

    async def matches(self, text: str) -> list[RemoteMatch]:
        """List emoji matches with UTF-16 offsets"""
        result = self._expect_mapping(
            await self._request("POST", "/api/emoji/matches", {"text": text}),
            "matches",
        )
        items = self._expect_mapping_list(result.get("matches", []), "matches.matches")
        return [
            RemoteMatch(
                start=int(str(item["start"])),
                end=int(str(item["end"])),
                key=str(item["key"]),
                text=str(item["text"]),
                code_points=str(item["code_points"]),
            )
            for item in items
        ]

    async def test(self, text: str) -> bool:
        """Check if text contains at least one emoji"""
        return bool(await self.matches(text))

    # =========================================================================
    # Status Methods
    # =========================================================================

    async def supports_native_emoji(self) -> bool:
        result = self._expect_mapping(
            await self._request("GET", "/api/emoji/support"), "support"
        )
        return bool(result["native_supported"])

    async def health(self) -> JSONMapping:
        return self._expect_mapping(await self._request("GET", "/health"), "health")


# =========================================================================
# Convenience functions
# =========================================================================


@asynccontextmanager
async def get_rewriter_client(
    base_url: str = DEFAULT_BASE_URL,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    headers: dict[str, str] | None = None,
) -> AsyncIterator[RewriterClient]:
    """Get rewriter client as async context manager

    Usage:
        async with get_rewriter_client("http://127.0.0.1:40530") as client:
            html = await client.parse("\U0001f600")
    """
    client = RewriterClient(base_url, timeout=timeout, headers=headers)
    try:
        await client.connect()
        yield client
    finally:
        await client.disconnect()
