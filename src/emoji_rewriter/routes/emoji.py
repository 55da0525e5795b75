"""Emoji rewrite routes."""

from typing import Any

from bs4 import BeautifulSoup
from fastapi import APIRouter
from pydantic import BaseModel, Field

from emoji_rewriter.config.settings import get_settings
from emoji_rewriter.exceptions import InputTooLargeError
from emoji_rewriter.infra.emoji_parser import get_emoji_parser


router = APIRouter(prefix="/api/emoji", tags=["Emoji"])


class AssetOptions(BaseModel):
    """Subset of rewrite options that can travel over JSON"""

    base: str | None = Field(None, description="Asset base URL")
    size: int | str | None = Field(None, description="Size folder or bare number")
    folder: str | None = Field(None, description="Folder name, wins over size")
    ext: str | None = Field(None, description="File extension, e.g. .svg")
    class_name: str | None = Field(None, description="CSS class for images")

    def as_mapping(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ParseRequest(BaseModel):
    """Plain text rewrite request"""

    text: str
    options: AssetOptions | None = None
    force: bool = Field(
        True, description="Rewrite even with native emoji support; options are ignored when false"
    )


class HtmlParseRequest(BaseModel):
    """HTML fragment rewrite request"""

    html: str
    options: AssetOptions | None = None
    force: bool = Field(
        True, description="Rewrite even with native emoji support; options are ignored when false"
    )


class ParseResponse(BaseModel):
    html: str
    match_count: int
    native_supported: bool


class HtmlParseResponse(BaseModel):
    html: str
    native_supported: bool


class MatchesRequest(BaseModel):
    text: str


class MatchItem(BaseModel):
    start: int
    end: int
    key: str
    text: str
    code_points: str


class MatchesResponse(BaseModel):
    matches: list[MatchItem]


class SupportResponse(BaseModel):
    native_supported: bool
    mode: str


def _ensure_within_limit(field: str, value: str) -> None:
    limit = get_settings().http.max_input_chars
    if len(value) > limit:
        raise InputTooLargeError(field, limit)


@router.post("/parses", response_model=ParseResponse)
async def api_emoji_parse(request: ParseRequest) -> ParseResponse:
    """Rewrite emoji in plain text as <img> markup"""
    _ensure_within_limit("text", request.text)
    parser = get_emoji_parser()
    native = parser.supports_native_emoji()

    if request.force:
        html = parser.rewrite_string(
            request.text, request.options.as_mapping() if request.options else None
        )
    else:
        html = parser.parse_emoji(request.text)

    return ParseResponse(
        html=html,
        match_count=parser.matcher.count(request.text),
        native_supported=native,
    )


@router.post("/html-parses", response_model=HtmlParseResponse)
async def api_emoji_parse_html(request: HtmlParseRequest) -> HtmlParseResponse:
    """Rewrite emoji inside an HTML fragment, leaving markup intact"""
    _ensure_within_limit("html", request.html)
    parser = get_emoji_parser()
    soup = BeautifulSoup(request.html, "html.parser")

    if request.force:
        parser.rewrite_dom(
            soup, request.options.as_mapping() if request.options else None
        )
    else:
        parser.parse_dom_for_emoji(soup)

    return HtmlParseResponse(
        html=str(soup), native_supported=parser.supports_native_emoji()
    )


@router.post("/matches", response_model=MatchesResponse)
async def api_emoji_matches(request: MatchesRequest) -> MatchesResponse:
    """List emoji matches with UTF-16 offsets"""
    _ensure_within_limit("text", request.text)
    parser = get_emoji_parser()
    return MatchesResponse(
        matches=[MatchItem(**m.as_dict()) for m in parser.find_matches(request.text)]
    )


@router.get("/support", response_model=SupportResponse)
async def api_emoji_support() -> SupportResponse:
    """Report whether this host renders emoji natively"""
    parser = get_emoji_parser()
    return SupportResponse(
        native_supported=parser.supports_native_emoji(),
        mode=get_settings().probe.mode.value,
    )
