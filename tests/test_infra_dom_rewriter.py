"""Tests for the BeautifulSoup tree rewriter."""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup, Tag

from emoji_rewriter.infra.dom_rewriter import DomRewriter
from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.models.options import RewriteOptions


GRINNING = "\U0001f600"
HEART = "\u2764\ufe0f"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def rewriter(matcher: EmojiMatcher) -> DomRewriter:
    return DomRewriter(matcher)


class TestRewrite:
    """Tests for DomRewriter.rewrite."""

    def test_replaces_text_with_image(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>Hello {GRINNING} world</p>")
        rewriter.rewrite(soup, default_options)

        img = soup.find("img")
        assert isinstance(img, Tag)
        assert img["class"] == "emoji"
        assert img["draggable"] == "false"
        assert img["alt"] == GRINNING
        assert img["src"] == "https://twemoji.maxcdn.com/2/72x72/1f600.png"
        assert [str(n) for n in soup.p.contents if not isinstance(n, Tag)] == [
            "Hello ",
            " world",
        ]

    def test_returns_root(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>{GRINNING}</p>")
        assert rewriter.rewrite(soup, default_options) is soup

    def test_script_and_style_untouched(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        html = (
            f"<div><script>var a = '{GRINNING}';</script>"
            f"<style>p:after {{ content: '{GRINNING}'; }}</style>"
            f"<textarea>{GRINNING}</textarea></div>"
        )
        soup = _soup(html)
        rewriter.rewrite(soup, default_options)
        assert soup.find("img") is None
        assert str(soup) == str(_soup(html))

    def test_svg_subtree_skipped(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<svg><text>{GRINNING}</text></svg><p>{GRINNING}</p>")
        rewriter.rewrite(soup, default_options)
        assert soup.svg.find("img") is None
        assert soup.p.find("img") is not None

    def test_root_inside_svg_skipped(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<svg><g><text>{GRINNING}</text></g></svg>")
        rewriter.rewrite(soup.find("g"), default_options)
        assert soup.find("img") is None

    def test_comments_untouched(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p><!-- {GRINNING} --></p>")
        rewriter.rewrite(soup, default_options)
        assert soup.find("img") is None

    def test_attributes_untouched(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f'<p title="{GRINNING}">x</p>')
        rewriter.rewrite(soup, default_options)
        assert soup.p["title"] == GRINNING
        assert soup.find("img") is None

    def test_nodes_without_emoji_kept(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>plain</p><p>{GRINNING}</p>")
        plain = soup.p.contents[0]
        rewriter.rewrite(soup, default_options)
        assert soup.p.contents[0] is plain

    def test_idempotent(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>a {GRINNING} b {HEART}</p>")
        rewriter.rewrite(soup, default_options)
        once = str(soup)
        rewriter.rewrite(soup, default_options)
        assert str(soup) == once
        assert len(soup.find_all("img")) == 2

    def test_callback_declines(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        options = replace(default_options, callback=lambda key, opts: False)
        html = f"<p>a {GRINNING} b</p>"
        soup = _soup(html)
        rewriter.rewrite(soup, options)
        assert str(soup) == html

    def test_stray_selectors_dropped_from_gaps(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>a\ufe0f {GRINNING} b\ufe0f</p>")
        rewriter.rewrite(soup, default_options)
        assert [str(n) for n in soup.p.contents if not isinstance(n, Tag)] == [
            "a ",
            " b",
        ]

    def test_declined_match_kept_verbatim(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        options = replace(
            default_options,
            callback=lambda key, opts: None if key == "2764" else "u.png",
        )
        soup = _soup(f"<p>{HEART} {GRINNING}</p>")
        rewriter.rewrite(soup, options)
        assert soup.p.contents[0] == HEART
        assert soup.p.find("img")["src"] == "u.png"

    def test_detached_subtree(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<div><span>{GRINNING}</span></div>")
        span = soup.span.extract()
        rewriter.rewrite(span, default_options)
        assert span.find("img") is not None


class TestImageAttributes:
    """Tests for attributes on inserted images."""

    def test_extra_attributes_filtered(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        options = replace(
            default_options,
            attributes=lambda key, raw: {
                "title": key,
                "onclick": "alert(1)",
                "src": "evil.png",
            },
        )
        soup = _soup(f"<p>{GRINNING}</p>")
        rewriter.rewrite(soup, options)
        img = soup.img
        assert img["title"] == "1f600"
        assert "onclick" not in img.attrs
        assert img["src"].endswith("1f600.png")


class TestAssetErrors:
    """Tests for asset error handling."""

    def test_default_handler_falls_back_to_text(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        soup = _soup(f"<p>a{GRINNING}b</p>")
        rewriter.rewrite(soup, default_options)

        DomRewriter.report_asset_error(soup.img)

        assert soup.find("img") is None
        assert soup.p.get_text() == f"a{GRINNING}b"

    def test_custom_handler(
        self, rewriter: DomRewriter, default_options: RewriteOptions
    ) -> None:
        handler = MagicMock()
        options = replace(default_options, onerror=handler)
        soup = _soup(f"<p>{GRINNING}</p>")
        rewriter.rewrite(soup, options)

        img = soup.img
        DomRewriter.report_asset_error(img)

        handler.assert_called_once_with(img)

    def test_foreign_image_ignored(self) -> None:
        soup = _soup('<p><img src="x.png"/></p>')
        DomRewriter.report_asset_error(soup.img)
        assert soup.find("img") is not None
