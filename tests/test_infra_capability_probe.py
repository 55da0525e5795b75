"""Tests for the native emoji capability probe."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from PIL import Image

from emoji_rewriter.config.settings import NativeSupportMode, ProbeSettings
from emoji_rewriter.infra import capability_probe
from emoji_rewriter.infra.capability_probe import CapabilityProbe


def _settings(**overrides: Any) -> ProbeSettings:
    values: dict[str, Any] = {
        "mode": NativeSupportMode.AUTO,
        "font_path": "/nonexistent/emoji-font.ttf",
        "font_size": 32,
        "glyph": "\U0001f996",
        "device_pixel_ratio": 1.0,
    }
    values.update(overrides)
    return ProbeSettings(**values)


class _PaintingDraw:
    """Stands in for ImageDraw.Draw; paints the whole surface with the fill"""

    def __init__(self, surface: Image.Image, paint: bool) -> None:
        self._surface = surface
        self._paint = paint
        self.calls: list[tuple[Any, ...]] = []

    def text(self, xy: Any, glyph: str, **kwargs: Any) -> None:
        self.calls.append((xy, glyph, kwargs))
        if self._paint:
            self._surface.paste(kwargs["fill"], (0, 0, *self._surface.size))


class TestSupportsNativeEmoji:
    """Tests for CapabilityProbe.supports_native_emoji."""

    def test_uses_renderer_in_auto_mode(self) -> None:
        renderer = MagicMock(return_value=True)
        probe = CapabilityProbe(_settings(), renderer=renderer)
        assert probe.supports_native_emoji() is True
        renderer.assert_called_once()

    def test_memoized(self) -> None:
        renderer = MagicMock(return_value=False)
        probe = CapabilityProbe(_settings(), renderer=renderer)
        assert probe.supports_native_emoji() is False
        assert probe.supports_native_emoji() is False
        renderer.assert_called_once()

    def test_reset_recomputes(self) -> None:
        renderer = MagicMock(side_effect=[False, True])
        probe = CapabilityProbe(_settings(), renderer=renderer)
        assert probe.supports_native_emoji() is False
        probe.reset()
        assert probe.supports_native_emoji() is True
        assert renderer.call_count == 2

    def test_override(self) -> None:
        renderer = MagicMock(return_value=False)
        probe = CapabilityProbe(_settings(), renderer=renderer)
        probe.override(True)
        assert probe.supports_native_emoji() is True
        renderer.assert_not_called()

        probe.override(None)
        assert probe.supports_native_emoji() is False

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [(NativeSupportMode.ALWAYS, True), (NativeSupportMode.NEVER, False)],
    )
    def test_fixed_modes_skip_renderer(
        self, mode: NativeSupportMode, expected: bool
    ) -> None:
        renderer = MagicMock(return_value=not expected)
        probe = CapabilityProbe(_settings(mode=mode), renderer=renderer)
        assert probe.supports_native_emoji() is expected
        renderer.assert_not_called()


class TestRenderProbe:
    """Tests for the Pillow based rendering check."""

    def test_missing_font_is_unsupported(self) -> None:
        probe = CapabilityProbe(_settings(font_path="/nonexistent/emoji-font.ttf"))
        assert probe.supports_native_emoji() is False

    def test_red_pixel_is_supported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        draws: list[_PaintingDraw] = []

        def fake_draw(surface: Image.Image) -> _PaintingDraw:
            draw = _PaintingDraw(surface, paint=True)
            draws.append(draw)
            return draw

        monkeypatch.setattr(capability_probe.ImageFont, "truetype", MagicMock())
        monkeypatch.setattr(capability_probe.ImageDraw, "Draw", fake_draw)

        probe = CapabilityProbe(_settings())
        assert probe.supports_native_emoji() is True

        (xy, glyph, kwargs) = draws[0].calls[0]
        assert glyph == "\U0001f996"
        assert kwargs["fill"] == capability_probe.PROBE_FILL
        assert kwargs["embedded_color"] is True

    def test_blank_surface_is_unsupported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(capability_probe.ImageFont, "truetype", MagicMock())
        monkeypatch.setattr(
            capability_probe.ImageDraw,
            "Draw",
            lambda surface: _PaintingDraw(surface, paint=False),
        )
        assert CapabilityProbe(_settings()).supports_native_emoji() is False

    def test_device_pixel_ratio_scales_probe_point(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        sampled: list[tuple[int, int]] = []
        original_getpixel = Image.Image.getpixel

        def spy_getpixel(self: Image.Image, xy: tuple[int, int]) -> Any:
            sampled.append(xy)
            return original_getpixel(self, xy)

        monkeypatch.setattr(capability_probe.ImageFont, "truetype", MagicMock())
        monkeypatch.setattr(
            capability_probe.ImageDraw,
            "Draw",
            lambda surface: _PaintingDraw(surface, paint=True),
        )
        monkeypatch.setattr(Image.Image, "getpixel", spy_getpixel)

        assert CapabilityProbe(_settings(device_pixel_ratio=2.5)).supports_native_emoji()
        assert sampled == [(30, 30)]

    def test_font_value_error_is_unsupported(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            capability_probe.ImageFont,
            "truetype",
            MagicMock(side_effect=ValueError("bad size")),
        )
        assert CapabilityProbe(_settings()).supports_native_emoji() is False
