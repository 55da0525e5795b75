"""Native emoji rendering probe"""

import logging
import math
from collections.abc import Callable

from PIL import Image, ImageDraw, ImageFont

from emoji_rewriter.config.settings import NativeSupportMode, ProbeSettings, get_settings


log = logging.getLogger(__name__)


# Sample point in CSS pixels, scaled by the device pixel ratio
PROBE_OFFSET = 12
PROBE_FILL = (255, 0, 0, 255)
BACKGROUND = (0, 0, 0, 0)


class CapabilityProbe:
    """Decide once whether the host renders emoji without substitution

    The result is computed lazily and cached on the instance. reset() drops
    the cached value and override() pins it.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        renderer: Callable[[], bool] | None = None,
    ) -> None:
        self._settings = settings or get_settings().probe
        self._renderer = renderer or self._render_probe
        self._supported: bool | None = None
        self._forced: bool | None = None

    def supports_native_emoji(self) -> bool:
        if self._forced is not None:
            return self._forced
        if self._supported is None:
            self._supported = self._compute()
            log.info("Emoji supported natively: %s", self._supported)
        return self._supported

    def reset(self) -> None:
        self._supported = None

    def override(self, value: bool | None) -> None:
        """Pin the answer, or pass None to go back to probing"""
        self._forced = value

    def _compute(self) -> bool:
        mode = self._settings.mode
        if mode is NativeSupportMode.ALWAYS:
            return True
        if mode is NativeSupportMode.NEVER:
            return False
        return self._renderer()

    def _render_probe(self) -> bool:
        """Draw the test glyph in red and look for red at the probe point

        Any failure to get a font or a raster surface counts as no native
        support.
        """
        settings = self._settings
        probe_point = math.floor(PROBE_OFFSET * settings.device_pixel_ratio)
        side = max(settings.font_size * 2, probe_point + 1)

        try:
            font = ImageFont.truetype(settings.font_path, settings.font_size)
        except (OSError, ValueError) as e:
            log.info("Emoji probe font unavailable (%s): %s", settings.font_path, e)
            return False

        try:
            surface = Image.new("RGBA", (side, side), BACKGROUND)
            draw = ImageDraw.Draw(surface)
            draw.text(
                (0, 0),
                settings.glyph,
                font=font,
                fill=PROBE_FILL,
                embedded_color=True,
            )
            pixel = surface.getpixel((probe_point, probe_point))
        except (OSError, ValueError) as e:
            log.warning("Emoji probe rendering failed: %s", e)
            return False

        if not isinstance(pixel, tuple):
            return False
        return pixel[0] != 0


_probe: CapabilityProbe | None = None


def get_capability_probe() -> CapabilityProbe:
    """Get capability probe singleton"""
    global _probe
    if _probe is None:
        _probe = CapabilityProbe()
    return _probe
