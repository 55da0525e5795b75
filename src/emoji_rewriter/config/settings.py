"""Configuration settings for emoji-rewriter"""

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger


log = logging.getLogger(__name__)

load_dotenv(override=True)  # .env wins over the process environment


DEFAULT_BASE_URL = "https://twemoji.maxcdn.com/2/"
DEFAULT_SIZE = "72x72"
DEFAULT_EXT = ".png"
DEFAULT_CLASS_NAME = "emoji"
DEFAULT_FALLBACK_CLASS_NAME = "fallBackEmoji"

# A T-Rex is a single astral codepoint that old fonts lack entirely
DEFAULT_PROBE_GLYPH = "\U0001f996"

_SCHEME_REGEX = re.compile(r"^https?:", re.IGNORECASE)


class NativeSupportMode(str, Enum):
    """How native emoji rendering support is decided"""

    AUTO = "auto"
    ALWAYS = "true"
    NEVER = "false"

    @classmethod
    def from_string(cls, value: str) -> "NativeSupportMode":
        normalized = value.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        log.warning("Invalid EMOJI_NATIVE_SUPPORT=%s, using auto", value)
        return cls.AUTO


def _get_bool(key: str, default: bool) -> bool:
    """Get bool from env ("true"/"false")"""
    return os.getenv(key, str(default).lower()).lower() == "true"


def _get_int(key: str, default: int) -> int:
    """Get int from env, fall back to default on parse errors"""
    raw_value = os.getenv(key, str(default))
    try:
        return int(raw_value)
    except ValueError:
        log.warning("Invalid int env %s=%s, using default=%s", key, raw_value, default)
        return default


def _get_positive_float(key: str, default: float) -> float:
    """Get positive float from env, fall back to default otherwise"""
    raw_value = os.getenv(key, str(default))
    try:
        val = float(raw_value)
    except ValueError:
        log.warning(
            "Invalid float env %s=%s, using default=%s", key, raw_value, default
        )
        return default
    return val if val > 0 else default


def to_size_folder(size: int | str) -> str:
    """Turn a bare number into an "NxN" asset folder name"""
    if isinstance(size, int) and not isinstance(size, bool):
        return f"{size}x{size}"
    return str(size)


def strip_scheme(url: str) -> str:
    """Make an absolute http(s) URL protocol-relative"""
    return _SCHEME_REGEX.sub("", url)


@dataclass(frozen=True)
class AssetSettings:
    """Emoji asset URL and markup defaults"""

    base_url: str = field(
        default_factory=lambda: os.getenv("EMOJI_BASE_URL", DEFAULT_BASE_URL)
    )
    size: str = field(default_factory=lambda: os.getenv("EMOJI_SIZE", DEFAULT_SIZE))
    ext: str = field(default_factory=lambda: os.getenv("EMOJI_EXT", DEFAULT_EXT))
    class_name: str = field(
        default_factory=lambda: os.getenv("EMOJI_CLASS_NAME", DEFAULT_CLASS_NAME)
    )
    fallback_class_name: str = field(
        default_factory=lambda: os.getenv(
            "EMOJI_FALLBACK_CLASS_NAME", DEFAULT_FALLBACK_CLASS_NAME
        )
    )
    protocol_relative: bool = field(
        default_factory=lambda: _get_bool("EMOJI_PROTOCOL_RELATIVE", False)
    )

    @property
    def effective_base(self) -> str:
        """Base URL, without scheme when protocol_relative is set"""
        if self.protocol_relative:
            return strip_scheme(self.base_url)
        return self.base_url


@dataclass(frozen=True)
class MatcherSettings:
    """Sequence table settings"""

    sequence_packs_dir: str = field(
        default_factory=lambda: os.getenv("EMOJI_SEQUENCE_PACKS_DIR", "sequence_packs")
    )
    include_emoji_data: bool = field(
        default_factory=lambda: _get_bool("EMOJI_INCLUDE_EMOJI_DATA", True)
    )


@dataclass(frozen=True)
class ProbeSettings:
    """Native emoji support probe settings"""

    mode: NativeSupportMode = field(
        default_factory=lambda: NativeSupportMode.from_string(
            os.getenv("EMOJI_NATIVE_SUPPORT", "auto")
        )
    )
    font_path: str = field(
        default_factory=lambda: os.getenv("EMOJI_PROBE_FONT", "NotoColorEmoji.ttf")
    )
    font_size: int = field(
        default_factory=lambda: _get_int("EMOJI_PROBE_FONT_SIZE", 32)
    )
    glyph: str = field(
        default_factory=lambda: os.getenv("EMOJI_PROBE_GLYPH", DEFAULT_PROBE_GLYPH)
    )
    device_pixel_ratio: float = field(
        default_factory=lambda: _get_positive_float("EMOJI_DEVICE_PIXEL_RATIO", 1.0)
    )


@dataclass(frozen=True)
class LoggingSettings:
    """Logging settings"""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    rotation: str = field(default_factory=lambda: os.getenv("LOG_ROTATION", "10 MB"))
    retention: str = field(default_factory=lambda: os.getenv("LOG_RETENTION", "7 days"))
    compression: str = field(default_factory=lambda: os.getenv("LOG_COMPRESSION", "gz"))
    json_logs: bool = field(default_factory=lambda: _get_bool("LOG_JSON", False))
    console_enabled: bool = field(
        default_factory=lambda: _get_bool("LOG_CONSOLE", False)
    )


@dataclass(frozen=True)
class HttpSettings:
    """HTTP server settings"""

    host: str = field(default_factory=lambda: os.getenv("HTTP_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _get_int("HTTP_PORT", 40530))
    # HTTP/2 cleartext (h2c)
    http2_enabled: bool = field(default_factory=lambda: _get_bool("HTTP2_ENABLED", True))
    max_input_chars: int = field(
        default_factory=lambda: _get_int("HTTP_MAX_INPUT_CHARS", 200_000)
    )


@dataclass(frozen=True)
class Settings:
    """Main settings container"""

    assets: AssetSettings = field(default_factory=AssetSettings)
    matcher: MatcherSettings = field(default_factory=MatcherSettings)
    probe: ProbeSettings = field(default_factory=ProbeSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    http: HttpSettings = field(default_factory=HttpSettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def log_env_status(settings: Settings) -> None:
    """Log the effective configuration once at startup."""
    env_file_present = Path(".env").exists()

    logger.bind(name="env").info(
        "ENV_STATUS env_file={} base={} size={} ext={} class={} packs_dir={} emoji_data={} native_mode={} probe_font={}",
        env_file_present,
        settings.assets.effective_base,
        settings.assets.size,
        settings.assets.ext,
        settings.assets.class_name,
        settings.matcher.sequence_packs_dir,
        settings.matcher.include_emoji_data,
        settings.probe.mode.value,
        settings.probe.font_path,
    )
