"""Health check utilities for emoji-rewriter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, TypeAlias

from emoji_rewriter.config.settings import get_settings
from emoji_rewriter.infra.emoji_parser import get_emoji_parser


START_TIME_MONOTONIC = time.monotonic()

# Rewritten during a deep check to prove the matcher and rewriter work
SMOKE_TEXT = "health \U0001f600"


ComponentDetail: TypeAlias = dict[str, Any]
ComponentPayload: TypeAlias = dict[str, Any]
HealthPayload: TypeAlias = dict[str, Any]


@dataclass
class ComponentStatus:
    """Component status with details."""

    status: str
    detail: ComponentDetail

    def as_payload(self) -> ComponentPayload:
        """Convert to JSON-serializable payload."""
        return {"status": self.status, "detail": self.detail}


def _build_app_status() -> ComponentStatus:
    """Application-level status (uptime only)."""
    uptime_seconds = int(time.monotonic() - START_TIME_MONOTONIC)
    return ComponentStatus(
        status="ok",
        detail={"uptime_seconds": uptime_seconds},
    )


def _build_matcher_status(deep_checks: bool) -> ComponentStatus:
    """Sequence table size, plus a smoke rewrite on deep checks."""
    parser = get_emoji_parser()
    sequence_count = len(parser.matcher.table)
    status = "ok" if sequence_count > 0 else "degraded"
    detail: ComponentDetail = {
        "sequence_count": sequence_count,
        "max_sequence_length": parser.matcher.table.max_length,
        "deep_checked": deep_checks,
    }

    if deep_checks:
        rewritten = parser.rewrite_string(SMOKE_TEXT)
        smoke_ok = "<img " in rewritten
        detail["smoke_rewrite"] = smoke_ok
        if not smoke_ok:
            status = "degraded"

    return ComponentStatus(status=status, detail=detail)


def _build_probe_status() -> ComponentStatus:
    """Native support result. Either answer is healthy."""
    settings = get_settings().probe
    return ComponentStatus(
        status="ok",
        detail={
            "mode": settings.mode.value,
            "native_supported": get_emoji_parser().supports_native_emoji(),
        },
    )


async def collect_health(deep_checks: bool = True) -> HealthPayload:
    """Collect full health payload.

    Args:
        deep_checks: Whether to run a smoke rewrite through the engine.
    """
    components: dict[str, ComponentStatus] = {
        "app": _build_app_status(),
        "matcher": _build_matcher_status(deep_checks),
        "probe": _build_probe_status(),
    }

    overall_status = "ok"
    for component in components.values():
        if component.status != "ok":
            overall_status = "degraded"
            break

    return {
        "status": overall_status,
        "components": {key: value.as_payload() for key, value in components.items()},
    }
