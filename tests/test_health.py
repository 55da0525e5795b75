from unittest.mock import MagicMock

import pytest

from emoji_rewriter.config.settings import NativeSupportMode, ProbeSettings
from emoji_rewriter.health import collect_health
from emoji_rewriter.infra.capability_probe import CapabilityProbe
from emoji_rewriter.infra.emoji_parser import EmojiParser
from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.infra.sequence_table import SequenceTable


class DummyProbeSettings:
    mode = NativeSupportMode.NEVER


class DummySettings:
    probe = DummyProbeSettings()


def _parser(matcher: EmojiMatcher) -> EmojiParser:
    probe = CapabilityProbe(
        ProbeSettings(mode=NativeSupportMode.NEVER), renderer=MagicMock()
    )
    return EmojiParser(matcher=matcher, probe=probe)


@pytest.mark.asyncio
async def test_collect_health_runs_smoke_rewrite(
    monkeypatch: pytest.MonkeyPatch, matcher: EmojiMatcher
) -> None:
    monkeypatch.setattr("emoji_rewriter.health.get_settings", lambda: DummySettings())
    monkeypatch.setattr(
        "emoji_rewriter.health.get_emoji_parser", lambda: _parser(matcher)
    )

    result = await collect_health(deep_checks=True)

    assert result["status"] == "ok"
    detail = result["components"]["matcher"]["detail"]
    assert detail["sequence_count"] == len(matcher.table)
    assert detail["deep_checked"] is True
    assert detail["smoke_rewrite"] is True
    assert result["components"]["probe"]["detail"] == {
        "mode": "false",
        "native_supported": False,
    }


@pytest.mark.asyncio
async def test_collect_health_live_skips_smoke_rewrite(
    monkeypatch: pytest.MonkeyPatch, matcher: EmojiMatcher
) -> None:
    monkeypatch.setattr("emoji_rewriter.health.get_settings", lambda: DummySettings())
    monkeypatch.setattr(
        "emoji_rewriter.health.get_emoji_parser", lambda: _parser(matcher)
    )

    result = await collect_health(deep_checks=False)

    assert result["status"] == "ok"
    detail = result["components"]["matcher"]["detail"]
    assert detail["deep_checked"] is False
    assert "smoke_rewrite" not in detail


@pytest.mark.asyncio
async def test_collect_health_marks_empty_table_degraded(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("emoji_rewriter.health.get_settings", lambda: DummySettings())
    monkeypatch.setattr(
        "emoji_rewriter.health.get_emoji_parser",
        lambda: _parser(EmojiMatcher(SequenceTable())),
    )

    result = await collect_health(deep_checks=True)

    assert result["status"] == "degraded"
    assert result["components"]["matcher"]["status"] == "degraded"
    assert result["components"]["matcher"]["detail"]["smoke_rewrite"] is False
    assert result["components"]["app"]["status"] == "ok"
