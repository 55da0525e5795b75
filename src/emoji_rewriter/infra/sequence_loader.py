"""Sequence pack loader and match table builder"""

import logging
from pathlib import Path

import emoji
import yaml

from emoji_rewriter.config.settings import MatcherSettings, get_settings
from emoji_rewriter.exceptions import SequencePackError
from emoji_rewriter.infra.sequence_table import SequenceTable
from emoji_rewriter.models.sequence_pack import SequencePack, parse_sequence_pack
from emoji_rewriter.utils.unicode import UnicodeConstants


log = logging.getLogger(__name__)


REGIONAL_INDICATORS: tuple[str, ...] = tuple(
    chr(cp)
    for cp in range(
        UnicodeConstants.REGIONAL_INDICATOR_START,
        UnicodeConstants.REGIONAL_INDICATOR_END + 1,
    )
)


class SequencePackLoader:
    """Load sequence packs from YAML files"""

    def __init__(self, packs_dir: str | Path) -> None:
        self._dir = Path(packs_dir)

    def load_from_directory(self, patterns: list[str] | None = None) -> list[SequencePack]:
        """Load packs matching patterns, in file name order

        Args:
            patterns: Glob patterns to match (default: ["*.yml", "*.yaml"])
        """
        if patterns is None:
            patterns = ["*.yml", "*.yaml"]

        paths = sorted({path for pattern in patterns for path in self._dir.glob(pattern)})
        packs = []
        for path in paths:
            try:
                pack = self._load_file(path)
            except (OSError, SequencePackError, yaml.YAMLError) as e:
                log.error("Failed to load sequence pack %s: %s", path, e)
                continue
            packs.append(pack)
            log.info(
                "Loaded sequence pack: %s (+%d/-%d)",
                path.name,
                len(pack.include),
                len(pack.exclude),
            )

        return packs

    def _load_file(self, path: Path) -> SequencePack:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise SequencePackError(f"{path.name} must contain a mapping")
        return parse_sequence_pack(data)


def resolve_packs_dir(settings: MatcherSettings) -> Path | None:
    """Configured packs directory, or None when it holds no YAML files"""
    packs_dir = Path(settings.sequence_packs_dir)
    if packs_dir.is_dir() and any(packs_dir.glob("*.y*ml")):
        return packs_dir
    return None


def build_sequence_table(
    packs: list[SequencePack],
    include_emoji_data: bool = True,
) -> SequenceTable:
    """Merge emoji data with packs into a SequenceTable

    Emoji data is extended with single regional indicators, so letters
    outside a known flag pair still match one by one. Packs apply in order,
    so a later pack can re-include what an earlier one excluded.
    """
    sequences: set[str] = set()
    if include_emoji_data:
        sequences.update(emoji.EMOJI_DATA)
        sequences.update(REGIONAL_INDICATORS)
    for pack in packs:
        sequences.update(str(seq) for seq in pack.include)
        sequences.difference_update(str(seq) for seq in pack.exclude)
    return SequenceTable(sequences)


def load_sequence_table(settings: MatcherSettings | None = None) -> SequenceTable:
    """Load packs from the configured directory and build the table"""
    matcher_settings = settings or get_settings().matcher
    packs_dir = resolve_packs_dir(matcher_settings)
    packs = SequencePackLoader(packs_dir).load_from_directory() if packs_dir else []

    table = build_sequence_table(packs, matcher_settings.include_emoji_data)
    log.info(
        "Emoji sequence table built: sequences=%d, packs=%d, max_length=%d",
        len(table),
        len(packs),
        table.max_length,
    )
    return table
