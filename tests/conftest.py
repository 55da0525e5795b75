"""Pytest configuration and fixtures"""

import os

import pytest

from emoji_rewriter.config.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_CLASS_NAME,
    DEFAULT_EXT,
    DEFAULT_SIZE,
)
from emoji_rewriter.infra.matcher import EmojiMatcher
from emoji_rewriter.infra.sequence_loader import build_sequence_table
from emoji_rewriter.infra.sequence_table import SequenceTable
from emoji_rewriter.models.options import RewriteOptions


# Settings are read lazily; never probe a real font under test
os.environ.setdefault("EMOJI_NATIVE_SUPPORT", "false")
os.environ.setdefault("EMOJI_PROTOCOL_RELATIVE", "false")
os.environ.setdefault("LOG_CONSOLE", "false")


@pytest.fixture(scope="session")
def emoji_table() -> SequenceTable:
    """Match table built from the full emoji data set"""
    return build_sequence_table([], include_emoji_data=True)


@pytest.fixture
def matcher(emoji_table: SequenceTable) -> EmojiMatcher:
    return EmojiMatcher(emoji_table)


@pytest.fixture
def default_options() -> RewriteOptions:
    """Options with the stock asset defaults, independent of env"""
    return RewriteOptions(
        base=DEFAULT_BASE_URL,
        size=DEFAULT_SIZE,
        ext=DEFAULT_EXT,
        class_name=DEFAULT_CLASS_NAME,
    )
