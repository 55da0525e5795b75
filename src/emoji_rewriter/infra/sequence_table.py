"""Emoji sequence table backed by a pyahocorasick trie"""

from collections.abc import Iterable
from typing import Protocol, cast

import ahocorasick


class TrieProtocol(Protocol):
    def add_word(self, key: str, value: str) -> bool: ...
    def exists(self, key: str) -> bool: ...
    def longest_prefix(self, string: str) -> int: ...
    def __len__(self) -> int: ...


class SequenceTable:
    """Registered emoji sequences with greedy longest-prefix lookup

    Keys are strings of scalar values. Lookups never look further ahead than
    the longest registered sequence.
    """

    def __init__(self, sequences: Iterable[str] = ()) -> None:
        self._trie: TrieProtocol = cast("TrieProtocol", ahocorasick.Automaton())
        self._first_chars: set[str] = set()
        self._max_length = 0
        for sequence in sequences:
            self.add(sequence)

    def add(self, sequence: str) -> None:
        if not sequence:
            return
        self._trie.add_word(sequence, sequence)
        self._first_chars.add(sequence[0])
        self._max_length = max(self._max_length, len(sequence))

    @property
    def max_length(self) -> int:
        return self._max_length

    def __len__(self) -> int:
        return len(self._trie)

    def __contains__(self, sequence: object) -> bool:
        return isinstance(sequence, str) and bool(sequence) and self._trie.exists(sequence)

    def longest_match(self, text: str, start: int = 0) -> int:
        """Length of the longest registered sequence at text[start:], or 0"""
        if start >= len(text) or text[start] not in self._first_chars:
            return 0
        window = text[start : start + self._max_length]
        # longest_prefix follows trie edges, which may end between words
        depth = self._trie.longest_prefix(window)
        for length in range(depth, 0, -1):
            if self._trie.exists(window[:length]):
                return length
        return 0
