from __future__ import annotations

import re
from dataclasses import dataclass, field

_NON_LETTERS = re.compile(r"[^a-zA-Z ]")


def clean_string(s: str) -> str:
    """Canonical form of a name: ASCII letters and spaces only, lower-cased."""

    return _NON_LETTERS.sub("", s).lower()


@dataclass(slots=True)
class TrieNode:
    children: dict[str, TrieNode] = field(default_factory=dict)
    is_end_of_word: bool = False


class PrefixIndex:
    """Character trie over cleaned location names. Insertion only."""

    __slots__ = ("_root", "_size")

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._find(clean_string(word))
        return node is not None and node.is_end_of_word

    def insert(self, word: str) -> None:
        cleaned = clean_string(word)
        if not cleaned:
            return

        node = self._root
        for ch in cleaned:
            node = node.children.setdefault(ch, TrieNode())

        if not node.is_end_of_word:
            node.is_end_of_word = True
            self._size += 1

    def suggest(self, prefix: str) -> list[str]:
        """All stored words starting with ``prefix``, in lexicographic order."""

        cleaned = clean_string(prefix)
        start = self._find(cleaned)
        if start is None:
            return []

        matches: list[str] = []
        stack: list[tuple[TrieNode, str]] = [(start, cleaned)]
        while stack:
            node, word = stack.pop()
            if node.is_end_of_word:
                matches.append(word)
            # Reverse order so the smallest character is expanded first.
            for ch in sorted(node.children, reverse=True):
                stack.append((node.children[ch], word + ch))
        return matches

    def _find(self, cleaned: str) -> TrieNode | None:
        node = self._root
        for ch in cleaned:
            child = node.children.get(ch)
            if child is None:
                return None
            node = child
        return node
