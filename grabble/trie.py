"""Prefix trie for fast word and prefix lookups."""

from __future__ import annotations

from typing import Iterator


class TrieNode:
    """Single node in the prefix trie."""

    __slots__ = ("children", "is_terminal", "word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_terminal: bool = False
        self.word: str | None = None  # full word at terminal nodes


class Trie:
    """Prefix trie for word and prefix checks.  Case-insensitive."""

    def __init__(self):
        self.root = TrieNode()

    def insert(self, word: str) -> None:
        word = word.upper()
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_terminal = True
        node.word = word

    def is_word(self, word: str) -> bool:
        node = self._walk(word.upper())
        return node is not None and node.is_terminal

    def is_prefix(self, prefix: str) -> bool:
        return self._walk(prefix.upper()) is not None

    def word_count(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_word(word)

    def __iter__(self) -> Iterator[str]:
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.is_terminal:
                yield node.word
            stack.extend(node.children.values())

    def _walk(self, s: str) -> TrieNode | None:
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node
