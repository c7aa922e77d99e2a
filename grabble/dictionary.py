"""Dictionary / word list with trie-backed prefix search."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from grabble.constants import BOARD_SIZE, MIN_WORD_LENGTH
from grabble.trie import Trie

log = logging.getLogger("grabble")


class Dictionary:
    """Word list with both set-lookup and trie-based prefix search.

    Only words that can fit on the board (3 to 7 letters) are kept.
    """

    def __init__(self, dict_path: str | None = None, words: Iterable[str] | None = None):
        self.words: set[str] = set()
        self.trie = Trie()
        if words is not None:
            self._add_all(words)
        else:
            self._load(dict_path)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Dictionary:
        return cls(words=words)

    def _add_all(self, words: Iterable[str]) -> None:
        for word in words:
            word = word.strip().upper()
            if MIN_WORD_LENGTH <= len(word) <= BOARD_SIZE and word.isalpha():
                self.words.add(word)
                self.trie.insert(word)

    def _load(self, dict_path: str | None) -> None:
        search_paths: list[str] = []
        if dict_path:
            if not os.path.exists(dict_path):
                raise FileNotFoundError(dict_path)
            search_paths.append(dict_path)

        search_paths.extend([
            "dictionary.txt",
            "words.txt",
            os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "dictionary.txt"),
            "/usr/share/dict/words",
        ])

        for path in search_paths:
            if os.path.exists(path):
                with open(path, "r", encoding="utf-8") as f:
                    self._add_all(f)
                if self.words:
                    log.info("Loaded %s words from %s", f"{len(self.words):,}", path)
                    return

        log.warning("No dictionary file found -- using built-in minimal word list.")
        log.warning("Pass --dict or save a word list as dictionary.txt for real games.")
        self._load_minimal()

    def _load_minimal(self) -> None:
        common = {
            "THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL", "CAN",
            "HER", "WAS", "ONE", "OUR", "OUT", "DAY", "HAD", "HAS", "HIS",
            "HOW", "ITS", "MAY", "NEW", "NOW", "OLD", "SEE", "WAY", "WHO",
            "BOY", "DID", "GET", "HIM", "LET", "SAY", "SHE", "TOO", "USE",
            "CAT", "DOG", "RUN", "SET", "TOP", "RED", "TEN", "NET", "RAT",
            "TAR", "ART", "EAT", "TEA", "ATE", "SEA", "EON", "NOD",
            "DON", "GOD", "TIN", "NIT", "PAN", "NAP", "POT", "OPT",
            "STAR", "RATS", "ARTS", "TARS", "STOP", "POTS", "SPOT", "TOPS",
            "LIVE", "EVIL", "VILE", "VEIL", "LEVEL", "RADAR", "REFER",
            "WORD", "PLAY", "GAME", "TILE", "BEST", "MOVE", "ZONE", "OVER",
            "DROP", "FALL", "LINE", "STONE", "NOTES", "ONSET", "TONES",
            "RACECAR", "CIVIC", "KAYAK", "MADAM", "NOON", "DEED", "PEEP",
        }
        self._add_all(common)

    def is_valid(self, word: str) -> bool:
        return word.upper() in self.words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)
