"""
Dictionary capability used by the scoring engine.

The engine only needs to ask whether a word exists; where the words come from is up to the implementation.
Words are compared upper case, like the letters on the board.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Protocol, Self

from src.core.config import get_settings
from src.core.exceptions import DictionaryUnavailableError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


class Dictionary(Protocol):
    def contains(self, word: str) -> bool: ...


class WordSet:
    """In-memory dictionary built from any iterable of words."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words = frozenset(word.strip().upper() for word in words if word.strip())

    def contains(self, word: str) -> bool:
        return word.upper() in self._words

    def __len__(self) -> int:
        return len(self._words)


class WordListDictionary:
    """
    Dictionary backed by a word list file: one word per line, blank lines and '#' comments ignored.

    The file is read on first lookup, not at construction.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._words: Optional[WordSet] = None

    @classmethod
    def from_file(cls, path: str | Path) -> Self:
        return cls(Path(path))

    def contains(self, word: str) -> bool:
        return self._load().contains(word)

    def _load(self) -> WordSet:
        if self._words is None:
            try:
                lines = self.path.read_text(encoding="utf-8").splitlines()
            except OSError as exc:
                logger.error("Cannot read word list %s: %s", self.path, exc)
                raise DictionaryUnavailableError(
                    f"Word list {str(self.path)!r} cannot be read."
                ) from exc
            self._words = WordSet(
                line for line in lines if not line.strip().startswith(COMMENT_PREFIX)
            )
            logger.info("Loaded %d words from %s", len(self._words), self.path)
        return self._words


def load_dictionary(path: Optional[str]) -> Dictionary:
    """Dictionary for the configured word list path. Without a path no word is valid."""
    if path is None:
        logger.warning("No word list configured: every word of two or more letters will be rejected.")
        return WordSet()
    return WordListDictionary.from_file(path)


@lru_cache
def get_dictionary() -> Dictionary:
    """The dictionary of the configured word list, shared by all requests."""
    return load_dictionary(get_settings().DICTIONARY_PATH)
