import json
import os
from typing import Iterable, Iterator, List

from .errors import StartupError


def load_word_list(path: str) -> List[str]:
    """Read the static word list from ``path``.

    ``.json`` files hold a JSON array of strings; anything else is read as one
    word per line, skipping blank lines and ``#`` comments. Any read or parse
    problem is fatal for the service and surfaces as StartupError.
    """
    try:
        with open(path, encoding='utf-8') as fh:
            if os.path.splitext(path)[1].lower() == '.json':
                words = json.load(fh)
            else:
                words = [line.strip() for line in fh]
                words = [w for w in words if w and not w.startswith('#')]
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StartupError(f"Failed to load word list {path}: {exc}") from exc

    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        raise StartupError(f"Word list {path} must be a list of strings")
    return words


class DictionaryIndex:
    """Read-only set of known words, lowercased at construction."""

    __slots__ = ('_words',)

    def __init__(self, words: Iterable[str]):
        self._words = frozenset(w.strip().lower() for w in words if w.strip())

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return word.lower() in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"<DictionaryIndex words={len(self._words)}>"

    @classmethod
    def from_file(cls, path: str) -> 'DictionaryIndex':
        return cls(load_word_list(path))
