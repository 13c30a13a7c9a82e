from typing import Iterable

VOWELS = 'AEIOU'
CONSONANTS = 'BCDFGHJKLMNPQRSTVWXYZ'
LETTER_COUNT = 9


def can_form(word: str, letters: Iterable[str]) -> bool:
    """Return True if ``word`` can be spelled from ``letters``.

    ``letters`` is treated as a multiset: every character of the uppercased
    word consumes one matching tile. The caller's sequence is never modified.
    """
    pool = list(letters)
    for char in word.upper():
        try:
            pool.remove(char)
        except ValueError:
            return False
    return True
