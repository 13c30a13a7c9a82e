"""Deterministic daily puzzle generation.

The letters for a day are a pure function of the UTC date string and a retry
counter, so every process recomputes the same puzzle without storing it.
The generator is seeded with ``random.Random(f"{seed}{attempt}")``; string
seeds are hashed with SHA-512 and do not depend on PYTHONHASHSEED. Do not
change the seeding or the order of draws: doing so silently changes the
puzzle of every date recomputed afterwards.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .letters import CONSONANTS, LETTER_COUNT, VOWELS, can_form

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Puzzle:
    seed: str
    attempt: int
    letters: List[str] = field(default_factory=list)
    valid: bool = False


def today_seed(now: Optional[datetime] = None) -> str:
    """Current UTC calendar date as ``YYYY-MM-DD``."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).date().isoformat()


def generate_letters(seed: str, attempt: int = 0) -> List[str]:
    rng = random.Random(f"{seed}{attempt}")

    def pick(alphabet: str) -> str:
        return alphabet[math.floor(rng.random() * len(alphabet))]

    vowel_count = math.floor(rng.random() * 3) + 3
    letters = [pick(VOWELS) for _ in range(vowel_count)]
    letters += [pick(CONSONANTS) for _ in range(LETTER_COUNT - vowel_count)]

    # Fisher-Yates, back to front
    for i in range(len(letters) - 1, 0, -1):
        j = math.floor(rng.random() * (i + 1))
        letters[i], letters[j] = letters[j], letters[i]
    return letters


def is_valid_puzzle(letters: List[str], dictionary: Iterable[str], min_length: int = 5) -> bool:
    """True if some dictionary word of at least ``min_length`` letters is formable."""
    for word in dictionary:
        if len(word) >= min_length and can_form(word, letters):
            return True
    return False


def daily_puzzle(seed: str, dictionary: Iterable[str], max_attempts: int = 10,
                 min_length: int = 5) -> Puzzle:
    """Generate the puzzle for ``seed``, retrying until it is solvable.

    After ``max_attempts`` invalid draws the last one is returned with
    ``valid=False`` instead of raising.
    """
    puzzle = None
    for attempt in range(max(1, max_attempts)):
        letters = generate_letters(seed, attempt)
        if is_valid_puzzle(letters, dictionary, min_length):
            return Puzzle(seed=seed, attempt=attempt, letters=letters, valid=True)
        logger.info(f"[puzzle] seed={seed} attempt={attempt} has no word of {min_length}+ letters, trying next")
        puzzle = Puzzle(seed=seed, attempt=attempt, letters=letters, valid=False)
    logger.warning(f"[puzzle] seed={seed} no valid set after {max_attempts} attempts, using last draw")
    return puzzle
