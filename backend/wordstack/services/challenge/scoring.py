import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from markupsafe import Markup, escape

from .definitions import DefinitionResolver, Gloss, Resolution, format_gloss
from .dictionary import DictionaryIndex
from .errors import ValidationError
from .letters import LETTER_COUNT, can_form

log = logging.getLogger(__name__)

LOCAL_DICTIONARY = 'local-dictionary'
REMOTE_PROVIDER = 'remote-provider'
REJECTED = 'rejected'

_WORD_RE = re.compile(r'^[a-z]+$')


@dataclass(frozen=True)
class Submission:
    player_name: str
    candidate_words: Sequence[Any] = ()


@dataclass(frozen=True)
class ValidationOutcome:
    word: str
    accepted: bool
    source: str = REJECTED
    gloss: Optional[Gloss] = None


@dataclass
class ScoreResult:
    total_score: int = 0
    accepted_words: List[str] = field(default_factory=list)
    glosses: Dict[str, Gloss] = field(default_factory=dict)


class ScoringEngine:
    """Server-side scoring of a daily challenge submission.

    Words are checked against the local dictionary first and only then
    against the remote definition providers. A word scores its length once,
    and only if it can be spelled from the day's letters.
    """

    def __init__(self, dictionary: DictionaryIndex, resolver: DefinitionResolver,
                 max_words: int = 200, min_word_length: int = 3,
                 max_word_length: int = LETTER_COUNT, max_name_length: int = 64,
                 gloss_workers: int = 8, logger: Optional[logging.Logger] = None):
        self.dictionary = dictionary
        self.resolver = resolver
        self.max_words = max_words
        self.min_word_length = min_word_length
        self.max_word_length = max_word_length
        self.max_name_length = max_name_length
        self.gloss_workers = max(1, gloss_workers)
        self.logger = logger or log

    def parse_submission(self, payload: Any) -> Submission:
        if not isinstance(payload, dict):
            raise ValidationError('Invalid data. Name and foundWords are required.')
        name = payload.get('name')
        found_words = payload.get('foundWords')
        if not isinstance(name, str) or not isinstance(found_words, list):
            raise ValidationError('Invalid data. Name and foundWords are required.')
        name = name.strip()
        if not name:
            raise ValidationError('Name must not be empty.')
        # The escaped form is what gets stored, so it is what must fit
        name = str(escape(name))
        if len(name) > self.max_name_length:
            raise ValidationError(f'Name must be at most {self.max_name_length} characters.')
        if len(found_words) > self.max_words:
            raise ValidationError(f'Too many words submitted (max {self.max_words}).')
        return Submission(player_name=name, candidate_words=list(found_words))

    def evaluate(self, word: str, remote_cache: Optional[Dict[str, Resolution]] = None) -> ValidationOutcome:
        """Decide whether a normalized word is a real word.

        ``remote_cache`` memoises provider answers for the rest of a submission.
        """
        if not self.min_word_length <= len(word) <= self.max_word_length or not _WORD_RE.match(word):
            return ValidationOutcome(word=word, accepted=False)
        if word in self.dictionary:
            return ValidationOutcome(word=word, accepted=True, source=LOCAL_DICTIONARY)

        if remote_cache is not None and word in remote_cache:
            resolution = remote_cache[word]
        else:
            resolution = self.resolver.resolve(word)
            if remote_cache is not None:
                remote_cache[word] = resolution
        if resolution.accepted:
            return ValidationOutcome(word=word, accepted=True, source=REMOTE_PROVIDER, gloss=resolution.gloss)
        return ValidationOutcome(word=word, accepted=False)

    def score(self, submission: Submission, letters: Sequence[str]) -> ScoreResult:
        result = ScoreResult()
        remote_cache: Dict[str, Resolution] = {}
        known_glosses: Dict[str, Gloss] = {}
        seen = set()

        for raw in submission.candidate_words:
            if not isinstance(raw, str):
                continue
            word = raw.strip().lower()
            outcome = self.evaluate(word, remote_cache)
            if not outcome.accepted:
                continue
            if not can_form(word, letters):
                continue
            if word in seen:
                continue
            seen.add(word)
            result.total_score += len(word)
            result.accepted_words.append(word)
            if outcome.gloss is not None:
                known_glosses[word] = outcome.gloss

        result.glosses = self._resolve_glosses(result.accepted_words, known_glosses)
        self.logger.info(
            f"[score] player={submission.player_name!r} submitted={len(submission.candidate_words)} "
            f"accepted={len(result.accepted_words)} score={result.total_score}"
        )
        return result

    def _resolve_glosses(self, words: List[str], known: Dict[str, Gloss]) -> Dict[str, Gloss]:
        glosses = dict(known)
        missing = [w for w in words if w not in glosses]
        if missing:
            with ThreadPoolExecutor(max_workers=min(self.gloss_workers, len(missing))) as pool:
                for word, resolution in zip(missing, pool.map(self.resolver.resolve, missing)):
                    if resolution.accepted and resolution.gloss is not None:
                        glosses[word] = resolution.gloss
        return {w: glosses[w] for w in words if w in glosses}

    @staticmethod
    def format_meanings(result: ScoreResult) -> str:
        fragments = [format_gloss(result.glosses[w]) for w in result.accepted_words if w in result.glosses]
        return str(Markup('').join(fragments))
