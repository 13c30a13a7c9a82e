"""Daily challenge domain services: puzzle generation, word validation and scoring.

The HTTP blueprint imports from here, keeping transport concerns separated
from the puzzle and scoring rules.
"""

from .definitions import (
    DatamuseProvider,
    DefinitionProvider,
    DefinitionResolver,
    FreeDictionaryProvider,
    Gloss,
    Resolution,
    build_providers,
    format_gloss,
    perform,
)
from .dictionary import DictionaryIndex, load_word_list
from .errors import (
    ChallengeError,
    PersistenceError,
    ProviderFailure,
    StartupError,
    ValidationError,
)
from .letters import CONSONANTS, LETTER_COUNT, VOWELS, can_form
from .puzzle import Puzzle, daily_puzzle, generate_letters, is_valid_puzzle, today_seed
from .scoring import ScoreResult, ScoringEngine, Submission, ValidationOutcome
