"""Error taxonomy for the daily challenge.

ValidationError maps to HTTP 400 and PersistenceError to HTTP 500.
ProviderFailure never leaves the definition resolver, and StartupError is
raised out of the application factory so the process never starts serving.
"""


class ChallengeError(Exception):
    """Base class for daily challenge errors."""


class ValidationError(ChallengeError):
    """Malformed or oversized submission payload."""


class ProviderFailure(ChallengeError):
    """A definition provider could not answer for a word."""

    def __init__(self, provider: str, word: str, reason: str):
        super().__init__(f"{provider} failed for '{word}': {reason}")
        self.provider = provider
        self.word = word
        self.reason = reason


class PersistenceError(ChallengeError):
    """The leaderboard store rejected a write or read."""


class StartupError(ChallengeError):
    """The service cannot be initialised (e.g. unreadable word list)."""
