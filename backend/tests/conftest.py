import json
import os
import sys
import pytest

# Ensure the backend root (containing the `wordstack` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordstack import create_app, db
from wordstack.services.challenge import Gloss, ProviderFailure

TEST_WORDS = ['Cat', 'DOG', 'bird', 'house', 'mouse', 'table', 'chair', 'puzzle', 'stone', 'notes']


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MAX_CONTENT_LENGTH = 64 * 1024
    WORD_LIST_PATH = None
    MAX_SUBMISSION_WORDS = 5
    MIN_WORD_LENGTH = 3
    MAX_NAME_LENGTH = 64
    LEADERBOARD_LIMIT = 20
    PUZZLE_MAX_ATTEMPTS = 10
    PUZZLE_MIN_WORD_LENGTH = 5
    # No remote lookups from tests
    DEFINITION_PROVIDERS = ''
    DEFINITION_TIMEOUT_SEC = 0.1
    DEFINITION_MAX_ATTEMPTS = 1
    GLOSS_WORKERS = 2
    CORS_ORIGINS = '*'


class FakeProvider:
    """Provider double answering from a dict; anything else fails."""

    def __init__(self, name='fake', answers=None, error=None, max_attempts=1):
        self.name = name
        self.answers = answers or {}
        self.error = error
        self.max_attempts = max_attempts
        self.calls = []

    def lookup(self, word, timeout):
        self.calls.append(word)
        if self.error is not None:
            raise self.error
        if word in self.answers:
            pos, definition = self.answers[word]
            return Gloss(word=word, part_of_speech=pos, definition=definition)
        raise ProviderFailure(self.name, word, 'word not found')


@pytest.fixture()
def word_list(tmp_path):
    path = tmp_path / 'all_words.json'
    path.write_text(json.dumps(TEST_WORDS), encoding='utf-8')
    return str(path)


@pytest.fixture()
def flask_app(word_list):
    config = type('Config', (TestConfig,), {'WORD_LIST_PATH': word_list})
    application = create_app(config)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
