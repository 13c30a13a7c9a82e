import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///leaderboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Largest accepted request body (bytes); Flask answers 413 above it
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', str(64 * 1024)))
    # Static word list loaded once at startup (JSON array or one word per line)
    WORD_LIST_PATH = os.environ.get('WORD_LIST_PATH') or os.path.join(basedir, 'all_words.json')
    # Submission limits
    MAX_SUBMISSION_WORDS = int(os.environ.get('MAX_SUBMISSION_WORDS', '200'))
    MIN_WORD_LENGTH = int(os.environ.get('MIN_WORD_LENGTH', '3'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '64'))
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '20'))
    # Daily puzzle generation. Changing these changes every recomputed puzzle.
    PUZZLE_MAX_ATTEMPTS = int(os.environ.get('PUZZLE_MAX_ATTEMPTS', '10'))
    PUZZLE_MIN_WORD_LENGTH = int(os.environ.get('PUZZLE_MIN_WORD_LENGTH', '5'))
    # Remote definition providers, tried in order. Empty disables remote lookups.
    DEFINITION_PROVIDERS = os.environ.get('DEFINITION_PROVIDERS', 'dictionaryapi,datamuse')
    # Total deadline per provider attempt, covering connect, headers and body
    DEFINITION_TIMEOUT_SEC = float(os.environ.get('DEFINITION_TIMEOUT_SEC', '2.0'))
    DEFINITION_MAX_ATTEMPTS = int(os.environ.get('DEFINITION_MAX_ATTEMPTS', '2'))
    # Concurrent gloss lookups per submission
    GLOSS_WORKERS = int(os.environ.get('GLOSS_WORKERS', '8'))
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
