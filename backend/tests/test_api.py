import pytest
from sqlalchemy.exc import OperationalError

from conftest import FakeProvider
from wordstack import db
from wordstack.models import Score
from wordstack.services.challenge import DefinitionResolver, puzzle
from wordstack.services.challenge.puzzle import daily_puzzle

SEED = '2024-05-01'


@pytest.fixture(autouse=True)
def fixed_day(monkeypatch):
    monkeypatch.setattr(puzzle, 'today_seed', lambda now=None: SEED)


@pytest.fixture()
def todays_letters(flask_app):
    return daily_puzzle(SEED, flask_app.extensions['dictionary']).letters


@pytest.fixture()
def provider(flask_app):
    """Accept any word remotely so tests can score words built from today's letters."""

    class AcceptAll(FakeProvider):
        def lookup(self, word, timeout):
            self.answers.setdefault(word, ('noun', f'definition of {word}'))
            return super().lookup(word, timeout)

    fake = AcceptAll('accept-all')
    flask_app.extensions['definition_resolver'].providers[:] = [fake]
    return fake


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_daily_challenge_returns_todays_letters(client, todays_letters):
    res = client.get('/api/daily-challenge')
    assert res.status_code == 200
    letters = res.get_json()['letters']
    assert letters == todays_letters
    assert len(letters) == 9
    assert all(len(ch) == 1 and ch.isupper() for ch in letters)


def test_daily_challenge_is_stable_between_requests(client):
    first = client.get('/api/daily-challenge').get_json()
    second = client.get('/api/daily-challenge').get_json()
    assert first == second


def test_submit_score_validates_on_server(client, todays_letters, provider):
    word1 = ''.join(todays_letters[:3]).lower()
    word2 = ''.join(todays_letters[3:6]).lower()
    res = client.post('/api/daily-challenge/score', json={
        'name': '  Alice ',
        'foundWords': [word1, word1.upper(), 7, word2],
    })
    assert res.status_code == 201
    data = res.get_json()
    assert data['success'] is True
    expected = 3 + (3 if word2 != word1 else 0)
    assert data['validatedScore'] == expected
    assert f'<b>{word1}</b>' in data['meanings']

    row = Score.query.one()
    assert row.name == 'Alice'
    assert row.score == expected
    assert row.date == SEED


def test_words_outside_todays_letters_score_nothing(client, todays_letters, provider):
    absent = next(ch for ch in 'ABCDEFGHIJKLMNOPQRSTUVWXYZ' if ch not in todays_letters)
    res = client.post('/api/daily-challenge/score', json={'name': 'Bob', 'foundWords': [absent.lower() * 3]})
    assert res.status_code == 201
    assert res.get_json()['validatedScore'] == 0
    assert res.get_json()['meanings'] == ''


@pytest.mark.parametrize('payload', [
    {'foundWords': []},
    {'name': 'Alice'},
    {'name': 'Alice', 'foundWords': 'cat'},
    {'name': '   ', 'foundWords': []},
])
def test_malformed_submission_is_rejected(client, payload):
    res = client.post('/api/daily-challenge/score', json=payload)
    assert res.status_code == 400
    assert 'error' in res.get_json()
    assert Score.query.count() == 0


def test_non_json_body_is_rejected(client):
    res = client.post('/api/daily-challenge/score', data='name=Alice', content_type='text/plain')
    assert res.status_code == 400


def test_oversized_submission_does_no_work(client, provider):
    # TestConfig caps submissions at 5 words
    res = client.post('/api/daily-challenge/score', json={'name': 'Alice', 'foundWords': ['cat'] * 6})
    assert res.status_code == 400
    assert provider.calls == []
    assert Score.query.count() == 0


def test_persistence_failure_returns_500(client, provider, monkeypatch):
    def broken_commit():
        raise OperationalError('INSERT', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    res = client.post('/api/daily-challenge/score', json={'name': 'Alice', 'foundWords': []})
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Failed to save score.'}
    monkeypatch.undo()
    assert Score.query.count() == 0


def test_leaderboard_lists_today_descending(client, flask_app):
    db.session.add_all([
        Score(name='low', score=3, date=SEED),
        Score(name='high', score=12, date=SEED),
        Score(name='mid', score=7, date=SEED),
        Score(name='yesterday', score=99, date='2024-04-30'),
    ])
    db.session.commit()

    res = client.get('/api/daily-challenge/leaderboard')
    assert res.status_code == 200
    assert res.get_json() == [
        {'name': 'high', 'score': 12},
        {'name': 'mid', 'score': 7},
        {'name': 'low', 'score': 3},
    ]


def test_leaderboard_is_capped(client, flask_app):
    flask_app.config['LEADERBOARD_LIMIT'] = 20
    db.session.add_all([Score(name=f'p{i}', score=i, date=SEED) for i in range(25)])
    db.session.commit()
    rows = client.get('/api/daily-challenge/leaderboard').get_json()
    assert len(rows) == 20
    assert rows[0] == {'name': 'p24', 'score': 24}


def test_resolver_is_shared_with_the_scoring_engine(flask_app):
    resolver = flask_app.extensions['definition_resolver']
    assert isinstance(resolver, DefinitionResolver)
    assert flask_app.extensions['scoring_engine'].resolver is resolver


def test_escaped_name_fits_the_name_column(client, provider):
    res = client.post('/api/daily-challenge/score', json={'name': '<' * 64, 'foundWords': []})
    assert res.status_code == 400
    assert Score.query.count() == 0

    res = client.post('/api/daily-challenge/score', json={'name': '<' * 16, 'foundWords': []})
    assert res.status_code == 201
    stored = Score.query.one().name
    assert stored == '&lt;' * 16
    assert len(stored) <= Score.__table__.c.name.type.length


def test_oversized_body_is_rejected(client, provider):
    body = {'name': 'Alice', 'foundWords': ['a' * 1000] * 100}
    res = client.post('/api/daily-challenge/score', json=body)
    assert res.status_code in (400, 413)
    assert provider.calls == []
    assert Score.query.count() == 0
