from flask import Blueprint, current_app, jsonify, request

from wordstack.services.challenge import puzzle
from wordstack.services.challenge.errors import PersistenceError, ValidationError
from wordstack.services.challenge.leaderboard import record_score, top_scores


daily = Blueprint('daily', __name__)


def _todays_puzzle(seed: str) -> puzzle.Puzzle:
    cfg = current_app.config
    return puzzle.daily_puzzle(
        seed,
        current_app.extensions['dictionary'],
        max_attempts=int(cfg.get('PUZZLE_MAX_ATTEMPTS', 10)),
        min_length=int(cfg.get('PUZZLE_MIN_WORD_LENGTH', 5)),
    )


@daily.route('', methods=['GET'])
def get_daily_challenge():
    seed = puzzle.today_seed()
    todays = _todays_puzzle(seed)
    current_app.logger.info(
        f"[daily] seed={seed} attempt={todays.attempt} valid={todays.valid} letters={','.join(todays.letters)}"
    )
    return jsonify({'letters': todays.letters})


@daily.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    today = puzzle.today_seed()
    limit = int(current_app.config.get('LEADERBOARD_LIMIT', 20))
    try:
        rows = top_scores(today, limit=limit)
    except PersistenceError as exc:
        current_app.logger.error(f"[leaderboard] {exc}")
        return jsonify({'error': 'Failed to retrieve leaderboard.'}), 500
    return jsonify([row.to_dict() for row in rows])


@daily.route('/score', methods=['POST'])
def submit_score():
    engine = current_app.extensions['scoring_engine']
    try:
        submission = engine.parse_submission(request.get_json(silent=True))
    except ValidationError as exc:
        return jsonify({'error': str(exc)}), 400

    # Never trust a client-supplied pool: recompute today's letters.
    today = puzzle.today_seed()
    todays = _todays_puzzle(today)
    result = engine.score(submission, todays.letters)

    try:
        entry = record_score(submission.player_name, result.total_score, today)
    except PersistenceError as exc:
        current_app.logger.error(f"[score] {exc}")
        return jsonify({'error': 'Failed to save score.'}), 500

    current_app.logger.info(f"[score] saved id={entry.id}: {entry.name} - {entry.score}")
    return jsonify({
        'success': True,
        'validatedScore': result.total_score,
        'meanings': engine.format_meanings(result),
    }), 201
