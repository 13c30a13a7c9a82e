from typing import List

from sqlalchemy.exc import SQLAlchemyError

from wordstack import db
from wordstack.models import Score
from .errors import PersistenceError


def record_score(name: str, score: int, date: str) -> Score:
    """Append one leaderboard row. Nothing is written if the commit fails."""
    entry = Score(name=name, score=score, date=date)
    try:
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceError(f'Failed to save score for {name!r}: {exc}') from exc
    return entry


def top_scores(date: str, limit: int = 20) -> List[Score]:
    try:
        return (
            Score.query.filter_by(date=date)
            .order_by(Score.score.desc(), Score.id.asc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceError(f'Failed to read leaderboard for {date}: {exc}') from exc
