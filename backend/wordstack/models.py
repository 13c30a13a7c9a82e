from wordstack import db


class Score(db.Model):
    __tablename__ = 'scores'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    date = db.Column(db.String(10), nullable=False, index=True)  # UTC YYYY-MM-DD

    def to_dict(self):
        return {
            'name': self.name,
            'score': self.score,
        }

    def __repr__(self):
        return f'<Score {self.name!r} {self.score} on {self.date}>'
