# pyramath/models.py
from datetime import datetime, timezone
from .db import db


def _utcnow():
    return datetime.now(timezone.utc)


class Game(db.Model):
    __tablename__ = "games"
    game_id  = db.Column(db.Integer, primary_key=True)
    slug     = db.Column(db.Text, unique=True, nullable=False)      # e.g. 'pyramid'
    title    = db.Column(db.Text, nullable=False)
    subject  = db.Column(db.Text, nullable=False, default="math")

    high_scores = db.relationship("HighScore", back_populates="game")


class HighScore(db.Model):
    __tablename__ = "high_scores"

    id              = db.Column(db.Integer, primary_key=True)
    game_id         = db.Column(db.Integer, db.ForeignKey("games.game_id"), nullable=False, index=True)
    name            = db.Column(db.Text, nullable=False)
    score           = db.Column(db.Integer, nullable=False)
    level           = db.Column(db.Integer, nullable=False, default=1)
    elapsed_seconds = db.Column(db.Integer, nullable=False, default=0)
    session_sid     = db.Column(db.Text)
    created_at      = db.Column(db.DateTime(timezone=True), default=_utcnow)

    game = db.relationship("Game", back_populates="high_scores")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "level": self.level,
            "elapsed_seconds": self.elapsed_seconds,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
