# pyramath/games/pyramid/leaderboard.py
# High-score table for the pyramid game: top N by score, ties by who got there first.
from __future__ import annotations
import logging
from typing import List, Optional

from ...db import db
from ...models import Game, HighScore

logger = logging.getLogger(__name__)

GAME_SLUG = "pyramid"
GAME_TITLE = "Pyramath"
DEFAULT_SIZE = 10


def get_or_create_game(slug: str = GAME_SLUG, title: str = GAME_TITLE) -> Game:
    game = Game.query.filter_by(slug=slug).first()
    if not game:
        # normally seeded; create if missing
        game = Game(slug=slug, title=title, subject="math")
        db.session.add(game)
        db.session.flush()
    return game


def _ranked(game: Game):
    return (HighScore.query
            .filter(HighScore.game_id == game.game_id)
            .order_by(HighScore.score.desc(), HighScore.created_at.asc(), HighScore.id.asc()))


def top_scores(limit: int = DEFAULT_SIZE) -> List[HighScore]:
    return _ranked(get_or_create_game()).limit(limit).all()


def is_high_score(score: int, size: int = DEFAULT_SIZE) -> bool:
    """True if `score` would make the table: fewer than `size` rows, or it beats the lowest."""
    rows = top_scores(size)
    if len(rows) < size:
        return True
    return score > rows[-1].score


def add_high_score(name: str, score: int, level: int, elapsed_seconds: int,
                   session_sid: Optional[str] = None, size: int = DEFAULT_SIZE) -> HighScore:
    """Insert a row, drop anything that fell off the bottom, commit."""
    game = get_or_create_game()
    row = HighScore(
        game_id=game.game_id,
        name=name or "Player",
        score=int(score),
        level=int(level),
        elapsed_seconds=int(elapsed_seconds),
        session_sid=session_sid,
    )
    db.session.add(row)
    db.session.flush()

    stale = _ranked(game).offset(size).all()
    for old in stale:
        db.session.delete(old)
    db.session.commit()
    logger.info("high score: %s %s (L%s, %ss), pruned %d", row.name, row.score, row.level,
                row.elapsed_seconds, len(stale))
    return row
