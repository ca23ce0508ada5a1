# pyramath/games/pyramid/logic/session.py
"""
One player's (or two players') run through a pyramid: four faces at one
level, plus score, streak, turn order and the clock.

Scoring:
  correct pair   (10 + 5 * streak) * level, then streak + 1
  face complete  50 * level
  level up       100 * new level
  wrong pair     streak back to 0 (dead-stone clicks don't count)
"""
from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Set

from ...core.playflow import Playflow
from .engine import SubmitResult, new_face, submit_pair
from .face import Face
from .generator import DEFAULT_GENERATOR
from .levels import MAX_LEVEL, clamp_level, level_name
from .operations import FACE_ORDER, Operation

logger = logging.getLogger(__name__)

POINTS_BASE = 10
POINTS_PER_STREAK = 5
FACE_BONUS = 50
LEVEL_BONUS = 100

DEFAULT_PLAYER_NAME = "Player"


@dataclass(frozen=True)
class FinalResult:
    name: str
    score: int
    level: int
    elapsed_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "score": self.score, "level": self.level,
                "elapsed_seconds": self.elapsed_seconds}


@dataclass(frozen=True)
class TurnResult:
    operation: Operation
    outcome: SubmitResult
    points: int
    face_bonus: int
    streak: int
    score: int
    player: Optional[int]
    pyramid_complete: bool

    def to_dict(self) -> Dict[str, Any]:
        d = self.outcome.to_dict()
        d.update(
            operation=self.operation.value,
            points=self.points,
            face_bonus=self.face_bonus,
            streak=self.streak,
            score=self.score,
            player=self.player,
            pyramid_complete=self.pyramid_complete,
        )
        return d


@dataclass
class PyramidSession:
    level: int
    faces: Dict[Operation, Face]
    generator: str = DEFAULT_GENERATOR
    session_uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    active_face_index: int = 0
    score: int = 0
    streak: int = 0
    multiplayer: bool = False
    current_player: int = 1
    player_scores: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})
    completed_faces: Set[Operation] = field(default_factory=set)
    started_at: float = 0.0
    finished_at: Optional[float] = None
    score_recorded: bool = False
    playflow: Optional[Playflow] = None
    rng: Any = field(default=None, repr=False)
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random()
        if not self.started_at:
            self.started_at = self.clock()
        if self.playflow is None:
            self.playflow = Playflow(session_uuid=self.session_uuid)

    # ---- faces ----
    @property
    def active_operation(self) -> Operation:
        return FACE_ORDER[self.active_face_index]

    @property
    def active_face(self) -> Face:
        return self.faces[self.active_operation]

    @property
    def is_pyramid_complete(self) -> bool:
        return all(f.is_complete for f in self.faces.values())

    def rotate(self, direction: str) -> Operation:
        if not isinstance(direction, str):
            raise ValueError(f"direction must be 'left' or 'right', got {direction!r}")
        d = direction.strip().lower()
        if d == "left":
            self.active_face_index = (self.active_face_index + 3) % 4
        elif d == "right":
            self.active_face_index = (self.active_face_index + 1) % 4
        else:
            raise ValueError(f"direction must be 'left' or 'right', got {direction!r}")
        return self.active_operation

    def rotate_to(self, index: int) -> Operation:
        self.active_face_index = int(index) % 4
        return self.active_operation

    def next_incomplete_face(self) -> Optional[Operation]:
        """Move to the next unfinished face after the current one; None when all are done."""
        for step in range(1, 5):
            idx = (self.active_face_index + step) % 4
            if not self.faces[FACE_ORDER[idx]].is_complete:
                self.active_face_index = idx
                return FACE_ORDER[idx]
        return None

    # ---- play ----
    def _award(self, points: int) -> None:
        self.score += points
        if self.multiplayer:
            self.player_scores[self.current_player] += points

    def submit(self, index_a, index_b) -> TurnResult:
        op = self.active_operation
        face = self.active_face
        res = submit_pair(face, index_a, index_b, rng=self.rng)
        scorer = self.current_player if self.multiplayer else None
        points = bonus = 0

        if res.matched:
            points = (POINTS_BASE + self.streak * POINTS_PER_STREAK) * self.level
            self.streak += 1
            self._award(points)
            self.playflow.record(op.value, True)

            if res.face_complete:
                bonus = FACE_BONUS * self.level
                self._award(bonus)
                self.completed_faces.add(op)
                self.playflow.complete(op.value)
                logger.info("session %s: %s face complete", self.session_uuid, op.value)
                if self.is_pyramid_complete and self.finished_at is None:
                    self.finished_at = self.clock()
                    logger.info("session %s: pyramid complete at L%s, score=%s",
                                self.session_uuid, self.level, self.score)

            if self.multiplayer:
                self.current_player = 2 if self.current_player == 1 else 1
        elif res.resets_streak:
            self.streak = 0
            self.playflow.record(op.value, False)

        return TurnResult(
            operation=op,
            outcome=res,
            points=points,
            face_bonus=bonus,
            streak=self.streak,
            score=self.score,
            player=scorer,
            pyramid_complete=self.is_pyramid_complete,
        )

    # ---- level flow ----
    def deal(self) -> None:
        """Fresh faces at the current level; score is kept, everything else resets."""
        self.faces = {op: new_face(op, self.level, generator=self.generator, rng=self.rng)
                      for op in FACE_ORDER}
        self.active_face_index = 0
        self.streak = 0
        self.current_player = 1
        self.completed_faces = set()
        self.started_at = self.clock()
        self.finished_at = None
        self.score_recorded = False
        self.playflow = Playflow(session_uuid=self.session_uuid)

    def advance_level(self) -> int:
        """
        Level up and deal a new pyramid. At MAX_LEVEL the top level is
        replayed without a bonus. Returns the bonus awarded.
        """
        self.playflow.finalize()
        bonus = 0
        if self.level < MAX_LEVEL:
            self.level += 1
            bonus = LEVEL_BONUS * self.level
            self._award(bonus)
        self.deal()
        logger.info("session %s: now L%s (%s), bonus=%s",
                    self.session_uuid, self.level, level_name(self.level), bonus)
        return bonus

    # ---- readout ----
    def elapsed_seconds(self) -> int:
        end = self.finished_at if self.finished_at is not None else self.clock()
        return max(0, int(end - self.started_at))

    def final_result(self, name: Optional[str] = None) -> FinalResult:
        clean = (name or "").strip()[:32] or DEFAULT_PLAYER_NAME
        return FinalResult(clean, self.score, self.level, self.elapsed_seconds())

    def to_dict(self, selected: Iterable[int] = ()) -> Dict[str, Any]:
        return {
            "session_uuid": self.session_uuid,
            "level": self.level,
            "level_name": level_name(self.level),
            "max_level": MAX_LEVEL,
            "generator": self.generator,
            "active_face": self.active_face_index,
            "active_operation": self.active_operation.value,
            "score": self.score,
            "streak": self.streak,
            "multiplayer": self.multiplayer,
            "current_player": self.current_player if self.multiplayer else None,
            "player_scores": dict(self.player_scores) if self.multiplayer else None,
            "elapsed_seconds": self.elapsed_seconds(),
            "pyramid_complete": self.is_pyramid_complete,
            "faces": [self.faces[op].to_dict(selected if op is self.active_operation else ())
                      for op in FACE_ORDER],
        }


def new_session(level: int = 1, generator: Optional[str] = None, rng=None,
                multiplayer: bool = False, clock: Callable[[], float] = time.time) -> PyramidSession:
    session = PyramidSession(
        level=clamp_level(level),
        faces={},
        generator=generator or DEFAULT_GENERATOR,
        multiplayer=bool(multiplayer),
        rng=rng,
        clock=clock,
    )
    session.deal()
    return session
