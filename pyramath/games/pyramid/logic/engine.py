# pyramath/games/pyramid/logic/engine.py
# Face-level entry points used by the session and the API.
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .face import Face
from .generator import generate_face
from .targets import select_next_target
from .validator import ErrorReason, validate_pair


@dataclass(frozen=True)
class SubmitResult:
    matched: bool
    result: Optional[int]
    error: Optional[ErrorReason]
    face_complete: bool
    new_target: Optional[int] = None
    rewritten: List[int] = field(default_factory=list)  # stones changed by regrouping

    @property
    def resets_streak(self) -> bool:
        return self.error is not None and self.error is not ErrorReason.INVALID_SELECTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": self.matched,
            "result": self.result,
            "error": self.error.value if self.error else None,
            "face_complete": self.face_complete,
            "new_target": self.new_target,
            "rewritten": list(self.rewritten),
        }


def new_face(operation, level: int, generator=None, rng=None) -> Face:
    return generate_face(operation, level, generator=generator, rng=rng)


def current_target(face: Face) -> Optional[int]:
    return face.current_target


def is_face_complete(face: Face) -> bool:
    return face.is_complete


def submit_pair(face: Face, index_a, index_b, rng=None) -> SubmitResult:
    """Validate a pair and, on a match, move the capstone to the next target."""
    outcome = validate_pair(face, index_a, index_b)
    if not outcome.matched:
        return SubmitResult(False, outcome.result, outcome.error, face.is_complete)

    before = face.values()
    new_target = select_next_target(face, rng)
    rewritten = [i for i, (old, new) in enumerate(zip(before, face.values())) if old != new]
    return SubmitResult(True, outcome.result, None, face.is_complete, new_target, rewritten)
