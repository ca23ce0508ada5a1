# pyramath/games/pyramid/logic/__init__.py
from .operations import FACE_ORDER, Operation, ordered_operands, pair_result
from .levels import MAX_LEVEL, DivisionRange, NumberRange, get_range, level_name
from .face import Face, Role, Stone, StoneState, PAIRS_PER_FACE, STONES_PER_FACE
from .generator import (
    PairedGenerator,
    PuzzleGenerator,
    RangeSampleGenerator,
    fallback_pair,
    generate_face,
    get_generator,
)
from .targets import achievable_results, find_pairs_for_target, select_next_target
from .validator import ErrorReason, PairOutcome, validate_pair
from .regroup import RegroupReport, regroup_face, regroup_values
from .engine import SubmitResult, current_target, is_face_complete, new_face, submit_pair
from .session import FinalResult, PyramidSession, TurnResult, new_session

__all__ = [
    "FACE_ORDER", "Operation", "ordered_operands", "pair_result",
    "MAX_LEVEL", "DivisionRange", "NumberRange", "get_range", "level_name",
    "Face", "Role", "Stone", "StoneState", "PAIRS_PER_FACE", "STONES_PER_FACE",
    "PairedGenerator", "PuzzleGenerator", "RangeSampleGenerator",
    "fallback_pair", "generate_face", "get_generator",
    "achievable_results", "find_pairs_for_target", "select_next_target",
    "ErrorReason", "PairOutcome", "validate_pair",
    "RegroupReport", "regroup_face", "regroup_values",
    "SubmitResult", "current_target", "is_face_complete", "new_face", "submit_pair",
    "FinalResult", "PyramidSession", "TurnResult", "new_session",
]
