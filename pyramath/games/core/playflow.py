# pyramath/games/core/playflow.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, List
from .game_core import now_ms

Outcome = str  # 'completed'|'abandoned'


@dataclass
class FacePlay:
    face_key: str
    started_at_ms: int = field(default_factory=now_ms)
    ended_at_ms: Optional[int] = None
    attempts: int = 0
    incorrect_attempts: int = 0
    solved_pairs: int = 0
    final_outcome: Optional[Outcome] = None

    def mark_end(self, outcome: Outcome):
        if self.ended_at_ms is None:
            self.ended_at_ms = now_ms()
        self.final_outcome = outcome


@dataclass
class Playflow:
    """Attempt log for one pyramid: one FacePlay per face, opened on first use."""
    session_uuid: str
    started_at_ms: int = field(default_factory=now_ms)
    items: Dict[str, FacePlay] = field(default_factory=dict)  # face key -> FacePlay

    # ---- lifecycle ----
    def face(self, face_key: str) -> FacePlay:
        fp = self.items.get(face_key)
        if fp is None:
            fp = FacePlay(face_key=face_key)
            self.items[face_key] = fp
        return fp

    def record(self, face_key: str, correct: bool):
        fp = self.face(face_key)
        fp.attempts += 1
        if correct:
            fp.solved_pairs += 1
        else:
            fp.incorrect_attempts += 1

    def complete(self, face_key: str):
        fp = self.face(face_key)
        if not fp.final_outcome:
            fp.mark_end('completed')

    def finalize(self):
        """Close every face still open as abandoned (new game / level change)."""
        for fp in self.items.values():
            if not fp.final_outcome:
                fp.mark_end('abandoned')

    # ---- readout ----
    def accuracy(self) -> int:
        correct = sum(fp.solved_pairs for fp in self.items.values())
        wrong = sum(fp.incorrect_attempts for fp in self.items.values())
        if correct == 0:
            return 0
        return round(correct / (correct + wrong) * 100)

    def summary(self) -> Dict:
        totals = dict(attempts=0, correct=0, incorrect=0, faces_completed=0)
        per_face: List[Dict] = []

        for key, fp in self.items.items():
            totals['attempts'] += fp.attempts
            totals['correct'] += fp.solved_pairs
            totals['incorrect'] += fp.incorrect_attempts
            if fp.final_outcome == 'completed':
                totals['faces_completed'] += 1

            per_face.append(dict(
                face=key,
                final_outcome=fp.final_outcome,
                attempts=fp.attempts,
                incorrect_attempts=fp.incorrect_attempts,
                solved_pairs=fp.solved_pairs,
                started_at_ms=fp.started_at_ms,
                ended_at_ms=fp.ended_at_ms,
            ))

        accuracy = self.accuracy()
        report_lines = [
            "Totals",
            f"  Attempts: {totals['attempts']}",
            f"  Correct:  {totals['correct']}",
            f"  Wrong:    {totals['incorrect']}",
            f"  Accuracy: {accuracy}%",
            "",
            "Faces",
        ]
        for row in per_face:
            report_lines.append(
                f"  {row['face']:<9} {row['solved_pairs']} pairs, "
                f"{row['incorrect_attempts']} wrong [{row['final_outcome'] or 'open'}]"
            )

        return dict(
            session_uuid=self.session_uuid,
            started_at_ms=self.started_at_ms,
            ended_at_ms=now_ms(),
            totals=totals,
            accuracy=accuracy,
            per_face=per_face,
            report_text="\n".join(report_lines),
        )
