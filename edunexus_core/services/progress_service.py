"""
Progress Service - per-student quiz statistics.

Aggregates the Users and Results collections into the table teachers use to
monitor students: attempts, average score and a traffic-light band.
"""

from typing import List, Optional

import numpy as np
import pandas as pd

from edunexus_core.models import QuizResult, User, parse_timestamp
from .base_service import BaseService

# =============================================================================
# SCORE BANDS
# =============================================================================

HIGH_SCORE_PCT = 70
MEDIUM_SCORE_PCT = 40

PROGRESS_COLUMNS = [
    "student_id",
    "student_name",
    "last_login",
    "quizzes_taken",
    "avg_score_pct",
    "band",
]


def score_band(pct: float) -> str:
    if pct >= HIGH_SCORE_PCT:
        return "high"
    if pct >= MEDIUM_SCORE_PCT:
        return "medium"
    return "low"


def build_progress_frame(students: List[User], results: List[QuizResult]) -> pd.DataFrame:
    """
    One row per student, in the order given.

    avg_score_pct is the mean of score/totalQuestions*100 over every attempt,
    rounded half up; students without attempts get 0.
    """
    students_df = pd.DataFrame(
        [{"student_id": s.id, "student_name": s.name, "last_login": s.last_login} for s in students],
        columns=["student_id", "student_name", "last_login"],
    )

    results_df = pd.DataFrame(
        [{"student_id": r.student_id, "score_pct": r.score_pct} for r in results],
        columns=["student_id", "score_pct"],
    )
    stats = (
        results_df.groupby("student_id")["score_pct"]
        .agg(quizzes_taken="count", avg_score_pct="mean")
        .reset_index()
    )

    df = students_df.merge(stats, on="student_id", how="left")
    df["last_login"] = pd.to_datetime(df["last_login"], utc=True, errors="coerce")
    df["quizzes_taken"] = df["quizzes_taken"].fillna(0).astype(int)
    avg = df["avg_score_pct"].astype(float).fillna(0.0)
    df["avg_score_pct"] = np.floor(avg + 0.5).astype(int)
    df["band"] = df["avg_score_pct"].map(score_band)

    return df[PROGRESS_COLUMNS]


class ProgressService(BaseService):
    """Student monitoring built on top of the collection accessors."""

    def __init__(self, storage):
        super().__init__()
        self.storage = storage

    async def student_progress(self) -> pd.DataFrame:
        students = await self.storage.users.list_students()
        results = await self.storage.results.list_all()
        with self.log_operation(f"Building progress for {len(students)} students"):
            return build_progress_frame(students, results)

    async def latest_result(self, student_id: str) -> Optional[QuizResult]:
        """Most recent attempt by ``student_id``, comparing parsed completedAt."""
        attempts = [
            r for r in await self.storage.results.list_all()
            if r.student_id == student_id
        ]
        if not attempts:
            return None
        return max(attempts, key=lambda r: parse_timestamp(r.completed_at))
