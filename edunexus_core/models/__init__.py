from .records import (
    UserRole,
    MaterialType,
    User,
    Question,
    Quiz,
    QuizResult,
    StudyMaterial,
    Message,
    new_id,
    utc_now_iso,
    to_iso,
    parse_timestamp,
)

__all__ = [
    "UserRole",
    "MaterialType",
    "User",
    "Question",
    "Quiz",
    "QuizResult",
    "StudyMaterial",
    "Message",
    "new_id",
    "utc_now_iso",
    "to_iso",
    "parse_timestamp",
]
