# =============================================================================
# edunexus_core/models/records.py
# Record Schemas for the five EduNexus collections
# =============================================================================
"""
Typed records stored by the persistence layer.

Records are frozen dataclasses. A change is made by building a new value
(``dataclasses.replace``) and storing it under the same id. The wire format
is camelCase JSON; optional fields are omitted when unset.
"""

from __future__ import annotations
import math
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from edunexus_core.errors import RecordDecodeError


class UserRole(str, Enum):
    """Role of a platform user. Fixed at creation."""
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class MaterialType(str, Enum):
    """Kind of study material. Fixed at creation."""
    VIDEO = "video"
    IMAGE = "image"
    PDF = "pdf"
    DOC = "doc"


# =============================================================================
# IDS AND TIMESTAMPS
# =============================================================================

_id_lock = threading.Lock()
_last_id_millis = 0


def new_id(prefix: str) -> str:
    """
    Return a timestamp-derived id such as ``quiz_1718000000000``.

    The millisecond part is strictly increasing within the process, so two
    ids never collide even when created in the same millisecond.
    """
    global _last_id_millis
    with _id_lock:
        millis = int(time.time() * 1000)
        if millis <= _last_id_millis:
            millis = _last_id_millis + 1
        _last_id_millis = millis
    return f"{prefix}_{millis}"


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_iso(moment: datetime) -> str:
    """Format a datetime the same way as ``utc_now_iso``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken as UTC. Raises ValueError on garbage.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# DECODING HELPERS
# =============================================================================

def _require(data: Dict[str, Any], key: str, record_type: str) -> Any:
    if not isinstance(data, dict):
        raise RecordDecodeError(
            f"{record_type} must be a JSON object, got {type(data).__name__}",
            record_type=record_type,
        )
    if key not in data or data[key] is None:
        raise RecordDecodeError(
            f"{record_type} is missing '{key}'",
            record_type=record_type,
            field=key,
        )
    return data[key]


def _enum(enum_cls, value: Any, record_type: str, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise RecordDecodeError(
            f"{record_type}.{key} has invalid value {value!r}",
            record_type=record_type,
            field=key,
        ) from None


def _int(value: Any, record_type: str, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordDecodeError(
            f"{record_type}.{key} must be a number",
            record_type=record_type,
            field=key,
        )
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise RecordDecodeError(
            f"{record_type}.{key} must be a whole number, got {value!r}",
            record_type=record_type,
            field=key,
        )
    return int(value)


def _timestamp(value: Any, record_type: str, key: str) -> str:
    try:
        parse_timestamp(value)
    except (AttributeError, TypeError, ValueError):
        raise RecordDecodeError(
            f"{record_type}.{key} is not an ISO-8601 timestamp: {value!r}",
            record_type=record_type,
            field=key,
        ) from None
    return value


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class User:
    id: str
    name: str
    role: UserRole
    email: Optional[str] = None
    last_login: Optional[str] = None

    @classmethod
    def create(cls, name: str, role: UserRole, email: Optional[str] = None) -> User:
        """New user with a fresh id; registration counts as the first login."""
        return cls(
            id=new_id("u"),
            name=name,
            role=UserRole(role),
            email=email,
            last_login=utc_now_iso(),
        )

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "lastLogin": self.last_login,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> User:
        return cls(
            id=str(_require(data, "id", "User")),
            name=_require(data, "name", "User"),
            role=_enum(UserRole, _require(data, "role", "User"), "User", "role"),
            email=data.get("email"),
            last_login=data.get("lastLogin"),
        )


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: Tuple[str, ...]
    correct_answer_index: int
    image_url: Optional[str] = None

    @classmethod
    def create(
        cls,
        text: str,
        options: Iterable[str],
        correct_answer_index: int,
        image_url: Optional[str] = None,
    ) -> Question:
        return cls(
            id=new_id("q"),
            text=text,
            options=tuple(options),
            correct_answer_index=correct_answer_index,
            image_url=image_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
            "correctAnswerIndex": self.correct_answer_index,
            "imageUrl": self.image_url,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Question:
        options = _require(data, "options", "Question")
        if not isinstance(options, list):
            raise RecordDecodeError(
                "Question.options must be a list",
                record_type="Question",
                field="options",
            )
        return cls(
            id=str(_require(data, "id", "Question")),
            text=_require(data, "text", "Question"),
            options=tuple(options),
            correct_answer_index=_int(
                _require(data, "correctAnswerIndex", "Question"),
                "Question",
                "correctAnswerIndex",
            ),
            image_url=data.get("imageUrl"),
        )


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    description: str
    questions: Tuple[Question, ...] = field(default_factory=tuple)
    created_at: str = ""

    @classmethod
    def create(
        cls,
        title: str,
        questions: Iterable[Question],
        description: str = "",
    ) -> Quiz:
        return cls(
            id=new_id("quiz"),
            title=title,
            description=description,
            questions=tuple(questions),
            created_at=utc_now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "questions": [q.to_dict() for q in self.questions],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Quiz:
        questions = _require(data, "questions", "Quiz")
        if not isinstance(questions, list):
            raise RecordDecodeError(
                "Quiz.questions must be a list",
                record_type="Quiz",
                field="questions",
            )
        return cls(
            id=str(_require(data, "id", "Quiz")),
            title=_require(data, "title", "Quiz"),
            description=data.get("description") or "",
            questions=tuple(Question.from_dict(q) for q in questions),
            created_at=_require(data, "createdAt", "Quiz"),
        )


@dataclass(frozen=True)
class QuizResult:
    id: str
    quiz_id: str
    student_id: str
    student_name: str
    score: int
    total_questions: int
    completed_at: str

    @classmethod
    def create(cls, quiz: Quiz, student: User, score: int) -> QuizResult:
        """Result of one attempt; the student's name is snapshotted."""
        return cls(
            id=new_id("res"),
            quiz_id=quiz.id,
            student_id=student.id,
            student_name=student.name,
            score=score,
            total_questions=len(quiz.questions),
            completed_at=utc_now_iso(),
        )

    @property
    def score_pct(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.score / self.total_questions * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "quizId": self.quiz_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QuizResult:
        name = "QuizResult"
        return cls(
            id=str(_require(data, "id", name)),
            quiz_id=str(_require(data, "quizId", name)),
            student_id=str(_require(data, "studentId", name)),
            student_name=_require(data, "studentName", name),
            score=_int(_require(data, "score", name), name, "score"),
            total_questions=_int(_require(data, "totalQuestions", name), name, "totalQuestions"),
            completed_at=_timestamp(_require(data, "completedAt", name), name, "completedAt"),
        )


@dataclass(frozen=True)
class StudyMaterial:
    id: str
    title: str
    type: MaterialType
    url: str
    description: str
    created_at: str

    @classmethod
    def create(
        cls,
        title: str,
        material_type: MaterialType,
        url: str,
        description: str = "Uploaded by Teacher",
    ) -> StudyMaterial:
        return cls(
            id=new_id("mat"),
            title=title,
            type=MaterialType(material_type),
            url=url,
            description=description,
            created_at=utc_now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "url": self.url,
            "description": self.description,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StudyMaterial:
        name = "StudyMaterial"
        return cls(
            id=str(_require(data, "id", name)),
            title=_require(data, "title", name),
            type=_enum(MaterialType, _require(data, "type", name), name, "type"),
            url=_require(data, "url", name),
            description=data.get("description") or "",
            created_at=_require(data, "createdAt", name),
        )


@dataclass(frozen=True)
class Message:
    # No mutator for is_read exists in this version
    id: str
    student_id: str
    student_name: str
    content: str
    timestamp: str
    is_read: bool = False

    @classmethod
    def create(cls, student: User, content: str) -> Message:
        return cls(
            id=new_id("msg"),
            student_id=student.id,
            student_name=student.name,
            content=content,
            timestamp=utc_now_iso(),
            is_read=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "content": self.content,
            "timestamp": self.timestamp,
            "isRead": self.is_read,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Message:
        name = "Message"
        return cls(
            id=str(_require(data, "id", name)),
            student_id=str(_require(data, "studentId", name)),
            student_name=_require(data, "studentName", name),
            content=_require(data, "content", name),
            timestamp=_require(data, "timestamp", name),
            is_read=bool(data.get("isRead", False)),
        )
