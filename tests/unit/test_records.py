# =============================================================================
# tests/unit/test_records.py
# Unit Tests for Record Schemas
# =============================================================================

from dataclasses import FrozenInstanceError, replace
from datetime import timezone

import pytest

from edunexus_core.errors import RecordDecodeError
from edunexus_core.models import (
    MaterialType,
    Message,
    Question,
    Quiz,
    QuizResult,
    StudyMaterial,
    User,
    UserRole,
    new_id,
    parse_timestamp,
)


class TestUser:
    """User wire format"""

    def test_optional_fields_omitted(self):
        user = User(id="u9", name="Cara", role=UserRole.STUDENT)

        assert user.to_dict() == {"id": "u9", "name": "Cara", "role": "STUDENT"}

    def test_from_dict_reads_camel_case(self):
        user = User.from_dict({
            "id": "u1",
            "name": "Dr. Smith",
            "role": "TEACHER",
            "email": "smith@school.test",
            "lastLogin": "2024-03-01T08:00:00.000Z",
        })

        assert user.role is UserRole.TEACHER
        assert user.email == "smith@school.test"
        assert user.last_login == "2024-03-01T08:00:00.000Z"

    def test_invalid_role_rejected(self):
        with pytest.raises(RecordDecodeError) as exc:
            User.from_dict({"id": "u1", "name": "X", "role": "ADMIN"})

        assert exc.value.details["field"] == "role"

    def test_missing_name_rejected(self):
        with pytest.raises(RecordDecodeError):
            User.from_dict({"id": "u1", "role": "STUDENT"})

    def test_create_assigns_id_and_login(self):
        user = User.create("Dana", UserRole.STUDENT, email="dana@school.test")

        assert user.id.startswith("u_")
        assert user.last_login is not None
        assert user.is_student

    def test_records_are_immutable(self):
        user = User(id="u9", name="Cara", role=UserRole.STUDENT)

        with pytest.raises(FrozenInstanceError):
            user.name = "Other"

        renamed = replace(user, last_login="2024-01-01T00:00:00.000Z")
        assert user.last_login is None
        assert renamed.id == user.id


class TestQuiz:
    """Quiz and Question wire format"""

    def test_question_order_preserved(self):
        questions = [
            Question.create("First?", ["a", "b"], 0),
            Question.create("Second?", ["c", "d"], 1, image_url="data:image/png;base64,AAAA"),
            Question.create("Third?", ["e", "f"], 1),
        ]
        quiz = Quiz.create("Ordering", questions, description="Order check")

        decoded = Quiz.from_dict(quiz.to_dict())

        assert [q.text for q in decoded.questions] == ["First?", "Second?", "Third?"]
        assert decoded.questions[1].image_url == "data:image/png;base64,AAAA"
        assert decoded == quiz

    def test_question_options_must_be_list(self):
        with pytest.raises(RecordDecodeError):
            Question.from_dict({"id": "q", "text": "?", "options": "abc", "correctAnswerIndex": 0})

    def test_bad_nested_question_rejects_quiz(self):
        payload = {
            "id": "quiz_1",
            "title": "Broken",
            "description": "",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "questions": [{"id": "qn1", "text": "?"}],
        }

        with pytest.raises(RecordDecodeError):
            Quiz.from_dict(payload)


class TestOtherRecords:
    """Results, materials and messages"""

    def test_result_snapshots_student(self):
        student = User(id="u2", name="Alice Johnson", role=UserRole.STUDENT)
        quiz = Quiz.create("Q", [Question.create("?", ["a", "b"], 0)] * 4)

        result = QuizResult.create(quiz, student, score=3)

        assert result.student_name == "Alice Johnson"
        assert result.total_questions == 4
        assert result.score_pct == pytest.approx(75.0)

    def test_score_pct_zero_questions(self):
        result = QuizResult("r", "q", "u", "n", 0, 0, "2024-01-01T00:00:00Z")

        assert result.score_pct == 0.0

    @pytest.mark.parametrize("score", [float("nan"), float("inf"), float("-inf"), 1.5])
    def test_result_score_must_be_whole_and_finite(self, score):
        wire = QuizResult("r", "q", "u", "n", 1, 2, "2024-01-01T00:00:00Z").to_dict()

        with pytest.raises(RecordDecodeError) as exc:
            QuizResult.from_dict({**wire, "score": score})

        assert exc.value.details["field"] == "score"

    def test_result_integral_float_score_accepted(self):
        wire = QuizResult("r", "q", "u", "n", 1, 2, "2024-01-01T00:00:00Z").to_dict()

        assert QuizResult.from_dict({**wire, "score": 2.0}).score == 2

    @pytest.mark.parametrize("completed_at", ["yesterday", "", 1714550400])
    def test_result_completed_at_must_be_iso(self, completed_at):
        wire = QuizResult("r", "q", "u", "n", 1, 2, "2024-01-01T00:00:00Z").to_dict()

        with pytest.raises(RecordDecodeError) as exc:
            QuizResult.from_dict({**wire, "completedAt": completed_at})

        assert exc.value.details["field"] == "completedAt"

    def test_material_type_enforced(self):
        with pytest.raises(RecordDecodeError):
            StudyMaterial.from_dict({
                "id": "mat_1", "title": "Slides", "type": "pptx",
                "url": "x", "description": "", "createdAt": "2024-01-01T00:00:00Z",
            })

        material = StudyMaterial.create("Slides", MaterialType.PDF, "https://cdn.test/a.pdf")
        assert material.to_dict()["type"] == "pdf"

    def test_message_defaults_unread(self):
        student = User(id="u3", name="Bob Williams", role=UserRole.STUDENT)

        msg = Message.create(student, "Can you explain question 2?")

        assert msg.is_read is False
        assert Message.from_dict(msg.to_dict()) == msg


class TestIdsAndTimestamps:
    """Identifier and timestamp helpers"""

    def test_ids_unique_within_process(self):
        ids = [new_id("quiz") for _ in range(2000)]

        assert len(set(ids)) == len(ids)

    def test_parse_timestamp_handles_z_and_offsets(self):
        utc = parse_timestamp("2024-05-01T09:30:00.000Z")
        offset = parse_timestamp("2024-05-01T10:00:00+02:00")

        assert utc.tzinfo is not None
        assert offset < utc
        assert offset.astimezone(timezone.utc).hour == 8

    def test_parse_timestamp_naive_is_utc(self):
        assert parse_timestamp("2024-05-01T09:30:00").tzinfo == timezone.utc
