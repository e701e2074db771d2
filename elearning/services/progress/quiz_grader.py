"""
Quiz Grader

Pure multi-select scoring. A question counts as correct only if the set of
selected answer ids equals the set of correct answer ids; order and
duplicates do not matter. No persistence happens here.

Score:
    score = correct / total * 100   (float, not rounded; 0 if total == 0)
    passed = score >= passing_score

Author: Learning Platform Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union


@dataclass(frozen=True)
class QuestionKey:
    """Correct answer set of one question."""

    question_id: int
    correct_ids: FrozenSet[int]


@dataclass(frozen=True)
class AnsweredQuestion:
    question_id: int
    answer_ids: FrozenSet[int]


@dataclass(frozen=True)
class UnansweredQuestion:
    question_id: int

    @property
    def answer_ids(self) -> FrozenSet[int]:
        return frozenset()


Submission = Union[AnsweredQuestion, UnansweredQuestion]


@dataclass(frozen=True)
class QuestionResult:
    question_id: int
    selected_ids: FrozenSet[int]
    correct_ids: FrozenSet[int]
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question_id": self.question_id,
            "selected_ids": sorted(self.selected_ids),
            "correct_ids": sorted(self.correct_ids),
            "is_correct": self.is_correct,
        }


@dataclass(frozen=True)
class GradingResult:
    score: float
    passed: bool
    details: List[QuestionResult] = field(default_factory=list)

    @property
    def correct_count(self) -> int:
        return sum(1 for d in self.details if d.is_correct)

    def details_as_dicts(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.details]


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_submission(raw_answers: Any) -> List[Submission]:
    """
    Turn the raw client payload into submission entries.

    Expected shape: ``[{"question_id": 1, "answer_ids": [3, 4]}, ...]``.
    Entries without a usable question id are dropped. Missing, null or
    non-list ``answer_ids`` make the question unanswered; answer ids that
    cannot be read as integers are dropped.
    """
    if not isinstance(raw_answers, (list, tuple)):
        return []

    submissions: List[Submission] = []
    for entry in raw_answers:
        if not isinstance(entry, dict):
            continue
        question_id = _to_int(entry.get("question_id"))
        if question_id is None:
            continue

        raw_ids = entry.get("answer_ids")
        if not isinstance(raw_ids, (list, tuple)):
            submissions.append(UnansweredQuestion(question_id))
            continue

        answer_ids = frozenset(i for i in (_to_int(v) for v in raw_ids) if i is not None)
        submissions.append(AnsweredQuestion(question_id, answer_ids))
    return submissions


def grade(
    keys: Iterable[QuestionKey],
    submissions: Iterable[Submission],
    passing_score: Union[int, float],
) -> GradingResult:
    """
    Grade a quiz submission.

    Args:
        keys: One key per question of the quiz
        submissions: Normalised submission; questions outside the quiz
            are ignored, and a later entry for the same question wins
        passing_score: Minimum percentage to pass

    Returns:
        GradingResult with score, passed flag and per-question details
    """
    selected_by_question: Dict[int, FrozenSet[int]] = {}
    for submission in submissions:
        selected_by_question[submission.question_id] = submission.answer_ids

    details: List[QuestionResult] = []
    for key in keys:
        selected = selected_by_question.get(key.question_id, frozenset())
        details.append(
            QuestionResult(
                question_id=key.question_id,
                selected_ids=selected,
                correct_ids=key.correct_ids,
                is_correct=selected == key.correct_ids,
            )
        )

    total = len(details)
    correct = sum(1 for d in details if d.is_correct)
    score = (correct / total) * 100 if total else 0.0

    return GradingResult(score=score, passed=score >= passing_score, details=details)
