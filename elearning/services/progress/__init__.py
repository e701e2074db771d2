"""
Progress Services

- validation_policy: Which status may be written for a lesson (read / pro / qcm)
- quiz_grader: Pure multi-select scoring with set equality
- progress_service: Status transitions, quiz lockout and progress views
"""

from .quiz_grader import (
    AnsweredQuestion,
    GradingResult,
    QuestionKey,
    QuestionResult,
    UnansweredQuestion,
    grade,
    normalize_submission,
)
from .validation_policy import (
    check_quiz_submission,
    resolve_pro_status,
    resolve_read_status,
)
from .progress_service import (
    SubmissionOutcome,
    get_progress,
    list_players,
    mark_lesson_read,
    pro_validate_lesson,
    submit_quiz,
)

__all__ = [
    # Grader
    "AnsweredQuestion",
    "UnansweredQuestion",
    "QuestionKey",
    "QuestionResult",
    "GradingResult",
    "grade",
    "normalize_submission",
    # Policy
    "check_quiz_submission",
    "resolve_pro_status",
    "resolve_read_status",
    # Progress
    "SubmissionOutcome",
    "submit_quiz",
    "mark_lesson_read",
    "pro_validate_lesson",
    "get_progress",
    "list_players",
]
