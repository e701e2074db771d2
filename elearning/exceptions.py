"""
E-Learning Domain Exceptions

This module provides the exception hierarchy raised by the progress, quiz
and ordering services, together with the DRF exception handler that turns
them into caller-facing responses.

Hierarchy:
- ElearningException
  - NotFound (CourseNotFound, LessonNotFound, QuizNotFound,
    QuestionNotFound, AnswerNotFound, PlayerNotFound)
  - ModeMismatch
  - Unauthorized
  - AlreadyPassed
  - StillLocked
  - InvalidPayload

Everything outside this hierarchy (storage failures included) is logged
and rendered as a generic internal error without internal details.

Author: Learning Platform Team
Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ElearningException(Exception):
    """
    Base exception class for all caller-facing domain errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code used when rendered by the API
        error_code (str): Stable machine-readable identifier
        details (Dict[str, Any]): Additional context for the client

    Example:
        >>> try:
        ...     submit_quiz(quiz_id, actor, answers)
        ... except ElearningException as e:
        ...     logger.info(f"Submission rejected: {e.error_code}")
    """

    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "elearning_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code or self.default_status_code
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "status": "error",
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class NotFound(ElearningException):
    default_status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "not_found"
    resource = "Resource"

    def __init__(self, resource_id: Any = None, message: Optional[str] = None) -> None:
        self.resource_id = resource_id
        super().__init__(
            message or f"{self.resource} not found",
            details={"id": resource_id} if resource_id is not None else None,
        )


class CourseNotFound(NotFound):
    default_error_code = "course_not_found"
    resource = "Course"


class LessonNotFound(NotFound):
    default_error_code = "lesson_not_found"
    resource = "Lesson"


class QuizNotFound(NotFound):
    default_error_code = "quiz_not_found"
    resource = "Quiz"


class QuestionNotFound(NotFound):
    default_error_code = "question_not_found"
    resource = "Question"


class AnswerNotFound(NotFound):
    default_error_code = "answer_not_found"
    resource = "Answer"


class PlayerNotFound(NotFound):
    default_error_code = "player_not_found"
    resource = "Player"


class ModeMismatch(ElearningException):
    """
    Raised when the validation path used does not match the lesson's
    configured validation mode.
    """

    default_status_code = status.HTTP_409_CONFLICT
    default_error_code = "mode_mismatch"

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"This lesson is validated by '{actual}', not by '{expected}'",
            details={"expected_mode": expected, "lesson_mode": actual},
        )


class Unauthorized(ElearningException):
    default_status_code = status.HTTP_403_FORBIDDEN
    default_error_code = "unauthorized"

    def __init__(self, message: str = "You are not allowed to perform this action") -> None:
        super().__init__(message)


class AlreadyPassed(ElearningException):
    default_status_code = status.HTTP_409_CONFLICT
    default_error_code = "already_passed"

    def __init__(self, passed_at: Optional[datetime] = None) -> None:
        self.passed_at = passed_at
        super().__init__(
            "Quiz already passed, no further attempts allowed",
            details={"passed_at": passed_at.isoformat() if passed_at else None},
        )


class StillLocked(ElearningException):
    """
    Raised when a quiz attempt is made before the lockout of a previous
    failed attempt has elapsed. ``until`` is exposed so that the client
    can display the unlock time.
    """

    default_status_code = status.HTTP_423_LOCKED
    default_error_code = "still_locked"

    def __init__(self, until: datetime) -> None:
        self.until = until
        super().__init__(
            "Quiz locked after a failed attempt, retry later",
            details={"locked_until": until.isoformat()},
        )


class InvalidPayload(ElearningException):
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "invalid_payload"


def exception_handler(exc, context):
    """
    DRF exception handler for the E-Learning API.

    - Domain errors are rendered with their ``to_dict()`` payload.
    - DRF's own exceptions (validation, authentication, 404 ...) keep the
      default rendering.
    - Anything else is logged with traceback and answered with a generic
      internal error; storage details never reach the client.
    """
    if isinstance(exc, ElearningException):
        return Response(exc.to_dict(), status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
    )
    return Response(
        {
            "status": "error",
            "message": "Internal server error",
            "error_code": "internal_error",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
