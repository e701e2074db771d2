"""
Progress Service für die E-Learning Plattform

Applies every status transition of ``UserLessonProgress``:
- Quiz submission (qcm lessons) with the retry lockout after a failure
- Self-reported reading (read lessons)
- Instructor validation (pro lessons)
- Progress views for players, instructors and admins

Every function takes an explicit ``Actor``; request state is never read
here. Records are created lazily with ``get_or_create`` on the unique
(user, lesson) pair.

Quiz submission sequence:
    1. Load quiz and lesson, apply the validation policy
    2. Reject if already passed, then reject if still locked
    3. Grade
    4. Re-read the record under ``select_for_update`` and re-check 2
    5. Write pass (terminal) or fail (locked for QUIZ_LOCKOUT_HOURS)

Author: Learning Platform Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ...exceptions import (
    AlreadyPassed,
    CourseNotFound,
    InvalidPayload,
    LessonNotFound,
    PlayerNotFound,
    QuizNotFound,
    StillLocked,
    Unauthorized,
)
from ...modules.models import Course, Lesson, Quiz
from ...progress.models import ProgressStatus, UserLessonProgress
from ...users.actor import Actor
from ...users.models import Role, get_role
from .quiz_grader import QuestionKey, grade, normalize_submission
from .validation_policy import (
    check_quiz_submission,
    resolve_pro_status,
    resolve_read_status,
)

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass
class SubmissionOutcome:
    """Result of an accepted quiz submission."""

    score: float
    passed: bool
    locked_until: Optional[datetime]
    details: List[Dict[str, Any]] = field(default_factory=list)
    progress: Optional[UserLessonProgress] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "passed": self.passed,
            "locked_until": self.locked_until.isoformat() if self.locked_until else None,
            "details": self.details,
        }


def get_lockout_duration() -> timedelta:
    return timedelta(hours=getattr(settings, "QUIZ_LOCKOUT_HOURS", 24))


# --- Lookups ---


def _get_lesson(lesson_id) -> Lesson:
    try:
        return Lesson.objects.select_related("course").get(pk=lesson_id)
    except (Lesson.DoesNotExist, ValueError, TypeError):
        raise LessonNotFound(lesson_id)


def _get_quiz(quiz_id) -> Quiz:
    try:
        return (
            Quiz.objects.select_related("lesson__course")
            .prefetch_related("questions__answers")
            .get(pk=quiz_id)
        )
    except (Quiz.DoesNotExist, ValueError, TypeError):
        raise QuizNotFound(quiz_id)


def _get_player(player_id):
    if player_id in (None, ""):
        raise InvalidPayload("player_id is required")
    try:
        player = User.objects.select_related("profile").get(pk=player_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise PlayerNotFound(player_id)
    if get_role(player) != Role.PLAYER:
        raise PlayerNotFound(player_id)
    return player


def _check_attempt_allowed(progress: UserLessonProgress, now: datetime) -> None:
    if progress.passed_at is not None:
        raise AlreadyPassed(progress.passed_at)
    if progress.is_locked(now):
        raise StillLocked(progress.quiz_locked_until)


# --- Quiz submission ---


def submit_quiz(quiz_id, actor: Actor, answers, now: Optional[datetime] = None) -> SubmissionOutcome:
    """
    Grade a quiz submission of a player and record the outcome.

    Args:
        quiz_id: Quiz being answered
        actor: Submitting player
        answers: Raw list ``[{"question_id": .., "answer_ids": [..]}, ..]``
        now: Reference time (defaults to ``timezone.now()``)

    Returns:
        SubmissionOutcome with score, passed flag, lock time and details

    Raises:
        QuizNotFound, ModeMismatch, Unauthorized, AlreadyPassed, StillLocked
    """
    now = now or timezone.now()
    quiz = _get_quiz(quiz_id)
    lesson = quiz.lesson

    check_quiz_submission(lesson.validation_mode, actor)

    progress, _ = UserLessonProgress.objects.get_or_create(user_id=actor.id, lesson=lesson)
    _check_attempt_allowed(progress, now)

    keys = [QuestionKey(q.pk, q.correct_answer_ids()) for q in quiz.questions.all()]
    result = grade(keys, normalize_submission(answers), quiz.passing_score)
    details = result.details_as_dicts()

    with transaction.atomic():
        # Erneut lesen: eine parallele Abgabe darf ein bestandenes Quiz nicht überschreiben
        progress = UserLessonProgress.objects.select_for_update().get(pk=progress.pk)
        _check_attempt_allowed(progress, now)

        progress.score = result.score
        progress.last_quiz_score = result.score
        progress.last_quiz_attempt_at = now
        progress.last_quiz_details = details

        if result.passed:
            progress.status = ProgressStatus.COMPLETED
            progress.passed_at = now
            progress.quiz_locked_until = None
        else:
            progress.status = ProgressStatus.IN_PROGRESS
            progress.quiz_locked_until = now + get_lockout_duration()

        progress.save()

    if result.passed:
        logger.info(
            f"Quiz {quiz.pk} passed by user {actor.id} with {result.score:.1f}% "
            f"(required {quiz.passing_score}%)"
        )
    else:
        logger.info(
            f"Quiz {quiz.pk} failed by user {actor.id} with {result.score:.1f}%, "
            f"locked until {progress.quiz_locked_until.isoformat()}"
        )

    return SubmissionOutcome(
        score=result.score,
        passed=result.passed,
        locked_until=progress.quiz_locked_until,
        details=details,
        progress=progress,
    )


# --- Read / Pro validation ---


def mark_lesson_read(lesson_id, actor: Actor, status: Optional[str] = None) -> UserLessonProgress:
    """
    Mark a read-validated lesson as completed for the acting player.
    Calling it again on a completed lesson changes nothing.
    """
    lesson = _get_lesson(lesson_id)
    target = resolve_read_status(lesson.validation_mode, actor, status)

    progress, created = UserLessonProgress.objects.get_or_create(
        user_id=actor.id, lesson=lesson, defaults={"status": target}
    )
    if created or progress.status != target:
        if not created:
            progress.status = target
            progress.save(update_fields=["status", "updated_at"])
        logger.info(f"Lesson {lesson.pk} marked as read by user {actor.id}")

    return progress


def pro_validate_lesson(
    lesson_id,
    actor: Actor,
    player_id,
    status: Optional[str] = None,
    completed=None,
) -> UserLessonProgress:
    """
    Set the status of a pro-validated lesson for a player.

    The instructor's decision overwrites the current status; resetting to
    not_started also clears the score.

    Raises:
        LessonNotFound, ModeMismatch, Unauthorized, InvalidPayload,
        PlayerNotFound
    """
    lesson = _get_lesson(lesson_id)
    target = resolve_pro_status(
        lesson.validation_mode,
        actor,
        owns_course=lesson.course.is_owned_by(actor.id),
        status=status,
        completed=completed,
    )
    player = _get_player(player_id)

    progress, _ = UserLessonProgress.objects.get_or_create(user=player, lesson=lesson)
    previous = progress.status
    progress.status = target
    if target == ProgressStatus.NOT_STARTED:
        progress.score = None
    progress.save()

    logger.info(
        f"Lesson {lesson.pk} set from {previous} to {target} for player {player.pk} "
        f"by user {actor.id}"
    )
    return progress


# --- Progress views ---


def _can_view_player(actor: Actor, player) -> bool:
    if actor.is_admin:
        return True
    if actor.is_player:
        return player.pk == actor.id
    if actor.is_instructor:
        profile = getattr(player, "profile", None)
        return profile is not None and profile.assigned_instructor_id == actor.id
    return False


def get_progress(actor: Actor, player_id, course_id=None) -> QuerySet:
    """
    Progress records of one player, optionally limited to one course.

    Players see only their own records, instructors those of the players
    assigned to them, admins everything. Every user may read their own
    records.
    """
    if str(player_id) == str(actor.id):
        user_id = actor.id
    else:
        if actor.is_player:
            raise Unauthorized("Players can only view their own progress")
        player = _get_player(player_id)
        if not _can_view_player(actor, player):
            raise Unauthorized("This player is not assigned to you")
        user_id = player.pk

    records = UserLessonProgress.objects.filter(user_id=user_id).select_related("lesson__course")
    if course_id not in (None, ""):
        try:
            course_id = int(course_id)
        except (TypeError, ValueError):
            raise InvalidPayload("course_id must be an integer", details={"course_id": course_id})
        if not Course.objects.filter(pk=course_id).exists():
            raise CourseNotFound(course_id)
        records = records.filter(lesson__course_id=course_id)

    return records.order_by("lesson__course__order", "lesson__course_id", "lesson__order")


def list_players(actor: Actor) -> QuerySet:
    """Players visible to the actor: all for admins, assigned ones for instructors."""
    players = (
        User.objects.filter(profile__role=Role.PLAYER, is_superuser=False)
        .select_related("profile")
        .order_by("username")
    )
    if actor.is_admin:
        return players
    if actor.is_instructor:
        return players.filter(profile__assigned_instructor_id=actor.id)
    raise Unauthorized("Only instructors and admins can list players")
