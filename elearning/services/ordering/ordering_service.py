"""
Ordering Service für Kurse, Lektionen und Quiz-Fragen

Keeps the display order of lessons (per course) and questions (per quiz)
dense (1..N) and unique, and applies the per-instructor course order.

Lessons and questions carry a unique (parent, order) constraint, so a
reorder cannot write final positions directly without colliding with a
sibling. Rewrites therefore run in two phases inside one transaction:
    1. every row moves to a temporary position above the current maximum
    2. every row moves to its final position 1..N

Author: Learning Platform Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.db.models import Max, QuerySet

from ...exceptions import (
    CourseNotFound,
    InvalidPayload,
    QuizNotFound,
    Unauthorized,
)
from ...modules.models import Course, Lesson, Question, Quiz
from ...users.actor import Actor

logger = logging.getLogger(__name__)


# --- Helpers ---


def _coerce_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_id_list(ids: Any, field_name: str = "ids") -> List[int]:
    """
    Validate a client supplied id list.

    Raises:
        InvalidPayload: Not a non-empty list, non-integer entries or duplicates
    """
    if not isinstance(ids, (list, tuple)) or not ids:
        raise InvalidPayload(f"'{field_name}' must be a non-empty list of ids")

    parsed: List[int] = []
    for value in ids:
        pk = _coerce_id(value)
        if pk is None:
            raise InvalidPayload(f"Invalid id in '{field_name}'", details={"id": str(value)})
        parsed.append(pk)

    if len(set(parsed)) != len(parsed):
        duplicates = sorted({i for i in parsed if parsed.count(i) > 1})
        raise InvalidPayload(
            f"Duplicate ids in '{field_name}'", details={"duplicates": duplicates}
        )
    return parsed


def _rewrite_orders(queryset: QuerySet, ordered_ids: List[int]) -> None:
    """
    Two-phase rewrite of ``order`` to 1..N following ``ordered_ids``.
    ``ordered_ids`` must name every row of ``queryset``.
    """
    with transaction.atomic():
        current_max = queryset.aggregate(m=Max("order"))["m"] or 0
        offset = current_max + 1

        for index, pk in enumerate(ordered_ids):
            queryset.filter(pk=pk).update(order=offset + index)

        for position, pk in enumerate(ordered_ids, start=1):
            queryset.filter(pk=pk).update(order=position)


def _check_course_owner(course: Course, actor: Actor) -> None:
    if not (actor.is_admin or (actor.is_instructor and course.is_owned_by(actor.id))):
        raise Unauthorized("Only the course instructor or an admin can change this course")


# --- Append positions ---


def next_lesson_order(course: Course) -> int:
    return (Lesson.objects.filter(course=course).aggregate(m=Max("order"))["m"] or 0) + 1


def next_question_order(quiz: Quiz) -> int:
    return (Question.objects.filter(quiz=quiz).aggregate(m=Max("order"))["m"] or 0) + 1


def next_course_order(instructor_id: int) -> int:
    return (
        Course.objects.filter(instructor_id=instructor_id).aggregate(m=Max("order"))["m"] or 0
    ) + 1


# --- Reorder operations ---


def reorder_lessons(course_id, ordered_ids: Iterable, actor: Actor) -> List[Lesson]:
    """
    Reorder the lessons of a course.

    The given ids take positions 1..k in list order; lessons not named keep
    their previous relative order and follow at k+1..N.

    Raises:
        CourseNotFound, Unauthorized, InvalidPayload (unknown or duplicate ids)
    """
    try:
        course = Course.objects.get(pk=course_id)
    except (Course.DoesNotExist, ValueError, TypeError):
        raise CourseNotFound(course_id)
    _check_course_owner(course, actor)

    requested = _parse_id_list(ordered_ids, "lesson_ids")

    with transaction.atomic():
        lessons = Lesson.objects.select_for_update().filter(course=course)
        current = list(lessons.order_by("order", "id").values_list("id", flat=True))
        current_set = set(current)

        unknown = [pk for pk in requested if pk not in current_set]
        if unknown:
            raise InvalidPayload(
                "Some lessons do not belong to this course", details={"unknown_ids": unknown}
            )

        named = set(requested)
        final_ids = requested + [pk for pk in current if pk not in named]
        _rewrite_orders(Lesson.objects.filter(course=course), final_ids)

    logger.info(f"Lessons of course {course.pk} reordered by user {actor.id}: {final_ids}")
    return list(Lesson.objects.filter(course=course).order_by("order"))


def reorder_quiz_questions(quiz_id, ordered_ids: Iterable, actor: Actor) -> List[Question]:
    """
    Reorder the questions of a quiz.

    The id list must name every question of the quiz exactly once.

    Raises:
        QuizNotFound, Unauthorized, InvalidPayload (not a bijection)
    """
    try:
        quiz = Quiz.objects.select_related("lesson__course").get(pk=quiz_id)
    except (Quiz.DoesNotExist, ValueError, TypeError):
        raise QuizNotFound(quiz_id)
    _check_course_owner(quiz.lesson.course, actor)

    requested = _parse_id_list(ordered_ids, "question_ids")

    with transaction.atomic():
        questions = Question.objects.select_for_update().filter(quiz=quiz)
        current = set(questions.values_list("id", flat=True))

        if set(requested) != current:
            raise InvalidPayload(
                "The id list must contain every question of the quiz exactly once",
                details={
                    "missing_ids": sorted(current - set(requested)),
                    "unknown_ids": sorted(set(requested) - current),
                },
            )
        _rewrite_orders(Question.objects.filter(quiz=quiz), requested)

    logger.info(f"Questions of quiz {quiz.pk} reordered by user {actor.id}: {requested}")
    return list(Question.objects.filter(quiz=quiz).order_by("order"))


def reorder_courses(ids: Iterable, actor: Actor) -> Dict[str, int]:
    """
    Apply a new display order to courses.

    Ids the actor may not reorder (foreign or unknown) are dropped; the
    remaining ones take positions 1..k in list order. Admins may reorder
    every course.

    Returns:
        {"updated_count": k}

    Raises:
        Unauthorized: Players, or none of the existing ids belong to the actor
        InvalidPayload: Malformed list, or none of the ids exists
    """
    if not actor.is_staff_member:
        raise Unauthorized("Only instructors and admins can reorder courses")

    if not isinstance(ids, (list, tuple)) or not ids:
        raise InvalidPayload("'ids' must be a non-empty list of ids")

    requested: List[int] = []
    for value in ids:
        pk = _coerce_id(value)
        if pk is not None and pk not in requested:
            requested.append(pk)
    if not requested:
        raise InvalidPayload("No valid course ids")

    existing = Course.objects.filter(pk__in=requested)
    allowed = existing if actor.is_admin else existing.filter(instructor_id=actor.id)
    allowed_ids = set(allowed.values_list("id", flat=True))

    if not allowed_ids:
        if existing.exists():
            raise Unauthorized("None of these courses belong to you")
        raise InvalidPayload("No valid course ids", details={"ids": requested})

    applied = [pk for pk in requested if pk in allowed_ids]
    skipped = len(ids) - len(applied)

    with transaction.atomic():
        for position, pk in enumerate(applied, start=1):
            Course.objects.filter(pk=pk).update(order=position)

    if skipped:
        logger.warning(f"Course reorder by user {actor.id}: {skipped} id(s) ignored")
    logger.info(f"Courses reordered by user {actor.id}: {applied}")
    return {"updated_count": len(applied)}


# --- Compaction after deletion ---


def compact_lesson_orders(course_id) -> None:
    """Close gaps after a lesson was deleted."""
    with transaction.atomic():
        lessons = Lesson.objects.select_for_update().filter(course_id=course_id)
        ids = list(lessons.order_by("order", "id").values_list("id", flat=True))
        _rewrite_orders(Lesson.objects.filter(course_id=course_id), ids)


def compact_question_orders(quiz_id) -> None:
    """Close gaps after a question was deleted."""
    with transaction.atomic():
        questions = Question.objects.select_for_update().filter(quiz_id=quiz_id)
        ids = list(questions.order_by("order", "id").values_list("id", flat=True))
        _rewrite_orders(Question.objects.filter(quiz_id=quiz_id), ids)
