"""
Sichtbarkeit und Besitz im Kursbaum.

- Admins sehen alle Kurse
- Instruktoren sehen ihre eigenen Kurse
- Spieler sehen nur veröffentlichte Kurse

Objekte außerhalb der Sichtbarkeit werden wie nicht vorhandene behandelt.
"""

from django.db.models import QuerySet

from ...exceptions import (
    AnswerNotFound,
    CourseNotFound,
    LessonNotFound,
    QuestionNotFound,
    QuizNotFound,
    Unauthorized,
)
from ...users.models import Role, get_role
from ..models import Answer, Course, Lesson, Question, Quiz
from ..permissions import is_course_owner_or_admin


def visible_courses(user) -> QuerySet:
    role = get_role(user)
    courses = Course.objects.select_related("instructor")
    if role == Role.ADMIN:
        return courses
    if role == Role.INSTRUCTOR:
        return courses.filter(instructor=user)
    return courses.filter(is_published=True)


def _get(queryset, pk, not_found):
    try:
        return queryset.get(pk=pk)
    except (queryset.model.DoesNotExist, ValueError, TypeError):
        raise not_found(pk)


def get_visible_course(user, course_id) -> Course:
    return _get(visible_courses(user), course_id, CourseNotFound)


def get_visible_lesson(user, lesson_id) -> Lesson:
    lessons = Lesson.objects.select_related("course").filter(course__in=visible_courses(user))
    return _get(lessons, lesson_id, LessonNotFound)


def get_visible_quiz(user, quiz_id) -> Quiz:
    quizzes = Quiz.objects.select_related("lesson__course").filter(
        lesson__course__in=visible_courses(user)
    )
    return _get(quizzes, quiz_id, QuizNotFound)


def get_visible_question(user, question_id) -> Question:
    questions = Question.objects.select_related("quiz__lesson__course").filter(
        quiz__lesson__course__in=visible_courses(user)
    )
    return _get(questions, question_id, QuestionNotFound)


def get_visible_answer(user, answer_id) -> Answer:
    answers = Answer.objects.select_related("question__quiz__lesson__course").filter(
        question__quiz__lesson__course__in=visible_courses(user)
    )
    return _get(answers, answer_id, AnswerNotFound)


def require_course_owner(user, course: Course) -> None:
    if not is_course_owner_or_admin(user, course):
        raise Unauthorized("Only the course instructor or an admin can change this course")
