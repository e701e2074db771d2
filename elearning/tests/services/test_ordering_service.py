from django.test import TestCase

from elearning.exceptions import CourseNotFound, InvalidPayload, QuizNotFound, Unauthorized
from elearning.modules.models import Course, Lesson, Question
from elearning.services.ordering import (
    compact_lesson_orders,
    compact_question_orders,
    next_course_order,
    next_lesson_order,
    reorder_courses,
    reorder_lessons,
    reorder_quiz_questions,
)
from elearning.users.models import Role

from ..helpers import actor_for, create_course, create_lessons, create_quiz, create_user


def lesson_orders(course):
    return list(Lesson.objects.filter(course=course).order_by("order").values_list("id", "order"))


class LessonReorderTests(TestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.course = create_course(self.instructor)
        self.l1, self.l2, self.l3, self.l4 = create_lessons(self.course, 4)

    def test_partial_list_appends_unnamed_lessons(self):
        reorder_lessons(self.course.pk, [self.l3.pk, self.l1.pk], actor_for(self.instructor))

        self.assertEqual(
            lesson_orders(self.course),
            [(self.l3.pk, 1), (self.l1.pk, 2), (self.l2.pk, 3), (self.l4.pk, 4)],
        )

    def test_full_list(self):
        ids = [self.l4.pk, self.l3.pk, self.l2.pk, self.l1.pk]
        result = reorder_lessons(self.course.pk, ids, actor_for(self.instructor))
        self.assertEqual([lesson.pk for lesson in result], ids)
        self.assertEqual([lesson.order for lesson in result], [1, 2, 3, 4])

    def test_foreign_lesson_rejects_whole_batch(self):
        other_course = create_course(self.instructor, title="Other", order=2)
        (foreign,) = create_lessons(other_course, 1)
        before = lesson_orders(self.course)

        with self.assertRaises(InvalidPayload):
            reorder_lessons(self.course.pk, [self.l2.pk, foreign.pk], actor_for(self.instructor))
        self.assertEqual(lesson_orders(self.course), before)

    def test_duplicates_and_garbage_are_invalid(self):
        actor = actor_for(self.instructor)
        for payload in ([self.l1.pk, self.l1.pk], ["abc"], [], None):
            with self.assertRaises(InvalidPayload):
                reorder_lessons(self.course.pk, payload, actor)

    def test_only_owner_or_admin(self):
        other = create_user("other", Role.INSTRUCTOR)
        admin = create_user("boss", Role.ADMIN)
        with self.assertRaises(Unauthorized):
            reorder_lessons(self.course.pk, [self.l2.pk], actor_for(other))
        reorder_lessons(self.course.pk, [self.l2.pk], actor_for(admin))
        self.assertEqual(lesson_orders(self.course)[0], (self.l2.pk, 1))

    def test_unknown_course(self):
        with self.assertRaises(CourseNotFound):
            reorder_lessons(999999, [1], actor_for(self.instructor))

    def test_append_and_compact(self):
        self.assertEqual(next_lesson_order(self.course), 5)
        self.l2.delete()
        compact_lesson_orders(self.course.pk)
        self.assertEqual(
            lesson_orders(self.course), [(self.l1.pk, 1), (self.l3.pk, 2), (self.l4.pk, 3)]
        )


class QuestionReorderTests(TestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        course = create_course(self.instructor)
        (lesson,) = create_lessons(course, 1, mode="qcm")
        self.quiz, _ = create_quiz(lesson, [[True], [True], [True]])
        self.q1, self.q2, self.q3 = list(self.quiz.questions.order_by("order"))

    def _orders(self):
        return list(
            Question.objects.filter(quiz=self.quiz).order_by("order").values_list("id", flat=True)
        )

    def test_bijection_is_applied(self):
        reorder_quiz_questions(
            self.quiz.pk, [self.q2.pk, self.q3.pk, self.q1.pk], actor_for(self.instructor)
        )
        self.assertEqual(self._orders(), [self.q2.pk, self.q3.pk, self.q1.pk])
        self.assertEqual(
            sorted(Question.objects.filter(quiz=self.quiz).values_list("order", flat=True)),
            [1, 2, 3],
        )

    def test_missing_question_is_rejected(self):
        with self.assertRaises(InvalidPayload) as ctx:
            reorder_quiz_questions(self.quiz.pk, [self.q2.pk, self.q1.pk], actor_for(self.instructor))
        self.assertEqual(ctx.exception.details["missing_ids"], [self.q3.pk])
        self.assertEqual(self._orders(), [self.q1.pk, self.q2.pk, self.q3.pk])

    def test_extra_question_is_rejected(self):
        with self.assertRaises(InvalidPayload):
            reorder_quiz_questions(
                self.quiz.pk,
                [self.q1.pk, self.q2.pk, self.q3.pk, 999999],
                actor_for(self.instructor),
            )

    def test_unknown_quiz(self):
        with self.assertRaises(QuizNotFound):
            reorder_quiz_questions(999999, [1], actor_for(self.instructor))

    def test_compact_after_delete(self):
        self.q1.delete()
        compact_question_orders(self.quiz.pk)
        self.assertEqual(
            list(Question.objects.filter(quiz=self.quiz).order_by("order").values_list("order", flat=True)),
            [1, 2],
        )


class CourseReorderTests(TestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.other = create_user("other", Role.INSTRUCTOR)
        self.c1 = create_course(self.instructor, "C1", order=1)
        self.c2 = create_course(self.instructor, "C2", order=2)
        self.foreign = create_course(self.other, "F", order=1)

    def test_foreign_ids_are_filtered(self):
        result = reorder_courses(
            [self.c2.pk, self.foreign.pk, self.c1.pk], actor_for(self.instructor)
        )
        self.assertEqual(result, {"updated_count": 2})
        self.c1.refresh_from_db()
        self.c2.refresh_from_db()
        self.foreign.refresh_from_db()
        self.assertEqual((self.c2.order, self.c1.order), (1, 2))
        self.assertEqual(self.foreign.order, 1)

    def test_only_foreign_ids_is_unauthorized(self):
        with self.assertRaises(Unauthorized):
            reorder_courses([self.foreign.pk], actor_for(self.instructor))

    def test_empty_or_unknown_is_invalid(self):
        with self.assertRaises(InvalidPayload):
            reorder_courses([], actor_for(self.instructor))
        with self.assertRaises(InvalidPayload):
            reorder_courses(["x", 999999], actor_for(self.instructor))

    def test_admin_reorders_any_course(self):
        admin = create_user("boss", Role.ADMIN)
        result = reorder_courses([self.foreign.pk, self.c1.pk], actor_for(admin))
        self.assertEqual(result["updated_count"], 2)

    def test_player_is_unauthorized(self):
        player = create_user("player", Role.PLAYER)
        with self.assertRaises(Unauthorized):
            reorder_courses([self.c1.pk], actor_for(player))

    def test_next_course_order_is_per_instructor(self):
        self.assertEqual(next_course_order(self.instructor.pk), 3)
        self.assertEqual(next_course_order(self.other.pk), 2)
        self.assertEqual(Course.objects.count(), 3)
