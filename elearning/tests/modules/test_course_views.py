from rest_framework import status
from rest_framework.test import APITestCase

from elearning.modules.models import Course, Lesson, Question, Quiz
from elearning.users.models import Role

from ..helpers import create_course, create_lessons, create_quiz, create_user

"""
    API-Tests für Kurse, Lektionen und Quizze: Sichtbarkeit, Besitz,
    automatische Reihenfolge und Umsortierung.
"""

API = "/api/elearning"


class CourseApiTests(APITestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.other = create_user("other", Role.INSTRUCTOR)
        self.player = create_user("player", Role.PLAYER, instructor=self.instructor)
        self.published = create_course(self.instructor, "Published", is_published=True, order=1)
        self.draft = create_course(self.instructor, "Draft", is_published=False, order=2)

    def test_player_sees_only_published_courses(self):
        self.client.force_authenticate(self.player)
        response = self.client.get(f"{API}/courses/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c["id"] for c in response.json()], [self.published.pk])

        response = self.client.get(f"{API}/courses/{self.draft.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_instructor_creates_course_at_end(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/courses/",
            {"title": "New", "description": "Desc", "order": 99},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["order"], 3)
        self.assertEqual(response.json()["instructor"], self.instructor.pk)

    def test_player_cannot_create_course(self):
        self.client.force_authenticate(self.player)
        response = self.client.post(
            f"{API}/courses/", {"title": "New", "description": "Desc"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_foreign_instructor_cannot_see_or_edit(self):
        self.client.force_authenticate(self.other)
        response = self.client.patch(
            f"{API}/courses/{self.published.pk}/", {"title": "Hijack"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_course_reorder_endpoint(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.put(
            f"{API}/courses/reorder/",
            {"ids": [self.draft.pk, self.published.pk]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"updated_count": 2})
        self.assertEqual(Course.objects.get(pk=self.draft.pk).order, 1)

    def test_course_reorder_of_foreign_courses(self):
        self.client.force_authenticate(self.other)
        response = self.client.put(
            f"{API}/courses/reorder/", {"ids": [self.draft.pk]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error_code"], "unauthorized")


class LessonApiTests(APITestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.player = create_user("player", Role.PLAYER)
        self.course = create_course(self.instructor)
        self.lessons = create_lessons(self.course, 3)

    def test_new_lesson_is_appended_ignoring_client_order(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/courses/{self.course.pk}/lessons/",
            {"title": "Fourth", "order": 1, "validation_mode": "pro"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["order"], 4)
        self.assertEqual(response.json()["validation_mode"], "pro")

    def test_delete_compacts_orders(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.delete(f"{API}/lessons/{self.lessons[0].pk}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(
            list(Lesson.objects.filter(course=self.course).order_by("order").values_list("order", flat=True)),
            [1, 2],
        )

    def test_reorder_endpoint(self):
        self.client.force_authenticate(self.instructor)
        l1, l2, l3 = self.lessons
        response = self.client.put(
            f"{API}/courses/{self.course.pk}/lessons/reorder/",
            {"lesson_ids": [l3.pk]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([lesson["id"] for lesson in response.json()], [l3.pk, l1.pk, l2.pk])

    def test_reorder_with_unknown_id_is_bad_request(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.put(
            f"{API}/courses/{self.course.pk}/lessons/reorder/",
            {"lesson_ids": [999999]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error_code"], "invalid_payload")

    def test_player_lists_lessons_but_cannot_create(self):
        self.client.force_authenticate(self.player)
        response = self.client.get(f"{API}/courses/{self.course.pk}/lessons/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.json()), 3)

        response = self.client.post(
            f"{API}/courses/{self.course.pk}/lessons/", {"title": "X"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_duplicate_content_file_is_rejected(self):
        self.client.force_authenticate(self.instructor)
        url = f"{API}/lessons/{self.lessons[0].pk}/contents/"
        payload = {"content_type": "pdf", "file_name": "uploads/a.pdf", "caption": "A"}
        self.assertEqual(self.client.post(url, payload, format="json").status_code, status.HTTP_201_CREATED)
        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class QuizApiTests(APITestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.player = create_user("player", Role.PLAYER)
        self.course = create_course(self.instructor)
        (self.lesson,) = create_lessons(self.course, 1, mode="qcm")
        self.quiz, self.answers = create_quiz(self.lesson, [[True, False], [False, True]])

    def test_player_never_sees_correct_flag(self):
        self.client.force_authenticate(self.player)
        response = self.client.get(f"{API}/lessons/{self.lesson.pk}/quiz/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        answers = response.json()["questions"][0]["answers"]
        self.assertTrue(answers)
        self.assertNotIn("is_correct", answers[0])

    def test_owner_sees_correct_flag(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.get(f"{API}/quizzes/{self.quiz.pk}/")
        self.assertIn("is_correct", response.json()["questions"][0]["answers"][0])

    def test_second_quiz_for_lesson_is_rejected(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/lessons/{self.lesson.pk}/quiz/", {"title": "Again"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Quiz.objects.filter(lesson=self.lesson).count(), 1)

    def test_quiz_defaults_to_passing_score_80(self):
        (other_lesson,) = create_lessons(self.course, 1, mode="qcm")
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/lessons/{other_lesson.pk}/quiz/", {"title": "New"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["passing_score"], 80)

    def test_question_created_at_end_and_reordered(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/quizzes/{self.quiz.pk}/questions/", {"text": "Third?"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["order"], 3)

        ids = list(Question.objects.filter(quiz=self.quiz).order_by("-order").values_list("id", flat=True))
        response = self.client.put(
            f"{API}/quizzes/{self.quiz.pk}/questions/reorder/",
            {"question_ids": ids},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([q["id"] for q in response.json()], ids)

        response = self.client.put(
            f"{API}/quizzes/{self.quiz.pk}/questions/reorder/",
            {"question_ids": ids[:2]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_answers_are_staff_only(self):
        question = self.quiz.questions.first()
        self.client.force_authenticate(self.player)
        response = self.client.get(f"{API}/questions/{question.pk}/answers/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/questions/{question.pk}/answers/",
            {"text": "New", "is_correct": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["order"], 3)

    def test_answer_detail_of_foreign_course_is_not_found(self):
        answer = self.answers[0][0]
        self.client.force_authenticate(self.instructor)
        response = self.client.patch(f"{API}/answers/{answer.pk}/", {"text": "Edited"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["text"], "Edited")

        self.client.force_authenticate(create_user("other", Role.INSTRUCTOR))
        response = self.client.delete(f"{API}/answers/{answer.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error_code"], "answer_not_found")

    def test_submit_fails_then_locked(self):
        self.client.force_authenticate(self.player)
        q1, q2 = list(self.quiz.questions.order_by("order"))
        url = f"{API}/quizzes/{self.quiz.pk}/submit/"
        payload = {
            "answers": [
                {"question_id": q1.pk, "answer_ids": [self.answers[0][0].pk]},
                {"question_id": q2.pk},
            ]
        }

        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["score"], 50.0)
        self.assertFalse(body["passed"])
        self.assertIsNotNone(body["locked_until"])

        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_423_LOCKED)
        self.assertEqual(response.json()["error_code"], "still_locked")
        self.assertEqual(response.json()["details"]["locked_until"], body["locked_until"])

    def test_submit_requires_answer_list(self):
        self.client.force_authenticate(self.player)
        response = self.client.post(
            f"{API}/quizzes/{self.quiz.pk}/submit/", {"answers": "nope"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_instructor_submit_is_forbidden(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post(
            f"{API}/quizzes/{self.quiz.pk}/submit/", {"answers": []}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
