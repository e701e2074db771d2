from rest_framework import status
from rest_framework.test import APITestCase

from elearning.progress.models import UserLessonProgress
from elearning.users.models import Role

from ..helpers import create_course, create_lessons, create_user

API = "/api/elearning/progress"


class ProgressApiTests(APITestCase):
    def setUp(self):
        self.instructor = create_user("coach", Role.INSTRUCTOR)
        self.other_instructor = create_user("other", Role.INSTRUCTOR)
        self.player = create_user("player", Role.PLAYER, instructor=self.instructor)
        self.course = create_course(self.instructor)
        (self.read_lesson,) = create_lessons(self.course, 1, mode="read")
        (self.pro_lesson,) = create_lessons(self.course, 1, mode="pro")
        (self.qcm_lesson,) = create_lessons(self.course, 1, mode="qcm")

    def test_mark_read_twice(self):
        self.client.force_authenticate(self.player)
        url = f"{API}/lessons/{self.read_lesson.pk}/read/"

        for _ in range(2):
            response = self.client.patch(url, {}, format="json")
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.json()["status"], "completed")

        self.assertEqual(UserLessonProgress.objects.filter(user=self.player).count(), 1)

    def test_mark_read_on_qcm_lesson_is_conflict(self):
        self.client.force_authenticate(self.player)
        response = self.client.patch(f"{API}/lessons/{self.qcm_lesson.pk}/read/", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error_code"], "mode_mismatch")

    def test_unknown_lesson_is_not_found(self):
        self.client.force_authenticate(self.player)
        response = self.client.patch(f"{API}/lessons/999999/read/", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error_code"], "lesson_not_found")

    def test_lesson_of_unpublished_course_is_not_found(self):
        draft = create_course(self.instructor, "Draft", is_published=False, order=2)
        (draft_lesson,) = create_lessons(draft, 1, mode="read")
        self.client.force_authenticate(self.player)

        response = self.client.patch(f"{API}/lessons/{draft_lesson.pk}/read/", {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error_code"], "lesson_not_found")
        self.assertFalse(UserLessonProgress.objects.filter(lesson=draft_lesson).exists())

    def test_pro_validate_with_list_status_is_bad_request(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.patch(
            f"{API}/lessons/{self.pro_lesson.pk}/pro-validate/",
            {"player_id": self.player.pk, "status": ["completed"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error_code"], "invalid_payload")

    def test_pro_validate_with_status(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.patch(
            f"{API}/lessons/{self.pro_lesson.pk}/pro-validate/",
            {"player_id": self.player.pk, "status": "in_progress"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "in_progress")

    def test_pro_validate_by_foreign_instructor_is_forbidden(self):
        self.client.force_authenticate(self.other_instructor)
        response = self.client.patch(
            f"{API}/lessons/{self.pro_lesson.pk}/pro-validate/",
            {"player_id": self.player.pk},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_pro_validate_with_unknown_status(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.patch(
            f"{API}/lessons/{self.pro_lesson.pk}/pro-validate/",
            {"player_id": self.player.pk, "status": "finished"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_my_progress(self):
        UserLessonProgress.objects.create(user=self.player, lesson=self.read_lesson, status="completed")
        self.client.force_authenticate(self.player)
        response = self.client.get(f"{API}/me/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.json()), 1)
        self.assertEqual(response.json()[0]["lesson_id"], self.read_lesson.pk)
        self.assertEqual(response.json()[0]["course_id"], self.course.pk)

    def test_players_of_instructor(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.get(f"{API}/players/")
        self.assertEqual([p["id"] for p in response.json()], [self.player.pk])

        self.client.force_authenticate(self.other_instructor)
        self.assertEqual(self.client.get(f"{API}/players/").json(), [])

    def test_player_progress_visibility(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.get(f"{API}/players/{self.player.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(self.other_instructor)
        response = self.client.get(f"{API}/players/{self.player.pk}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_rejected(self):
        response = self.client.get(f"{API}/me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
