from django.test import SimpleTestCase

from elearning.exceptions import InvalidPayload, ModeMismatch, Unauthorized
from elearning.services.progress.validation_policy import (
    check_quiz_submission,
    resolve_pro_status,
    resolve_read_status,
)
from elearning.users.actor import Actor

PLAYER = Actor(id=1, role="player")
INSTRUCTOR = Actor(id=2, role="instructor")
ADMIN = Actor(id=3, role="admin")


class ReadModeTests(SimpleTestCase):
    def test_player_marks_read_lesson_completed(self):
        self.assertEqual(resolve_read_status("read", PLAYER), "completed")
        self.assertEqual(resolve_read_status("read", PLAYER, "completed"), "completed")

    def test_other_status_is_rejected(self):
        with self.assertRaises(InvalidPayload):
            resolve_read_status("read", PLAYER, "in_progress")

    def test_non_player_is_rejected(self):
        with self.assertRaises(Unauthorized):
            resolve_read_status("read", INSTRUCTOR)

    def test_read_on_other_modes_is_mode_mismatch(self):
        for mode in ("pro", "qcm"):
            with self.assertRaises(ModeMismatch):
                resolve_read_status(mode, PLAYER)


class ProModeTests(SimpleTestCase):
    def test_owner_defaults_to_completed(self):
        self.assertEqual(resolve_pro_status("pro", INSTRUCTOR, owns_course=True), "completed")

    def test_explicit_status_wins_over_completed_flag(self):
        self.assertEqual(
            resolve_pro_status("pro", INSTRUCTOR, True, status="in_progress", completed=True),
            "in_progress",
        )

    def test_completed_flag(self):
        self.assertEqual(resolve_pro_status("pro", ADMIN, False, completed=True), "completed")
        self.assertEqual(resolve_pro_status("pro", ADMIN, False, completed=False), "not_started")
        self.assertEqual(resolve_pro_status("pro", ADMIN, False, completed="false"), "not_started")

    def test_unknown_status_is_invalid(self):
        with self.assertRaises(InvalidPayload):
            resolve_pro_status("pro", INSTRUCTOR, True, status="done")

    def test_non_string_status_is_invalid(self):
        for status in (["completed"], {"value": "completed"}, 1):
            with self.assertRaises(InvalidPayload):
                resolve_pro_status("pro", INSTRUCTOR, True, status=status)

    def test_foreign_instructor_and_player_are_unauthorized(self):
        with self.assertRaises(Unauthorized):
            resolve_pro_status("pro", INSTRUCTOR, owns_course=False)
        with self.assertRaises(Unauthorized):
            resolve_pro_status("pro", PLAYER, owns_course=True)

    def test_pro_on_qcm_lesson_is_mode_mismatch(self):
        with self.assertRaises(ModeMismatch):
            resolve_pro_status("qcm", ADMIN, owns_course=True)

    def test_pro_on_read_lesson_is_mode_mismatch(self):
        with self.assertRaises(ModeMismatch):
            resolve_pro_status("read", ADMIN, owns_course=True)


class QuizGateTests(SimpleTestCase):
    def test_player_may_submit_on_qcm(self):
        self.assertIsNone(check_quiz_submission("qcm", PLAYER))

    def test_submission_on_read_lesson_is_mode_mismatch(self):
        with self.assertRaises(ModeMismatch) as ctx:
            check_quiz_submission("read", PLAYER)
        self.assertEqual(ctx.exception.status_code, 409)

    def test_instructor_cannot_submit(self):
        with self.assertRaises(Unauthorized):
            check_quiz_submission("qcm", INSTRUCTOR)
