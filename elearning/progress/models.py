"""
E-Learning Lesson Progress Model

One record per (player, lesson) pair, created lazily on the first
interaction. Status transitions are applied exclusively by
``elearning.services.progress.progress_service``.

Quiz lifecycle:
    not_started → in_progress (failed attempt, locked for QUIZ_LOCKOUT_HOURS)
    in_progress → completed   (passed attempt, terminal: passed_at is set)

Author: Learning Platform Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ..modules.models import Lesson


class ProgressStatus(models.TextChoices):
    NOT_STARTED = "not_started", _("Not started")
    IN_PROGRESS = "in_progress", _("In progress")
    COMPLETED = "completed", _("Completed")


class UserLessonProgress(models.Model):
    """
    Completion state of one player for one lesson.

    Attributes:
        user: Player the record belongs to
        lesson: Lesson the record tracks
        status: not_started / in_progress / completed
        score: Last recorded score in percent (0-100)
        quiz_locked_until: No quiz attempt is accepted before this instant
        passed_at: Set once when the quiz is passed; afterwards no attempts
        last_quiz_score: Score of the most recent quiz attempt
        last_quiz_attempt_at: Time of the most recent quiz attempt
        last_quiz_details: Per-question grading of the most recent attempt
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="lesson_progress",
        verbose_name=_("Player"),
    )

    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name="progress_records",
        verbose_name=_("Lesson"),
    )

    status = models.CharField(
        max_length=20,
        choices=ProgressStatus.choices,
        default=ProgressStatus.NOT_STARTED,
        verbose_name=_("Status"),
    )

    score = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name=_("Score (%)"),
    )

    quiz_locked_until = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Quiz locked until"),
        help_text=_("Set after a failed attempt; cleared when the quiz is passed"),
    )

    passed_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Passed at"),
    )

    last_quiz_score = models.FloatField(
        null=True,
        blank=True,
        verbose_name=_("Last quiz score (%)"),
    )

    last_quiz_attempt_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Last quiz attempt"),
    )

    last_quiz_details = models.JSONField(
        null=True,
        blank=True,
        verbose_name=_("Last quiz details"),
        help_text=_("List of {question_id, selected_ids, correct_ids, is_correct}"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.user.username} - {self.lesson.title} ({self.status})"

    class Meta:
        verbose_name = _("Lesson Progress")
        verbose_name_plural = _("Lesson Progress")
        db_table = "elearning_user_lesson_progress"
        unique_together = ("user", "lesson")
        ordering = ["user", "lesson__course", "lesson__order"]

    @property
    def is_completed(self) -> bool:
        return self.status == ProgressStatus.COMPLETED

    def is_locked(self, now=None) -> bool:
        now = now or timezone.now()
        return self.quiz_locked_until is not None and self.quiz_locked_until > now
