"""
E-Learning Course Structure Models

This module defines the course structure of the E-Learning system:
instructors build courses made of ordered lessons; lessons carry media
content and, for quiz-validated lessons, exactly one quiz.

Models:
- Course: Top-level container owned by one instructor
- Lesson: Ordered unit of a course with a validation mode
- Content: Media file attached to a lesson
- Quiz: Assessment attached 1:1 to a lesson
- Question: Ordered question of a quiz
- Answer: Possible answer of a question (multi-select allowed)

Ordering:
- Lessons are densely ordered 1..N inside their course ((course, order) unique)
- Questions are densely ordered 1..N inside their quiz ((quiz, order) unique)
- Courses carry a per-instructor display order (advisory, not enforced)

Author: Learning Platform Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils.translation import gettext_lazy as _


class ValidationMode(models.TextChoices):
    """How the completion of a lesson is recorded."""

    READ = "read", _("Read by the player")
    PRO = "pro", _("Validated by the instructor")
    QCM = "qcm", _("Validated by quiz")


class Course(models.Model):
    """
    Top-level learning container ("module") owned by exactly one instructor.

    Attributes:
        title: Course title (max. 100 characters)
        description: Course description
        instructor: Owning instructor
        is_published: Players only see published courses
        order: Display order among the instructor's courses

    Example:
        >>> course = Course.objects.create(
        ...     title="Safety basics",
        ...     description="First steps",
        ...     instructor=instructor,
        ... )
        >>> course.is_owned_by(instructor.pk)  # True
    """

    title = models.CharField(
        max_length=100,
        verbose_name=_("Course Title"),
        help_text=_("Title of the course"),
    )

    description = models.TextField(
        verbose_name=_("Description"),
        help_text=_("What this course covers"),
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="courses",
        verbose_name=_("Instructor"),
        help_text=_("Instructor owning this course"),
    )

    is_published = models.BooleanField(
        default=False,
        verbose_name=_("Published"),
        help_text=_("If True, the course is visible to players"),
    )

    order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
        help_text=_("Display order among the courses of the instructor"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.title

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["instructor", "order", "id"]
        db_table = "elearning_course"
        indexes = [models.Index(fields=["instructor", "order"])]

    def is_owned_by(self, user_id) -> bool:
        return self.instructor_id == user_id

    @property
    def lesson_count(self) -> int:
        return self.lessons.count()


class Lesson(models.Model):
    """
    Ordered unit of content within a course.

    Attributes:
        course: Parent course
        title: Lesson title
        order: Position inside the course (1..N, unique per course)
        validation_mode: read / pro / qcm
        description: Text or HTML shown to the player
    """

    course = models.ForeignKey(
        Course,
        related_name="lessons",
        on_delete=models.CASCADE,
        verbose_name=_("Course"),
        help_text=_("Course this lesson belongs to"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Lesson Title"),
        help_text=_("Descriptive title for this lesson"),
    )

    order = models.PositiveIntegerField(
        verbose_name=_("Display Order"),
        help_text=_("Position of the lesson inside the course (1 = first)"),
    )

    validation_mode = models.CharField(
        max_length=10,
        choices=ValidationMode.choices,
        default=ValidationMode.READ,
        verbose_name=_("Validation Mode"),
        help_text=_("How the completion of this lesson is recorded"),
    )

    description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
        help_text=_("Text content displayed with the lesson"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.course.title} - {self.order}. {self.title}"

    class Meta:
        verbose_name = _("Lesson")
        verbose_name_plural = _("Lessons")
        ordering = ["course", "order"]
        db_table = "elearning_lesson"
        constraints = [
            models.UniqueConstraint(
                fields=["course", "order"], name="unique_lesson_order_per_course"
            )
        ]


class Content(models.Model):
    """
    Media file attached to a lesson.

    Only the internal storage key is kept; signed URLs are issued on demand
    by the storage collaborator and never persisted.
    """

    class ContentType(models.TextChoices):
        IMAGE = "image", _("Image")
        PDF = "pdf", _("PDF")
        MP4 = "mp4", _("Video (mp4)")

    lesson = models.ForeignKey(
        Lesson,
        related_name="contents",
        on_delete=models.CASCADE,
        verbose_name=_("Lesson"),
    )

    content_type = models.CharField(
        max_length=10,
        choices=ContentType.choices,
        verbose_name=_("Content Type"),
    )

    file_name = models.CharField(
        max_length=500,
        verbose_name=_("File Key"),
        help_text=_("Internal storage key, e.g. 'uploads/2025/08/uuid.mp4'"),
    )

    caption = models.CharField(
        max_length=1000,
        blank=True,
        default="",
        verbose_name=_("Caption"),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.lesson.title} - {self.file_name}"

    class Meta:
        verbose_name = _("Lesson Content")
        verbose_name_plural = _("Lesson Contents")
        ordering = ["lesson", "created_at", "id"]
        db_table = "elearning_content"
        unique_together = ("lesson", "file_name")


class Quiz(models.Model):
    """
    Assessment attached to a qcm-validated lesson (one quiz per lesson).

    Attributes:
        lesson: Lesson validated by this quiz
        title: Quiz title
        passing_score: Minimum percentage (0-100) needed to pass
    """

    lesson = models.OneToOneField(
        Lesson,
        related_name="quiz",
        on_delete=models.CASCADE,
        verbose_name=_("Lesson"),
        help_text=_("A lesson can only have one quiz"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Quiz Title"),
    )

    passing_score = models.PositiveSmallIntegerField(
        default=80,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name=_("Passing Score (%)"),
        help_text=_("Minimum percentage of correct questions to pass"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Quiz: {self.title}"

    class Meta:
        verbose_name = _("Quiz")
        verbose_name_plural = _("Quizzes")
        db_table = "elearning_quiz"

    @property
    def course(self) -> Course:
        return self.lesson.course


class Question(models.Model):
    quiz = models.ForeignKey(
        Quiz,
        related_name="questions",
        on_delete=models.CASCADE,
        verbose_name=_("Quiz"),
    )

    text = models.TextField(
        verbose_name=_("Question Text"),
    )

    order = models.PositiveIntegerField(
        verbose_name=_("Display Order"),
        help_text=_("Position of the question inside the quiz (1 = first)"),
    )

    def __str__(self) -> str:
        return f"{self.quiz.title} - Q{self.order}: {self.text[:50]}"

    class Meta:
        verbose_name = _("Question")
        verbose_name_plural = _("Questions")
        ordering = ["quiz", "order"]
        db_table = "elearning_question"
        constraints = [
            models.UniqueConstraint(
                fields=["quiz", "order"], name="unique_question_order_per_quiz"
            )
        ]

    def correct_answer_ids(self) -> frozenset:
        return frozenset(a.pk for a in self.answers.all() if a.is_correct)


class Answer(models.Model):
    """
    Possible answer of a question. A question may have zero, one or
    several correct answers.
    """

    question = models.ForeignKey(
        Question,
        related_name="answers",
        on_delete=models.CASCADE,
        verbose_name=_("Question"),
    )

    text = models.CharField(
        max_length=1000,
        verbose_name=_("Answer Text"),
    )

    is_correct = models.BooleanField(
        default=False,
        verbose_name=_("Correct"),
    )

    order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
    )

    def __str__(self) -> str:
        mark = "✓" if self.is_correct else "✗"
        return f"[{mark}] {self.text[:50]}"

    class Meta:
        verbose_name = _("Answer")
        verbose_name_plural = _("Answers")
        ordering = ["question", "order", "id"]
        db_table = "elearning_answer"
