"""
E-Learning Application Django Admin Configuration

This module provides the Django admin interface configuration for all
E-Learning models, themed by django-jazzmin.

The admin interface is organized into logical sections:
- User Management: Users with platform role and instructor assignment
- Course Management: Courses, lessons, contents, quizzes, questions, answers
- Progress: Lesson progress of the players (quiz fields read-only)

Lesson and question positions are assigned by the server; the admin shows
them read-only so that the dense 1..N order is never broken by hand.

Author: Learning Platform Team
Version: 1.0.0
"""

from typing import Optional
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from django.db.models import QuerySet
from django.http import HttpRequest

# Import all models from the central models registry
from .models import (
    Profile,
    Course,
    Lesson,
    Content,
    Quiz,
    Question,
    Answer,
    UserLessonProgress,
)
from .services.ordering import (
    compact_lesson_orders,
    compact_question_orders,
    next_course_order,
    next_lesson_order,
    next_question_order,
)

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    """
    Inline admin configuration for user profiles.

    Role and instructor assignment are edited directly within the user admin.
    """

    model = Profile
    can_delete = False
    verbose_name_plural = "Profile Information"
    fk_name = "user"
    fields = ("role", "assigned_instructor")
    autocomplete_fields = ("assigned_instructor",)

    def get_extra(
        self, request: HttpRequest, obj: Optional[User] = None, **kwargs
    ) -> int:
        """Return 0 extra forms since profile should exist or be created automatically."""
        return 0


class UserAdmin(BaseUserAdmin):
    """
    User administration interface with role column and filter.
    """

    inlines = (ProfileInline,)
    list_display = (
        "username",
        "email",
        "first_name",
        "last_name",
        "get_role",
        "is_active",
    )
    list_select_related = ("profile",)
    list_filter = (
        "profile__role",
        "is_superuser",
        "is_active",
        "date_joined",
    )
    search_fields = ("username", "first_name", "last_name", "email")
    ordering = ("username",)

    @admin.display(description=_("Role"))
    def get_role(self, instance: User) -> Optional[str]:
        try:
            return instance.profile.get_role_display()
        except Profile.DoesNotExist:
            return None

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Optimize queryset with profile prefetch for better performance."""
        return super().get_queryset(request).select_related("profile")


# Register enhanced user administration
admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Course Administration ---


class LessonInline(admin.TabularInline):
    """Read-only overview of the lessons of a course."""

    model = Lesson
    extra = 0
    fields = ("order", "title", "validation_mode")
    readonly_fields = ("order", "title", "validation_mode")
    ordering = ("order",)
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "instructor", "is_published", "order", "lesson_count")
    list_filter = ("is_published", "instructor")
    search_fields = ("title", "description", "instructor__username")
    readonly_fields = ("order", "created_at", "updated_at")
    inlines = [LessonInline]

    fieldsets = (
        (_("Basic Information"), {"fields": ("title", "description", "instructor")}),
        (_("Visibility"), {"fields": ("is_published", "order")}),
        (_("Timestamps"), {"fields": ("created_at", "updated_at")}),
    )

    def save_model(self, request, obj, form, change):
        if not change:
            obj.order = next_course_order(obj.instructor_id)
        super().save_model(request, obj, form, change)


class ContentInline(admin.TabularInline):
    model = Content
    extra = 0
    fields = ("content_type", "file_name", "caption")


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "order", "validation_mode")
    list_filter = ("validation_mode", "course")
    search_fields = ("title", "course__title")
    readonly_fields = ("order",)
    ordering = ("course", "order")
    inlines = [ContentInline]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.order = next_lesson_order(obj.course)
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        course_id = obj.course_id
        with transaction.atomic():
            super().delete_model(request, obj)
            compact_lesson_orders(course_id)

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("course")


# --- Quiz Administration ---


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    fields = ("order", "text")
    readonly_fields = ("order", "text")
    ordering = ("order",)
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ("title", "lesson", "passing_score")
    search_fields = ("title", "lesson__title", "lesson__course__title")
    inlines = [QuestionInline]


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 1
    fields = ("text", "is_correct", "order")
    ordering = ("order",)


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("__str__", "quiz", "order")
    list_filter = ("quiz",)
    search_fields = ("text", "quiz__title")
    readonly_fields = ("order",)
    inlines = [AnswerInline]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.order = next_question_order(obj.quiz)
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        quiz_id = obj.quiz_id
        with transaction.atomic():
            super().delete_model(request, obj)
            compact_question_orders(quiz_id)


# --- Progress Administration ---


@admin.register(UserLessonProgress)
class UserLessonProgressAdmin(admin.ModelAdmin):
    """
    Progress records. Quiz bookkeeping is read-only; only the status can be
    corrected by hand.
    """

    list_display = (
        "user",
        "lesson",
        "status",
        "score",
        "quiz_locked_until",
        "passed_at",
    )
    list_filter = ("status", "lesson__validation_mode", "lesson__course")
    search_fields = ("user__username", "lesson__title", "lesson__course__title")
    readonly_fields = (
        "user",
        "lesson",
        "quiz_locked_until",
        "passed_at",
        "last_quiz_score",
        "last_quiz_attempt_at",
        "last_quiz_details",
        "created_at",
        "updated_at",
    )
    list_select_related = ("user", "lesson", "lesson__course")

    def has_add_permission(self, request) -> bool:
        return False
