import logging

from django.db import IntegrityError, transaction
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...exceptions import InvalidPayload
from ...services.ordering import compact_lesson_orders, next_lesson_order, reorder_lessons
from ...users.actor import Actor
from ..models import Content, Lesson
from ..permissions import IsCourseOwnerOrAdminOrReadOnly, IsInstructorOrAdmin
from ..serializers import ContentSerializer, LessonSerializer
from .access import (
    get_visible_course,
    get_visible_lesson,
    require_course_owner,
    visible_courses,
)

logger = logging.getLogger(__name__)


# --- Lesson Views ---


class LessonListCreateView(generics.ListCreateAPIView):
    """Lessons of one course, sorted by order."""

    serializer_class = LessonSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_course(self):
        return get_visible_course(self.request.user, self.kwargs["course_id"])

    def get_queryset(self):
        course = self.get_course()
        return (
            Lesson.objects.filter(course=course)
            .select_related("quiz")
            .prefetch_related("contents")
            .order_by("order")
        )

    def perform_create(self, serializer):
        course = self.get_course()
        require_course_owner(self.request.user, course)
        # Automatically compute order per course, client value is ignored
        with transaction.atomic():
            lesson = serializer.save(course=course, order=next_lesson_order(course))
        logger.info(f"Lesson {lesson.pk} appended to course {course.pk} at position {lesson.order}")


class LessonDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Handle Lesson CRUD operations: GET (retrieve), PUT/PATCH (update), DELETE (destroy)."""

    serializer_class = LessonSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return Lesson.objects.select_related("course").filter(
            course__in=visible_courses(self.request.user)
        )

    def perform_destroy(self, instance):
        lesson_id, course_id = instance.pk, instance.course_id
        with transaction.atomic():
            instance.delete()
            compact_lesson_orders(course_id)
        logger.info(f"Lesson {lesson_id} deleted, lessons of course {course_id} compacted")


class LessonReorderView(APIView):
    """PUT {"lesson_ids": [..]}: new order of the lessons of a course."""

    permission_classes = [permissions.IsAuthenticated, IsInstructorOrAdmin]

    def put(self, request, course_id):
        lessons = reorder_lessons(
            course_id, request.data.get("lesson_ids"), Actor.from_user(request.user)
        )
        return Response(
            LessonSerializer(lessons, many=True).data, status=status.HTTP_200_OK
        )


# --- Content Views ---


class ContentListCreateView(generics.ListCreateAPIView):
    """Media files attached to a lesson."""

    serializer_class = ContentSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_lesson(self):
        return get_visible_lesson(self.request.user, self.kwargs["lesson_id"])

    def get_queryset(self):
        return Content.objects.filter(lesson=self.get_lesson())

    def perform_create(self, serializer):
        lesson = self.get_lesson()
        require_course_owner(self.request.user, lesson.course)
        try:
            with transaction.atomic():
                serializer.save(lesson=lesson)
        except IntegrityError:
            raise InvalidPayload(
                "This file is already attached to the lesson",
                details={"file_name": serializer.validated_data.get("file_name")},
            )


class ContentDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = ContentSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return Content.objects.select_related("lesson__course").filter(
            lesson__course__in=visible_courses(self.request.user)
        )
