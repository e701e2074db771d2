import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...services.ordering import next_course_order, reorder_courses
from ...users.actor import Actor
from ..models import Course
from ..permissions import IsCourseOwnerOrAdminOrReadOnly, IsInstructorOrAdmin
from ..serializers import CourseDetailSerializer, CourseListSerializer
from .access import visible_courses

logger = logging.getLogger(__name__)


class CourseListCreateView(generics.ListCreateAPIView):
    """
    GET: Kurse, die der Benutzer sehen darf (Spieler: nur veröffentlichte).
    POST: Neuer Kurs des angemeldeten Instruktors, hinten angehängt.
    """

    serializer_class = CourseListSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return visible_courses(self.request.user).order_by("instructor_id", "order", "id")

    def perform_create(self, serializer):
        # Automatically append to the instructor's courses
        course = serializer.save(
            instructor=self.request.user,
            order=next_course_order(self.request.user.pk),
        )
        logger.info(f"Course {course.pk} created by user {self.request.user.pk}")


class CourseDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Handle Course CRUD operations: GET (retrieve), PUT/PATCH (update), DELETE (destroy)."""

    serializer_class = CourseDetailSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return visible_courses(self.request.user)

    def perform_destroy(self, instance):
        logger.info(f"Deleting course {instance.pk} ({instance.title}) by user {self.request.user.pk}")
        instance.delete()


class CourseReorderView(APIView):
    """PUT {"ids": [..]}: display order of the instructor's courses."""

    permission_classes = [permissions.IsAuthenticated, IsInstructorOrAdmin]

    def put(self, request):
        result = reorder_courses(request.data.get("ids"), Actor.from_user(request.user))
        return Response(result, status=status.HTTP_200_OK)
