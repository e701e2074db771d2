"""
E-Learning Progress Views

Endpoints:
- PATCH lessons/<id>/read/          Spieler markiert eine read-Lektion als gelesen
- PATCH lessons/<id>/pro-validate/  Instruktor setzt den Status einer pro-Lektion
- GET   me/                         Eigener Fortschritt (optional ?course_id=)
- GET   players/                    Zugeordnete Spieler (Admins: alle)
- GET   players/<id>/               Fortschritt eines Spielers

Author: Learning Platform Team
Version: 1.0.0
"""

from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ..modules.views.access import get_visible_lesson
from ..services.progress import (
    get_progress,
    list_players,
    mark_lesson_read,
    pro_validate_lesson,
)
from ..users.actor import Actor
from ..users.serializers import PlayerSerializer
from .serializers import UserLessonProgressSerializer


class MarkLessonReadView(APIView):
    """Only lessons of courses visible to the player can be marked as read."""

    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request: Request, lesson_id: int) -> Response:
        lesson = get_visible_lesson(request.user, lesson_id)
        progress = mark_lesson_read(
            lesson.pk, Actor.from_user(request.user), request.data.get("status")
        )
        return Response(UserLessonProgressSerializer(progress).data, status=status.HTTP_200_OK)


class ProValidateLessonView(APIView):
    """
    Body: {"player_id": 7, "status": "in_progress"} or {"player_id": 7, "completed": false}.
    Without status and completed the lesson is validated as completed.
    """

    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request: Request, lesson_id: int) -> Response:
        progress = pro_validate_lesson(
            lesson_id,
            Actor.from_user(request.user),
            player_id=request.data.get("player_id"),
            status=request.data.get("status"),
            completed=request.data.get("completed"),
        )
        return Response(UserLessonProgressSerializer(progress).data, status=status.HTTP_200_OK)


class MyProgressView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request: Request) -> Response:
        records = get_progress(
            Actor.from_user(request.user),
            request.user.pk,
            course_id=request.query_params.get("course_id"),
        )
        return Response(UserLessonProgressSerializer(records, many=True).data)


class PlayerListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request: Request) -> Response:
        players = list_players(Actor.from_user(request.user))
        return Response(PlayerSerializer(players, many=True).data)


class PlayerProgressView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request: Request, player_id: int) -> Response:
        records = get_progress(
            Actor.from_user(request.user),
            player_id,
            course_id=request.query_params.get("course_id"),
        )
        return Response(UserLessonProgressSerializer(records, many=True).data)
