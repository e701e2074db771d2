from rest_framework.permissions import BasePermission, SAFE_METHODS

from ..users.models import Role, get_role

# ------------------------------------------------------------
# Helper: Besitzer eines Objekts ermitteln. Jedes Kurs-Objekt
# (Kurs, Lektion, Inhalt, Quiz, Frage, Antwort) hängt an genau
# einem Kurs und damit an genau einem Instruktor.
# ------------------------------------------------------------


def get_owning_course(obj):
    """Returns the course an object of the course tree belongs to."""
    from .models import Course, Lesson, Content, Quiz, Question, Answer

    if isinstance(obj, Course):
        return obj
    if isinstance(obj, Lesson):
        return obj.course
    if isinstance(obj, (Content, Quiz)):
        return obj.lesson.course
    if isinstance(obj, Question):
        return obj.quiz.lesson.course
    if isinstance(obj, Answer):
        return obj.question.quiz.lesson.course
    return None


def is_course_owner_or_admin(user, course) -> bool:
    role = get_role(user)
    if role == Role.ADMIN:
        return True
    return role == Role.INSTRUCTOR and course is not None and course.instructor_id == user.pk


class IsInstructorOrAdmin(BasePermission):
    """Erlaubt Zugriff nur Instruktoren und Admins."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return get_role(user) in (Role.INSTRUCTOR, Role.ADMIN)


class IsCourseOwnerOrAdminOrReadOnly(BasePermission):
    """
    Lesezugriffe für alle angemeldeten Benutzer; Änderungen nur durch den
    Instruktor des Kurses oder Admins.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        # Schreibzugriffe nur für Instruktoren/Admins, Besitz wird am Objekt geprüft
        return get_role(request.user) in (Role.INSTRUCTOR, Role.ADMIN)

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return is_course_owner_or_admin(request.user, get_owning_course(obj))
