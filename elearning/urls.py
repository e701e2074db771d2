"""
E-Learning Application URL Configuration

This module defines the URL routing structure for the E-Learning application.
Each functional area (auth, courses, lessons, quizzes, progress) has its own
list of URL patterns.

URL Structure (mounted under /api/elearning/):
- token/: Authentication endpoints (JWT cookies)
- users/: Logout and current user
- courses/: Courses, lessons per course and reordering
- lessons/: Lesson detail, contents and quiz of a lesson
- quizzes/, questions/, answers/: Quiz editing and submission
- progress/: Read / pro validation and progress views

Author: Learning Platform Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, include, URLPattern
from rest_framework_simplejwt.views import TokenVerifyView

# Import der Views
from .users import views as user_views
from .modules import views as module_views
from .progress import views as progress_views

app_name = "elearning"

# --- Authentication and Token Management ---

token_urlpatterns: List[URLPattern] = [
    path("", user_views.CustomTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("refresh/", user_views.CustomTokenRefreshView.as_view(), name="token_refresh"),
    path("verify/", TokenVerifyView.as_view(), name="token_verify"),
]

users_urlpatterns: List[URLPattern] = [
    path("logout/", user_views.LogoutView.as_view(), name="logout"),
    path("me/", user_views.CurrentUserView.as_view(), name="current-user"),
]

# --- Courses and Lessons ---

courses_urlpatterns: List[URLPattern] = [
    # Batch reorder (must be before <int:pk>/)
    path("reorder/", module_views.CourseReorderView.as_view(), name="course-reorder"),
    path("", module_views.CourseListCreateView.as_view(), name="course-list"),
    path("<int:pk>/", module_views.CourseDetailView.as_view(), name="course-detail"),
    path(
        "<int:course_id>/lessons/",
        module_views.LessonListCreateView.as_view(),
        name="course-lesson-list",
    ),
    path(
        "<int:course_id>/lessons/reorder/",
        module_views.LessonReorderView.as_view(),
        name="course-lesson-reorder",
    ),
]

lessons_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", module_views.LessonDetailView.as_view(), name="lesson-detail"),
    path(
        "<int:lesson_id>/contents/",
        module_views.ContentListCreateView.as_view(),
        name="lesson-content-list",
    ),
    path("<int:lesson_id>/quiz/", module_views.LessonQuizView.as_view(), name="lesson-quiz"),
]

contents_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", module_views.ContentDetailView.as_view(), name="content-detail"),
]

# --- Quizzes ---

quizzes_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", module_views.QuizDetailView.as_view(), name="quiz-detail"),
    path("<int:pk>/submit/", module_views.QuizSubmitView.as_view(), name="quiz-submit"),
    path(
        "<int:quiz_id>/questions/",
        module_views.QuestionListCreateView.as_view(),
        name="quiz-question-list",
    ),
    path(
        "<int:quiz_id>/questions/reorder/",
        module_views.QuestionReorderView.as_view(),
        name="quiz-question-reorder",
    ),
]

questions_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", module_views.QuestionDetailView.as_view(), name="question-detail"),
    path(
        "<int:question_id>/answers/",
        module_views.AnswerListCreateView.as_view(),
        name="question-answer-list",
    ),
]

answers_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", module_views.AnswerDetailView.as_view(), name="answer-detail"),
]

# --- Progress ---

progress_urlpatterns: List[URLPattern] = [
    path(
        "lessons/<int:lesson_id>/read/",
        progress_views.MarkLessonReadView.as_view(),
        name="lesson-mark-read",
    ),
    path(
        "lessons/<int:lesson_id>/pro-validate/",
        progress_views.ProValidateLessonView.as_view(),
        name="lesson-pro-validate",
    ),
    path("me/", progress_views.MyProgressView.as_view(), name="my-progress"),
    path("players/", progress_views.PlayerListView.as_view(), name="player-list"),
    path(
        "players/<int:player_id>/",
        progress_views.PlayerProgressView.as_view(),
        name="player-progress",
    ),
]

# --- Main URL Configuration ---

urlpatterns: List[URLPattern] = [
    path("token/", include(token_urlpatterns)),
    path("users/", include(users_urlpatterns)),
    path("courses/", include(courses_urlpatterns)),
    path("lessons/", include(lessons_urlpatterns)),
    path("contents/", include(contents_urlpatterns)),
    path("quizzes/", include(quizzes_urlpatterns)),
    path("questions/", include(questions_urlpatterns)),
    path("answers/", include(answers_urlpatterns)),
    path("progress/", include(progress_urlpatterns)),
]
