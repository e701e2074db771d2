import logging

from django.db import transaction
from django.db.models import Max
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...exceptions import InvalidPayload, QuizNotFound
from ...services.ordering import (
    compact_question_orders,
    next_question_order,
    reorder_quiz_questions,
)
from ...services.progress import submit_quiz
from ...users.actor import Actor
from ..models import Answer, Question, Quiz
from ..permissions import (
    IsCourseOwnerOrAdminOrReadOnly,
    IsInstructorOrAdmin,
    get_owning_course,
    is_course_owner_or_admin,
)
from ..serializers import AnswerSerializer, QuestionSerializer, QuizSerializer
from .access import (
    get_visible_answer,
    get_visible_lesson,
    get_visible_question,
    get_visible_quiz,
    require_course_owner,
    visible_courses,
)

logger = logging.getLogger(__name__)


class SolutionVisibilityMixin:
    """Only the course owner and admins see which answers are correct."""

    def get_serializer_context(self):
        context = super().get_serializer_context()
        course = self.get_context_course()
        context["show_correct"] = course is not None and is_course_owner_or_admin(
            self.request.user, course
        )
        return context

    def get_context_course(self):
        return None


# --- Quiz Views ---


class LessonQuizView(SolutionVisibilityMixin, generics.GenericAPIView):
    """
    GET: Quiz of a lesson.
    POST: Create the quiz of a lesson (one per lesson).
    """

    serializer_class = QuizSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_lesson(self):
        if not hasattr(self, "_lesson"):
            self._lesson = get_visible_lesson(self.request.user, self.kwargs["lesson_id"])
        return self._lesson

    def get_context_course(self):
        return self.get_lesson().course

    def get(self, request, lesson_id):
        lesson = self.get_lesson()
        quiz = Quiz.objects.filter(lesson=lesson).first()
        if quiz is None:
            raise QuizNotFound(message=f"Lesson {lesson.pk} has no quiz")
        return Response(self.get_serializer(quiz).data)

    def post(self, request, lesson_id):
        lesson = self.get_lesson()
        require_course_owner(request.user, lesson.course)
        if Quiz.objects.filter(lesson=lesson).exists():
            raise InvalidPayload("This lesson already has a quiz", details={"lesson_id": lesson.pk})

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quiz = serializer.save(lesson=lesson)
        logger.info(f"Quiz {quiz.pk} created for lesson {lesson.pk}")
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class QuizDetailView(SolutionVisibilityMixin, generics.RetrieveUpdateDestroyAPIView):
    serializer_class = QuizSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return Quiz.objects.select_related("lesson__course").filter(
            lesson__course__in=visible_courses(self.request.user)
        )

    def get_context_course(self):
        return get_owning_course(self.get_object())


class QuizSubmitView(APIView):
    """
    POST {"answers": [{"question_id": 1, "answer_ids": [2, 3]}, ...]}

    Grades the attempt of the current player. A failed attempt locks the
    quiz for QUIZ_LOCKOUT_HOURS; a passed quiz accepts no further attempts.
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        quiz = get_visible_quiz(request.user, pk)
        answers = request.data.get("answers")
        if not isinstance(answers, list):
            raise InvalidPayload("'answers' must be a list")

        outcome = submit_quiz(quiz.pk, Actor.from_user(request.user), answers)
        return Response(outcome.to_dict(), status=status.HTTP_200_OK)


# --- Question Views ---


class QuestionListCreateView(SolutionVisibilityMixin, generics.ListCreateAPIView):
    serializer_class = QuestionSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_quiz(self):
        if not hasattr(self, "_quiz"):
            self._quiz = get_visible_quiz(self.request.user, self.kwargs["quiz_id"])
        return self._quiz

    def get_context_course(self):
        return self.get_quiz().lesson.course

    def get_queryset(self):
        return (
            Question.objects.filter(quiz=self.get_quiz())
            .prefetch_related("answers")
            .order_by("order")
        )

    def perform_create(self, serializer):
        quiz = self.get_quiz()
        require_course_owner(self.request.user, quiz.lesson.course)
        # Automatically compute order per quiz, client value is ignored
        with transaction.atomic():
            serializer.save(quiz=quiz, order=next_question_order(quiz))


class QuestionDetailView(SolutionVisibilityMixin, generics.RetrieveUpdateDestroyAPIView):
    serializer_class = QuestionSerializer
    permission_classes = [IsCourseOwnerOrAdminOrReadOnly]

    def get_queryset(self):
        return Question.objects.select_related("quiz__lesson__course").filter(
            quiz__lesson__course__in=visible_courses(self.request.user)
        )

    def get_context_course(self):
        return get_owning_course(self.get_object())

    def perform_destroy(self, instance):
        quiz_id = instance.quiz_id
        with transaction.atomic():
            instance.delete()
            compact_question_orders(quiz_id)


class QuestionReorderView(APIView):
    """PUT {"question_ids": [..]}: must name every question of the quiz once."""

    permission_classes = [permissions.IsAuthenticated, IsInstructorOrAdmin]

    def put(self, request, quiz_id):
        questions = reorder_quiz_questions(
            quiz_id, request.data.get("question_ids"), Actor.from_user(request.user)
        )
        data = QuestionSerializer(questions, many=True, context={"show_correct": True}).data
        return Response(data, status=status.HTTP_200_OK)


# --- Answer Views ---


class AnswerListCreateView(generics.ListCreateAPIView):
    """Answers of a question including the correct flag (owner and admins only)."""

    serializer_class = AnswerSerializer
    permission_classes = [permissions.IsAuthenticated, IsInstructorOrAdmin]

    def get_question(self):
        question = get_visible_question(self.request.user, self.kwargs["question_id"])
        require_course_owner(self.request.user, question.quiz.lesson.course)
        return question

    def get_queryset(self):
        return Answer.objects.filter(question=self.get_question())

    def perform_create(self, serializer):
        question = self.get_question()
        next_order = (question.answers.aggregate(m=Max("order"))["m"] or 0) + 1
        serializer.save(question=question, order=next_order)


class AnswerDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = AnswerSerializer
    permission_classes = [permissions.IsAuthenticated, IsInstructorOrAdmin]

    def get_object(self):
        answer = get_visible_answer(self.request.user, self.kwargs["pk"])
        require_course_owner(self.request.user, get_owning_course(answer))
        return answer
