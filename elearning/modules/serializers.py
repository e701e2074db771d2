from rest_framework import serializers

# Angepasste Importe
from .models import Course, Lesson, Content, Quiz, Question, Answer


class ContentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Content
        fields = ["id", "lesson", "content_type", "file_name", "caption", "created_at"]
        read_only_fields = ["lesson", "created_at"]


class AnswerSerializer(serializers.ModelSerializer):
    """Answer including the correct flag (instructors and admins only)."""

    class Meta:
        model = Answer
        fields = ["id", "question", "text", "is_correct", "order"]
        read_only_fields = ["question"]


class PlayerAnswerSerializer(serializers.ModelSerializer):
    """Answer as shown to players: never exposes ``is_correct``."""

    class Meta:
        model = Answer
        fields = ["id", "text", "order"]
        read_only_fields = fields


def _show_correct(context) -> bool:
    # Standard: Lösungen verbergen
    return bool(context.get("show_correct", False))


class QuestionSerializer(serializers.ModelSerializer):
    answers = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = ["id", "quiz", "text", "order", "answers"]
        read_only_fields = ["quiz", "order"]

    def get_answers(self, obj):
        answers = obj.answers.all()
        if _show_correct(self.context):
            return AnswerSerializer(answers, many=True).data
        return PlayerAnswerSerializer(answers, many=True).data


class QuizSerializer(serializers.ModelSerializer):
    questions = serializers.SerializerMethodField()

    class Meta:
        model = Quiz
        fields = ["id", "lesson", "title", "passing_score", "questions", "created_at", "updated_at"]
        read_only_fields = ["lesson", "created_at", "updated_at"]

    def get_questions(self, obj):
        questions = obj.questions.prefetch_related("answers").order_by("order")
        return QuestionSerializer(questions, many=True, context=self.context).data


class LessonSerializer(serializers.ModelSerializer):
    contents = ContentSerializer(many=True, read_only=True)
    quiz_id = serializers.SerializerMethodField()

    class Meta:
        model = Lesson
        fields = [
            "id",
            "course",
            "title",
            "order",
            "validation_mode",
            "description",
            "contents",
            "quiz_id",
            "created_at",
            "updated_at",
        ]
        # Reihenfolge wird serverseitig vergeben (Anhängen bzw. Umsortieren)
        read_only_fields = ["course", "order", "created_at", "updated_at"]

    def get_quiz_id(self, obj):
        quiz = getattr(obj, "quiz", None)
        return quiz.pk if quiz else None


class CourseListSerializer(serializers.ModelSerializer):
    instructor_name = serializers.SerializerMethodField()
    lesson_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Course
        fields = [
            "id",
            "title",
            "description",
            "instructor",
            "instructor_name",
            "is_published",
            "order",
            "lesson_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["instructor", "order", "created_at", "updated_at"]

    def get_instructor_name(self, obj):
        user = obj.instructor
        full_name = f"{user.first_name} {user.last_name}".strip()
        return full_name or user.username


class CourseDetailSerializer(CourseListSerializer):
    lessons = serializers.SerializerMethodField()

    class Meta(CourseListSerializer.Meta):
        fields = CourseListSerializer.Meta.fields + ["lessons"]

    def get_lessons(self, obj):
        lessons = (
            obj.lessons.select_related("quiz")
            .prefetch_related("contents")
            .order_by("order")
        )
        return LessonSerializer(lessons, many=True, context=self.context).data
