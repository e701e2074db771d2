from rest_framework import serializers

from .models import UserLessonProgress


class UserLessonProgressSerializer(serializers.ModelSerializer):
    """
    Progress of one player for one lesson, including the review data of
    the last quiz attempt.
    """

    lesson_id = serializers.IntegerField(source="lesson.id", read_only=True)
    lesson_title = serializers.CharField(source="lesson.title", read_only=True)
    lesson_order = serializers.IntegerField(source="lesson.order", read_only=True)
    validation_mode = serializers.CharField(source="lesson.validation_mode", read_only=True)
    course_id = serializers.IntegerField(source="lesson.course_id", read_only=True)
    user_id = serializers.IntegerField(source="user.id", read_only=True)

    class Meta:
        model = UserLessonProgress
        fields = [
            "id",
            "user_id",
            "course_id",
            "lesson_id",
            "lesson_title",
            "lesson_order",
            "validation_mode",
            "status",
            "score",
            "quiz_locked_until",
            "passed_at",
            "last_quiz_score",
            "last_quiz_attempt_at",
            "last_quiz_details",
            "updated_at",
        ]
        read_only_fields = fields
