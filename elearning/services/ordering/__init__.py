from .ordering_service import (
    compact_lesson_orders,
    compact_question_orders,
    next_course_order,
    next_lesson_order,
    next_question_order,
    reorder_courses,
    reorder_lessons,
    reorder_quiz_questions,
)

__all__ = [
    "compact_lesson_orders",
    "compact_question_orders",
    "next_course_order",
    "next_lesson_order",
    "next_question_order",
    "reorder_courses",
    "reorder_lessons",
    "reorder_quiz_questions",
]
