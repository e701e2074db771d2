"""
Gemeinsame Testdaten für die E-Learning Tests.
"""

from django.contrib.auth.models import User

from elearning.modules.models import Answer, Course, Lesson, Question, Quiz, ValidationMode
from elearning.users.actor import Actor
from elearning.users.models import Role


def create_user(username, role=Role.PLAYER, instructor=None, **extra):
    user = User.objects.create_user(username=username, password="testPassword", **extra)
    profile = user.profile
    profile.role = role
    profile.assigned_instructor = instructor
    profile.save()
    return user


def actor_for(user):
    return Actor.from_user(user)


def create_course(instructor, title="Course", is_published=True, order=1):
    return Course.objects.create(
        title=title,
        description=f"{title} description",
        instructor=instructor,
        is_published=is_published,
        order=order,
    )


def create_lessons(course, count, mode=ValidationMode.READ):
    start = course.lessons.count()
    return [
        Lesson.objects.create(
            course=course,
            title=f"Lesson {start + i}",
            order=start + i,
            validation_mode=mode,
        )
        for i in range(1, count + 1)
    ]


def create_quiz(lesson, correct_sets, passing_score=70):
    """
    Create a quiz whose questions have the given number of answers.

    Args:
        correct_sets: One entry per question, a list of booleans (is_correct
            per answer)

    Returns:
        (quiz, [[answer, ...] per question])
    """
    quiz = Quiz.objects.create(lesson=lesson, title=f"Quiz {lesson.title}", passing_score=passing_score)
    answers = []
    for order, flags in enumerate(correct_sets, start=1):
        question = Question.objects.create(quiz=quiz, text=f"Question {order}", order=order)
        answers.append(
            [
                Answer.objects.create(question=question, text=f"A{i}", is_correct=flag, order=i)
                for i, flag in enumerate(flags, start=1)
            ]
        )
    return quiz, answers
