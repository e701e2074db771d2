import logging
import os
import secrets

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from ...models import Answer, Course, Lesson, Profile, Question, Quiz, Role, ValidationMode
from ...services.ordering import next_course_order, next_lesson_order, next_question_order

# Configure logger
logger = logging.getLogger(__name__)

# Benutzer des Seeds: (username, role, env-Variable für das Passwort)
SEED_USERS = [
    ("admin", Role.ADMIN, "SEED_ADMIN_PASSWORD"),
    ("instructor", Role.INSTRUCTOR, "SEED_INSTRUCTOR_PASSWORD"),
    ("player", Role.PLAYER, "SEED_PLAYER_PASSWORD"),
]

SEED_COURSE_TITLE = "Étape 1 - Fondamentaux"

# Lektionen in Reihenfolge: (title, validation_mode, description)
SEED_LESSONS = [
    (
        "Le grip",
        ValidationMode.READ,
        "Vardon, interlock ou ten-finger: gardez une pression légère et des poignets souples.",
    ),
    (
        "Posture et alignement",
        ValidationMode.PRO,
        "Votre instructeur valide la posture sur le practice.",
    ),
    (
        "Quiz: grip et posture",
        ValidationMode.QCM,
        "Répondez aux questions pour valider la leçon.",
    ),
]

# Fragen des Quiz: (text, [(answer, is_correct), ...])
SEED_QUESTIONS = [
    (
        "Quels grips sont adaptés à un débutant ?",
        [("Vardon (overlap)", True), ("Interlock", True), ("Grip serré à 10/10", False)],
    ),
    (
        "Où placer la balle pour un wedge ?",
        [("Devant le pied arrière", True), ("Devant le pied avant", False)],
    ),
]


class Command(BaseCommand):
    help = (
        "Legt Testdaten an: Admin, Instruktor, Spieler und einen Kurs mit "
        "read-, pro- und qcm-Lektion. Mehrfaches Ausführen ist unkritisch."
    )

    def _get_or_create_user(self, username, role, password_env, instructor=None):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com"},
        )
        if created:
            password = os.getenv(password_env)
            if not password:
                password = secrets.token_urlsafe(10)
                # Nur für lokale Entwicklung gedacht
                self.stdout.write(self.style.WARNING(f"  - Passwort für {username}: {password}"))
            user.set_password(password)
            user.save()
            self.stdout.write(self.style.SUCCESS(f'  - Benutzer "{username}" erstellt ({role}).'))
        else:
            self.stdout.write(f'  - Benutzer "{username}" existiert bereits.')

        profile, _ = Profile.objects.get_or_create(user=user)
        profile.role = role
        if instructor is not None:
            profile.assigned_instructor = instructor
        profile.save()
        return user

    def _seed_quiz(self, lesson):
        quiz, created = Quiz.objects.get_or_create(
            lesson=lesson,
            defaults={"title": lesson.title, "passing_score": 80},
        )
        if not created:
            return quiz

        for text, answers in SEED_QUESTIONS:
            question = Question.objects.create(
                quiz=quiz, text=text, order=next_question_order(quiz)
            )
            for order, (answer_text, is_correct) in enumerate(answers, start=1):
                Answer.objects.create(
                    question=question, text=answer_text, is_correct=is_correct, order=order
                )
        self.stdout.write(self.style.SUCCESS(f'  - Quiz "{quiz.title}" mit {len(SEED_QUESTIONS)} Fragen erstellt.'))
        return quiz

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Erstelle Test User...")
        users = {}
        for username, role, password_env in SEED_USERS:
            instructor = users.get("instructor") if role == Role.PLAYER else None
            users[username] = self._get_or_create_user(username, role, password_env, instructor)

        self.stdout.write(self.style.SUCCESS("Starting database seeding..."))
        instructor = users["instructor"]
        course, created = Course.objects.get_or_create(
            title=SEED_COURSE_TITLE,
            instructor=instructor,
            defaults={
                "description": "Les bases du swing",
                "is_published": True,
                "order": next_course_order(instructor.pk),
            },
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'Kurs erstellt: "{course.title}"'))

        for title, mode, description in SEED_LESSONS:
            lesson = Lesson.objects.filter(course=course, title=title).first()
            if lesson is None:
                lesson = Lesson.objects.create(
                    course=course,
                    title=title,
                    validation_mode=mode,
                    description=description,
                    order=next_lesson_order(course),
                )
                self.stdout.write(f'  - Lektion {lesson.order} erstellt: "{title}" ({mode})')
            if lesson.validation_mode == ValidationMode.QCM:
                self._seed_quiz(lesson)

        logger.info(f"Seed finished: course {course.pk} with {course.lessons.count()} lessons")
        self.stdout.write(self.style.SUCCESS("Seeding finished."))
