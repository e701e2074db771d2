"""
E-Learning Services Package

Dieses Paket enthält die Geschäftslogik der Lernplattform:
- Lernfortschritt (Validierungsmodi, Quiz-Bewertung, Sperrzeit)
- Reihenfolge von Kursen, Lektionen und Quiz-Fragen

Struktur:
├── progress/     # Validierungsregeln, Quiz-Bewertung, Fortschritt
└── ordering/     # Dichte Reihenfolge 1..N und Umsortierung

Author: Learning Platform Team
Version: 1.0.0
"""

# Progress Services
from .progress import (
    AnsweredQuestion,
    GradingResult,
    QuestionKey,
    SubmissionOutcome,
    UnansweredQuestion,
    get_progress,
    grade,
    list_players,
    mark_lesson_read,
    pro_validate_lesson,
    submit_quiz,
)

# Ordering Services
from .ordering import (
    reorder_courses,
    reorder_lessons,
    reorder_quiz_questions,
)

__all__ = [
    # Progress
    "AnsweredQuestion",
    "UnansweredQuestion",
    "QuestionKey",
    "GradingResult",
    "SubmissionOutcome",
    "grade",
    "submit_quiz",
    "mark_lesson_read",
    "pro_validate_lesson",
    "get_progress",
    "list_players",
    # Ordering
    "reorder_courses",
    "reorder_lessons",
    "reorder_quiz_questions",
]
