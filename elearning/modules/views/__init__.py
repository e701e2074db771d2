"""
E-Learning Modules Views Package

Dieses Paket enthält alle Views für Kurse, Lektionen und Quizze.

Features:
- Kurs-Liste und Detail-Views (Spieler sehen nur veröffentlichte Kurse)
- Lektionen und Lerninhalte mit automatischer Reihenfolge
- Quiz-, Fragen- und Antwortverwaltung für Instruktoren
- Quiz-Abgabe für Spieler
- Umsortierung von Kursen, Lektionen und Fragen

Author: Learning Platform Team
Version: 1.0.0
"""

from .course_views import *
from .lesson_views import *
from .quiz_views import *
