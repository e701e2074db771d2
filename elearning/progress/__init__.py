"""
E-Learning Progress Package

Dieses Paket enthält den Lernfortschritt der Spieler pro Lektion:
- models.py: UserLessonProgress (Status, Score, Quiz-Sperre)
- serializers.py: API-Serialisierung des Fortschritts
- views.py: Lesen, Pro-Validierung und Fortschrittsansichten

Die Zustandsübergänge selbst liegen in services/progress/.

Author: Learning Platform Team
Version: 1.0.0
"""
