"""
E-Learning Modules Package

Dieses Paket enthält den Kursbaum der Lernplattform.
Instruktoren erstellen Kurse aus sortierten Lektionen; Lektionen
enthalten Medien und optional ein Quiz.

Features:
- Kurse mit Veröffentlichungsstatus und Reihenfolge pro Instruktor
- Lektionen mit Validierungsmodus (read / pro / qcm)
- Medieninhalte (Bild, PDF, Video) pro Lektion
- Quizze mit Mehrfachauswahl-Fragen

Struktur:
- models.py: Datenmodelle für Kurse, Lektionen, Inhalte und Quizze
- serializers.py: API-Serialisierung (Lösungen nur für Instruktoren)
- permissions.py: Besitz- und Rollenprüfung
- views/: Kurs-, Lektions- und Quiz-Views

Author: Learning Platform Team
Version: 1.0.0
"""
