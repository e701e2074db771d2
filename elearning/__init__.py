"""
E-Learning Package - Learning Platform

Dieses Paket enthält Kurse, Lektionen, Quizze und die Fortschrittsverfolgung
der Spieler.

Features:
- Rollen (player / instructor / admin) mit Zuordnung Spieler → Instruktor
- Kurse und Lektionen mit fester Reihenfolge
- Drei Validierungsarten je Lektion: read, pro, qcm
- Quiz-Bewertung mit Sperrfrist nach nicht bestandenem Versuch

Struktur:
- users/: Benutzerverwaltung und Authentifizierung
- modules/: Kurse, Lektionen, Inhalte und Quizze
- progress/: Fortschritt je Spieler und Lektion
- services/: Bewertung, Validierungsregeln und Reihenfolge
- management/: Django Management Commands

Author: Learning Platform Team
Version: 1.0.0
"""
