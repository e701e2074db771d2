"""
E-Learning Users Package

Dieses Paket enthält alle Module für die Benutzerverwaltung im E-Learning-System.

Features:
- Benutzerprofile mit Plattform-Rolle (player / instructor / admin)
- Zuordnung von Spielern zu einem Instruktor
- JWT-basierte Authentifizierung mit Rollen-Claim
- Expliziter Actor für Service-Aufrufe

Struktur:
- models.py: Benutzerprofile und Signal-Handler
- actor.py: Actor (id, role) für Service-Aufrufe
- serializers.py: API-Serialisierung für Benutzerdaten
- views/: Authentifizierungs-Views

Author: Learning Platform Team
Version: 1.0.0
"""
