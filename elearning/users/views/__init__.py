"""
E-Learning Users Views Package

Dieses Paket enthält alle Views für die Benutzerverwaltung im E-Learning-System.

Features:
- JWT-basierte Authentifizierung über HTTP-only Cookies
- Token-Rotation und Logout mit Token-Invalidierung
- Abfrage des angemeldeten Benutzers

Author: Learning Platform Team
Version: 1.0.0
"""

from .auth_views import (
    CustomTokenObtainPairView,
    CustomTokenRefreshView,
    LogoutView,
    CurrentUserView,
)
