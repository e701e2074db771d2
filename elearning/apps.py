"""
E-Learning Application Configuration

This module contains the Django application configuration for the E-Learning system.

The E-Learning application provides courses made of ordered lessons, lesson
progress under three validation modes (read / pro / qcm) and quiz grading
with a retry lockout.

Author: Learning Platform Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ElearningConfig(AppConfig):
    """
    Configuration class for the E-Learning Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "elearning"
    verbose_name: str = "E-Learning System"

    def ready(self) -> None:
        """
        Register the signal handlers (automatic profile creation).
        """
        super().ready()
        from .users import models  # noqa: F401
