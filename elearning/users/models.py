"""
E-Learning User Management Models

This module defines the user-related models for the E-Learning system,
extending Django's built-in User model with a profile that carries the
platform role and the optional instructor assignment of a player.

Models:
- Profile: Platform role (player / instructor / admin) and instructor assignment

Features:
- Automatic profile creation for new users
- Role lookup used to build the explicit actor of every service call
- Player-to-instructor assignment used for progress visibility

Author: Learning Platform Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    """Platform roles."""

    PLAYER = "player", _("Player")
    INSTRUCTOR = "instructor", _("Instructor")
    ADMIN = "admin", _("Admin")


class Profile(models.Model):
    """
    Extended user profile model for the E-Learning system.

    Attributes:
        user: One-to-one relationship with Django User model
        role: Platform role, defaults to player
        assigned_instructor: Instructor following this player (players only)

    The profile is automatically created when a new user is registered
    and maintains a one-to-one relationship with the User model.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.PLAYER,
        db_index=True,
        verbose_name=_("Role"),
        help_text=_("Platform role of the user"),
    )

    assigned_instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_players",
        verbose_name=_("Assigned Instructor"),
        help_text=_("Instructor who follows the progress of this player"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "elearning_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile ({self.role})"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username}, role={self.role})>"

    @property
    def is_player(self) -> bool:
        return self.role == Role.PLAYER


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Automatically create a user profile when a new user is created.

    Superusers start out as admins, everybody else as player.
    """
    if created:
        role = Role.ADMIN if instance.is_superuser else Role.PLAYER
        Profile.objects.get_or_create(user=instance, defaults={"role": role})


def get_role(user) -> str:
    """
    Resolve the platform role of a user.

    Superusers are always admins; users without profile are treated as players.
    """
    if user.is_superuser:
        return Role.ADMIN
    try:
        return user.profile.role
    except Profile.DoesNotExist:
        return Role.PLAYER
