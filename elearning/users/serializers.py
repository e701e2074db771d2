"""
E-Learning User Management Serializers

This module provides serializers for user authentication and user data
in the E-Learning system.

Serializers:
- CustomTokenObtainPairSerializer: JWT token enriched with the platform role
- UserSerializer: Current user data including role
- PlayerSerializer: Compact player listing for instructors and admins

Author: Learning Platform Team
Version: 1.0.0
"""

from typing import Dict, Any
from django.contrib.auth.models import User
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from .models import Profile, get_role


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    JWT token serializer with user metadata integration.

    Token Payload Includes:
    - username: User identification
    - role: Platform role (player / instructor / admin)
    """

    @classmethod
    def get_token(cls, user: User) -> RefreshToken:
        token = super().get_token(user)

        token["username"] = user.username
        token["role"] = get_role(user)

        return token

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        data = super().validate(attrs)

        # Add user information to response for frontend convenience
        data.update(
            {
                "user_id": self.user.id,
                "username": self.user.username,
                "role": get_role(self.user),
            }
        )

        return data


class UserSerializer(serializers.ModelSerializer):
    """
    User data serializer with the platform role taken from the profile.
    """

    role = serializers.SerializerMethodField()
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "role",
            "is_active",
            "last_login",
        )
        read_only_fields = fields

    def get_role(self, obj: User) -> str:
        return get_role(obj)

    def get_full_name(self, obj: User) -> str:
        """
        Get formatted full name of the user.

        Returns:
            Formatted full name or username if names are not available
        """
        if obj.first_name and obj.last_name:
            return f"{obj.first_name} {obj.last_name}"
        elif obj.first_name:
            return obj.first_name
        elif obj.last_name:
            return obj.last_name
        return obj.username


class PlayerSerializer(serializers.ModelSerializer):
    assigned_instructor = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "last_login",
            "assigned_instructor",
        )
        read_only_fields = fields

    def get_assigned_instructor(self, obj: User):
        try:
            return obj.profile.assigned_instructor_id
        except Profile.DoesNotExist:
            return None
