"""
E-Learning User Authentication Views

This module provides authentication endpoints for the E-Learning system:
JWT tokens are issued and rotated through HTTP-only cookies.

Views:
- CustomTokenObtainPairView: JWT authentication with role metadata
- CustomTokenRefreshView: Token rotation from the refresh cookie
- LogoutView: Token invalidation and cookie removal
- CurrentUserView: Data of the authenticated user

Author: Learning Platform Team
Version: 1.0.0
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from ..serializers import CustomTokenObtainPairSerializer, UserSerializer

logger = logging.getLogger(__name__)


def _set_token_cookies(response: Response, refresh: str = None, access: str = None):
    # secure=True → nur über HTTPS, samesite="None" für Cross-Site Frontend
    if refresh:
        response.set_cookie(
            "refresh_token",
            refresh,
            httponly=True,
            secure=True,
            samesite="None",
            path="/",
            max_age=settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"],
        )
    if access:
        response.set_cookie(
            "access_token",
            access,
            httponly=True,
            secure=True,
            samesite="None",
            path="/",
            max_age=settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"],
        )


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Custom view extending SimpleJWT's TokenObtainPairView to store JWT tokens in secure HTTP-only cookies
    instead of returning them in the response body.
    - Calls the parent class's `post` method to get access/refresh tokens.
    - Removes tokens from the response payload to avoid exposing them in JSON.
    - Sets `refresh_token` and `access_token` cookies with secure flags.
    """

    serializer_class = CustomTokenObtainPairSerializer
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == 200:
            data = response.data
            refresh = data.pop("refresh", None)
            access = data.pop("access", None)
            _set_token_cookies(response, refresh=refresh, access=access)
        return response


class CustomTokenRefreshView(TokenRefreshView):
    """
    Refresh JWT tokens from the `refresh_token` cookie and store the new pair
    in HTTP-only cookies instead of returning them in the response body.
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        refresh_token = request.COOKIES.get("refresh_token")
        if not refresh_token:
            return Response(
                {"detail": "Refresh token not provided"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = TokenRefreshSerializer(data={"refresh": refresh_token})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data

        response = Response(status=status.HTTP_200_OK)
        _set_token_cookies(
            response, refresh=data.get("refresh"), access=data.get("access")
        )
        return response


class LogoutView(APIView):
    """
    API endpoint to handle user logout by invalidating JWT tokens and clearing cookies.
    - Blacklists the refresh token from the cookie when present.
    - Always answers 205 Reset Content and deletes both token cookies.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        refresh_token = request.COOKIES.get("refresh_token")
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                # Abgelaufene oder bereits gesperrte Tokens sind beim Logout unkritisch
                logger.info(f"Logout with unusable refresh token: {e}")
        response = Response(
            {"detail": "Successfully logged out."}, status=status.HTTP_205_RESET_CONTENT
        )
        response.delete_cookie("refresh_token")
        response.delete_cookie("access_token")
        return response


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)
