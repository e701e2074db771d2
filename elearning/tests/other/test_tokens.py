from django.test import TestCase
from rest_framework import status

from elearning.users.models import Role

from ..helpers import create_user

"""
    Test Script für die Token generierung, richtige Formatierung und für das neue Ausstellen von Access Tokens
    Token werden für den Login benötigt und nur als HTTP-only Cookies ausgeliefert.
"""

API = "/api/elearning"


class TokenTests(TestCase):
    def setUp(self):
        self.user = create_user("testUser", Role.INSTRUCTOR)
        response = self.client.post(
            f"{API}/token/", {"username": "testUser", "password": "testPassword"}
        )
        self.status_code = response.status_code
        self.access_token = response.cookies.get("access_token")
        self.refresh_token = response.cookies.get("refresh_token")
        self.body = response.json()

    def test_login_sets_cookies_and_hides_tokens(self):
        self.assertEqual(self.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(self.access_token)
        self.assertIsNotNone(self.refresh_token)
        self.assertTrue(self.access_token["httponly"])
        self.assertNotIn("access", self.body)
        self.assertNotIn("refresh", self.body)
        self.assertEqual(self.body["role"], "instructor")
        self.assertEqual(self.body["username"], "testUser")

    def test_wrong_password(self):
        response = self.client.post(
            f"{API}/token/", {"username": "testUser", "password": "wrong"}
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_cookie_authenticates_requests(self):
        response = self.client.get(f"{API}/users/me/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["role"], "instructor")

    def test_refresh_token_success(self):
        response = self.client.post(f"{API}/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.cookies.get("access_token"))

    def test_refresh_token_failure(self):
        self.client.cookies["refresh_token"] = "bad token"
        response = self.client.post(f"{API}/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_refresh_token_missing(self):
        del self.client.cookies["refresh_token"]
        response = self.client.post(f"{API}/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_logout_blacklists_refresh_token(self):
        refresh_value = self.refresh_token.value
        response = self.client.post(f"{API}/users/logout/")
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)

        self.client.cookies["refresh_token"] = refresh_value
        response = self.client.post(f"{API}/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
