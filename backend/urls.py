"""
Root URL configuration for the learning platform backend.

Mounts the Django admin and the E-Learning API under /api/elearning/.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/elearning/", include("elearning.urls")),
]
