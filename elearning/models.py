"""
E-Learning Application Models Registry

This module serves as the central models registry for the E-Learning application.
It imports and exposes all models from the logical submodules (users, modules, progress)
to ensure they are properly registered with Django's ORM system.

Architecture:
- users/: Profiles with platform role and instructor assignment
- modules/: Courses, lessons, contents, quizzes, questions and answers
- progress/: Per-player lesson progress and quiz lockout

Author: Learning Platform Team
Version: 1.0.0
"""

# Import all user-related models for registration with Django ORM
from .users.models import *

# Import all course-structure models for registration with Django ORM
from .modules.models import *

# Import all progress models for registration with Django ORM
from .progress.models import *
