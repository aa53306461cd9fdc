"""
Application package initializer.

The application is split into a few small pieces: ``core`` holds
configuration, logging, errors and database helpers, ``schemas`` the
pydantic models crossing the HTTP boundary, ``repositories`` the
persistence collaborators, ``services`` the business logic and
``api/v1`` the routes.
"""

from .main import app  # noqa: F401
