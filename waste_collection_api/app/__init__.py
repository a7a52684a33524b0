"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, errors and persistence; ``schemas`` the
Pydantic payloads; ``services`` the business rules; and ``api`` the
versioned HTTP routers.  Each domain (clients, vehicles, workers,
service records) exposes a router defined in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
