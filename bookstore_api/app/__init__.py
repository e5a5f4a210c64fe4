"""
Application package initializer.

The catalog service is organised into a few small layers: ``core``
holds configuration, logging, security and storage primitives,
``services`` holds the business rules for books, users and reviews,
``schemas`` holds the pydantic models and ``api`` exposes the HTTP
routes.  The assembled FastAPI application lives in ``main``.
"""

from .main import app  # noqa: F401
