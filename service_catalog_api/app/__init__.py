"""
Application package initializer.

This package contains the FastAPI entrypoint (``main``) and its
submodules: ``core`` (configuration, logging, MongoDB access and
authentication), ``schemas`` (request and response models),
``services`` (validation and business logic) and ``api`` (routes).
"""

from .main import app  # noqa: F401
