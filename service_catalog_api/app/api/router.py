"""
Top‑level router for the catalog API.

This router aggregates the domain routers.  Authentication is not
attached here: ``AuthMiddleware`` in ``core.security`` guards every
path of the application, including ones no router matches.
"""

from fastapi import APIRouter

from .endpoints import services

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
