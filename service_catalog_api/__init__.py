"""
Top‑level package for the Service Catalog API.

All functionality lives in submodules under ``app``; run the service
with ``uvicorn service_catalog_api.app.main:app`` or ``python run.py``.
"""

__all__ = []
