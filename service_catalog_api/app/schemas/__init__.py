"""
Pydantic schema definitions for API payloads.

Schemas are kept separate from stored documents so that the API
representation (``id``) is decoupled from persistence (``_id``).
"""
