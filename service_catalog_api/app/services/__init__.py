"""
Service layer abstraction.

Services hold the catalog's business rules and sit between the HTTP
handlers and the store repository.
"""
