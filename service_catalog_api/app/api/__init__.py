"""
API package containing the HTTP routes.

``router`` in ``router.py`` bundles every endpoint module under
``endpoints`` and is included by the application factory.
"""
