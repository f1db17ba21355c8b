"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a single
resource.  The routers are aggregated in ``router.py`` one level up.
"""
