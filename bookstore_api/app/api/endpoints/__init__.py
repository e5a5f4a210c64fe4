"""
Endpoint subpackage.

Each module defines an APIRouter for one area (books, reviews, users
and the HTML home page).  The routers are aggregated in ``router.py``.
"""
