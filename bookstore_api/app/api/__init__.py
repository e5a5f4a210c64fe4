"""
API package containing the HTTP routes.

Domain routers live in ``endpoints`` and are aggregated by
``router.router``, which the application includes at the root path.
"""
