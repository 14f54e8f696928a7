"""
Application package initializer.

The project is organised by layer: ``api`` holds the versioned
routers, ``services`` the business rules, ``repositories`` the mapping
between schemas and table rows and ``db`` the database backends.
"""

from .main import app  # noqa: F401
