"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Each domain (members, classes, enrollments) exposes a
router defined in ``api/endpoints``; the routers are grouped by
``api/router.py`` and mounted under ``/api`` by ``main.create_app``.
"""

from .main import app  # noqa: F401
