"""
Top‑level package for the gym membership API.

This file makes ``gym_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``gym_api.app.main``.  The package provides no public exports; all
functionality lives in submodules under ``app``.
"""

__all__ = []
