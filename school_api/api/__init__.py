"""API package for the application.

This module makes the school_api.api directory a proper Python package.
It intentionally avoids importing submodules to prevent import cycles.
- api package
"""

__all__ = []
