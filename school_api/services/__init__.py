"""Services package: distance ranking and the school store.

Submodules are not imported here so the distance helpers stay importable
without the database driver being configured.
- services package
"""

__all__ = []
