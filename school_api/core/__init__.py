"""Core package: configuration and error types.
- core package
"""

__all__ = []
