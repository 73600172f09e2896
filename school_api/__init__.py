"""School API: records schools and lists them by distance from a point.
- school_api package
"""

__version__ = "1.0.0"
