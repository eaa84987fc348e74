"""Diagnostics package.

- diagnostics.ephem: optional comparisons against JPL DE422
  (requires the ephemeris and diagnostics extras)
"""

__all__ = ["ephem"]
