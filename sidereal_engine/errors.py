"""
errors.py
=========
Error taxonomy for the sidereal engine.

Every error is raised at the point of violation and reaches the caller
unmodified. All of them are also ``ValueError`` so callers written against
the plain built-in keep working.
"""


class SiderealEngineError(Exception):
    """Base class for every error raised by this package."""


class InvalidDate(SiderealEngineError, ValueError):
    """Calendar-impossible or out-of-range date/time components."""


class DomainError(SiderealEngineError, ValueError):
    """A mathematical precondition was violated (e.g. |latitude| >= 90)."""


class UnsupportedLatitude(DomainError):
    """A house system was requested outside its valid latitude band."""


class UnsupportedChart(SiderealEngineError, ValueError):
    """Unknown divisional-chart code or a non-positive divisor."""
