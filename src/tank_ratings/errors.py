"""
Exception hierarchy.

Defects in the scraped data (bad values, dangling references, missing
modules) are collected into reports and never raised. Exceptions are kept
for misuse of the API and for broken configuration.
"""


class TankRatingsError(Exception):
    """Base class for all tank-ratings errors."""

    pass


class ResolverError(TankRatingsError):
    """The input handed to the reference resolver is not a dataset."""

    pass


class WeightTableError(TankRatingsError):
    """Rating weight configuration is missing, unreadable or inconsistent."""

    pass


class RatingScopeError(TankRatingsError):
    """A vehicle was rated against best values computed for another scope."""

    pass


__all__ = [
    "TankRatingsError",
    "ResolverError",
    "WeightTableError",
    "RatingScopeError",
]
