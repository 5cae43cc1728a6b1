"""Exception types raised by the analytics suite."""


class AnalyticsError(Exception):
    """Base class for analytics errors."""


class InvalidArgument(AnalyticsError, ValueError):
    """A caller passed a parameter outside its contract (e.g. a non-positive horizon)."""


class DataLoadError(AnalyticsError):
    """A ledger or catalog file could not be located, read or decoded."""


def require_positive_int(name: str, value) -> int:
    """Return ``value`` if it is a positive integer, else raise InvalidArgument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {value}")
    return value
