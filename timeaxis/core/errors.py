"""Exceptions raised while resolving time axis configuration."""


class TimeAxisError(Exception):
    """Base class for recoverable time axis errors."""


class InvalidExtentError(TimeAxisError):
    """Raised when an extent's min is greater than its max."""


class TimeParseError(TimeAxisError, ValueError):
    """A value could not be interpreted as a point in time."""


class TimeRangeError(TimeAxisError, ValueError):
    """Raised for instants outside the calendar range local time arithmetic supports."""


class TimeAxisConfigError(TimeAxisError):
    """Raised for axis options that do not describe a usable time axis."""
