class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class DateParseError(CalendarError, ValueError):
    """A date string is not exactly 8 digits or not a valid calendar date."""


class RangeNotLoadedError(CalendarError, LookupError):
    """A referenced year has no loaded YearIndex."""


class InvalidRangeError(CalendarError, ValueError):
    """The start of a half-open range lies after its end."""


class ConfigReadError(CalendarError):
    """The override file is missing, unreadable or not a JSON object."""


class MalformedOverrideEntry(CalendarError, ValueError):
    """A single override key or value cannot be interpreted."""
