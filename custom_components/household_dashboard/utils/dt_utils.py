# File: utils/dt_utils.py
"""Date and time utilities for Household Dashboard.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo.

Functions:
    - set_default_timezone / get_default_timezone: Module timezone configuration
    - dt_today_local: Get today's date in local timezone
    - dt_now_local / dt_now_utc: Current instant, local or UTC
    - as_utc / as_local / start_of_local_day: Timezone conversion
    - local_calendar_day: Calendar day of a timestamp in local timezone
    - days_between: Signed whole-day distance between two calendar days
    - dt_parse_date / dt_parse / dt_to_utc: Parse backend timestamps
    - dt_format: Format datetime to various output types
    - dt_format_time: "2:30 PM" style wall-clock time
    - dt_relative_day_label: "Today" / "Tomorrow" / "Mon, Mar 11"
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
import logging
from typing import TYPE_CHECKING, cast
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default timezone - replaced by the integration during setup
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# dt_parse / dt_format return types
HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"
HELPER_RETURN_ISO_DATE = "iso_date"

# Relative day labels
LABEL_TODAY = "Today"
LABEL_TOMORROW = "Tomorrow"

DISPLAY_UNKNOWN = "Unknown"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup with Home Assistant's configured zone.
    Every calendar-day comparison in the engines uses this zone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.

    Example:
        datetime.date(2024, 3, 10)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive input as local wall time."""
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive input is treated as local wall time already, which matches how
    `dt_parse` attaches the default zone to offset-less backend strings.

    Args:
        dt_obj: Datetime object, aware or naive
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(value: date | datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get 00:00:00 local time for the calendar day containing `value`.

    DST-safe: the wall-clock midnight is rebuilt in the zone rather than
    computed by subtracting hours.

    Args:
        value: Date or datetime (any timezone)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Timezone-aware datetime at local midnight
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    day = local_calendar_day(value, tz_info)
    return datetime.combine(day, time.min, tzinfo=tz_info)


# ==============================================================================
# Calendar-Day Arithmetic
# ==============================================================================


def local_calendar_day(value: date | datetime, tz: ZoneInfo | None = None) -> date:
    """Return the calendar day a date or timestamp falls on in local time.

    This is the single definition of "same day" used by the bucketing and
    status engines: two instants share a day when this function returns the
    same date for both.

    Args:
        value: A `date` (returned unchanged) or `datetime`
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        The local calendar date.

    Example:
        >>> set_default_timezone(ZoneInfo("America/New_York"))
        >>> local_calendar_day(datetime(2024, 3, 11, 3, 0, tzinfo=UTC))
        datetime.date(2024, 3, 10)
    """
    if isinstance(value, datetime):
        return as_local(value, tz).date()
    return value


def days_between(start: date, end: date) -> int:
    """Return the signed number of calendar days from `start` to `end`.

    Example:
        days_between(date(2024, 3, 10), date(2024, 3, 13)) → 3
        days_between(date(2024, 3, 10), date(2024, 3, 5)) → -5
    """
    return (end - start).days


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts "2024-03-10" (ISO) and "03/10/2024" (US) formats.

    Args:
        date_str: Date string to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize backend timestamp values to a timezone-aware datetime.

    The backend emits ISO 8601 strings, sometimes with a trailing "Z",
    sometimes with an offset, and for date-only fields (bill due dates,
    refill dates) a bare "YYYY-MM-DD". Offset-less values are interpreted as
    local wall time.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)
        return_type: One of the HELPER_RETURN_* constants (see dt_format)

    Returns:
        Normalized value, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2024-03-10T14:30:00Z", return_type=HELPER_RETURN_ISO_DATETIME)
        '2024-03-10T14:30:00+00:00'
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input.strip())
        except ValueError:
            parsed_date = dt_parse_date(dt_input.strip())
            if parsed_date is None:
                _LOGGER.debug("Unparseable timestamp: %s", dt_input)
                return None
            result = datetime.combine(parsed_date, time.min)
    elif isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, time.min)
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return dt_format(result, return_type)


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse a datetime string, apply timezone if naive, and convert to UTC."""
    if not dt_str:
        return None
    result = dt_parse(
        dt_str,
        default_tzinfo=DEFAULT_TIME_ZONE,
        return_type=HELPER_RETURN_DATETIME_UTC,
    )
    return cast("datetime | None", result)


# ==============================================================================
# Date/Time Formatting
# ==============================================================================


def dt_format(
    dt_obj: datetime,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Format a datetime object according to the specified return_type.

    Args:
        dt_obj: The datetime object to format
        return_type: The desired return format:
            - HELPER_RETURN_DATETIME: the datetime object unchanged
            - HELPER_RETURN_DATETIME_UTC: converted to UTC
            - HELPER_RETURN_DATETIME_LOCAL: converted to local timezone
            - HELPER_RETURN_DATE: the local calendar date
            - HELPER_RETURN_ISO_DATETIME: ISO-formatted datetime string
            - HELPER_RETURN_ISO_DATE: ISO-formatted local date string

    Returns:
        The formatted date/time value
    """
    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(dt_obj)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(dt_obj)
    if return_type == HELPER_RETURN_DATE:
        return local_calendar_day(dt_obj)
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return dt_obj.isoformat()
    if return_type == HELPER_RETURN_ISO_DATE:
        return local_calendar_day(dt_obj).isoformat()
    return dt_obj


def dt_format_time(dt_obj: datetime | None) -> str:
    """Format the local wall-clock time of a timestamp as "2:30 PM".

    Example:
        dt_format_time(datetime(2024, 3, 10, 14, 30, tzinfo=tz)) → "2:30 PM"
        dt_format_time(datetime(2024, 3, 10, 0, 5, tzinfo=tz)) → "12:05 AM"
    """
    if dt_obj is None:
        return DISPLAY_UNKNOWN
    local = as_local(dt_obj)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def dt_relative_day_label(value: date | datetime, today: date | None = None) -> str:
    """Return "Today", "Tomorrow" or a short weekday label for a day.

    Args:
        value: Date or timestamp to describe
        today: Reference day. Uses dt_today_local() if not provided.

    Returns:
        Label string.

    Example:
        dt_relative_day_label(date(2024, 3, 11), today=date(2024, 3, 10)) → "Tomorrow"
        dt_relative_day_label(date(2024, 3, 18), today=date(2024, 3, 10)) → "Mon, Mar 18"
    """
    reference = today or dt_today_local()
    day = local_calendar_day(value)
    offset = days_between(reference, day)
    if offset == 0:
        return LABEL_TODAY
    if offset == 1:
        return LABEL_TOMORROW
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}"
