"""
Clock label parsing and formatting.

The statistics source labels hours the way people read a 12-hour clock
("8pm", "8pm-9pm", "7:56pm"). These helpers convert between those labels
and decimal hours of day in [0, 24).
"""

import re
from typing import Tuple

HOURS_PER_DAY = 24
MINUTES_PER_DAY = HOURS_PER_DAY * 60

_CLOCK_HOUR_RE = re.compile(r"^\s*(\d{1,2})\s*([ap]m)?\s*$", re.IGNORECASE)
_TIME_OF_DAY_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([ap]m)?\s*$", re.IGNORECASE)


def _to_24_hour(hour: int, suffix: str) -> int:
    """Convert a 12-hour clock value with am/pm suffix to 0-23."""
    suffix = suffix.lower()
    if hour < 1 or hour > 12:
        raise ValueError(f"Hour {hour} is not valid on a 12-hour clock")
    if suffix == "pm" and hour != 12:
        return hour + 12
    if suffix == "am" and hour == 12:
        return 0
    return hour


def format_hour(hour: int) -> str:
    """
    Format a whole hour as a 12-hour clock label.

    Example:
        >>> format_hour(0)
        '12am'
        >>> format_hour(20)
        '8pm'
    """
    hour = int(hour) % HOURS_PER_DAY
    display = hour % 12 or 12
    suffix = "am" if hour < 12 else "pm"
    return f"{display}{suffix}"


def slot_label(hour: int) -> str:
    """Label of the one-hour slot starting at ``hour`` (e.g. '8pm-9pm')."""
    return f"{format_hour(hour)}-{format_hour((int(hour) + 1) % HOURS_PER_DAY)}"


def block_label(start_hour: int, end_hour: int) -> str:
    """Label of a multi-hour block (e.g. '8pm-12am')."""
    return f"{format_hour(start_hour)}-{format_hour(end_hour)}"


def parse_clock_hour(text: str) -> int:
    """
    Parse a clock hour such as '8pm', '12am' or '14' into 0-23.

    Raises:
        ValueError: If the text is not a recognizable clock hour
    """
    match = _CLOCK_HOUR_RE.match(text)
    if not match:
        raise ValueError(f"Not a clock hour: {text!r}")

    hour = int(match.group(1))
    suffix = match.group(2)
    if suffix:
        return _to_24_hour(hour, suffix)
    if hour >= HOURS_PER_DAY:
        raise ValueError(f"Hour {hour} is out of range")
    return hour


def parse_slot_range(text: str) -> Tuple[int, int]:
    """
    Parse a slot or block label such as '8pm-12am' into (start, end) hours.

    The end hour is returned as written; a block ending at midnight yields
    end 0, and wraparound is resolved by the caller.
    """
    parts = text.split("-")
    if len(parts) != 2:
        raise ValueError(f"Not a time range: {text!r}")
    return parse_clock_hour(parts[0]), parse_clock_hour(parts[1])


def parse_time_of_day(text: str) -> float:
    """
    Parse a time such as '7:56pm' or '19:56' into decimal hours.

    Example:
        >>> round(parse_time_of_day("7:56pm"), 4)
        19.9333
    """
    match = _TIME_OF_DAY_RE.match(text)
    if not match:
        raise ValueError(f"Not a time of day: {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    suffix = match.group(3)
    if minute >= 60:
        raise ValueError(f"Minute {minute} is out of range")
    if suffix:
        hour = _to_24_hour(hour, suffix)
    elif hour >= HOURS_PER_DAY:
        raise ValueError(f"Hour {hour} is out of range")
    return hour + minute / 60.0


def format_time_of_day(hour: float) -> str:
    """
    Format decimal hours as a 12-hour clock time, rounded to the minute.

    Example:
        >>> format_time_of_day(19.9333)
        '7:56pm'
    """
    total_minutes = int(round(hour * 60)) % MINUTES_PER_DAY
    hours, minutes = divmod(total_minutes, 60)
    display = hours % 12 or 12
    suffix = "am" if hours < 12 else "pm"
    return f"{display}:{minutes:02d}{suffix}"


__all__ = [
    "HOURS_PER_DAY",
    "format_hour",
    "slot_label",
    "block_label",
    "parse_clock_hour",
    "parse_slot_range",
    "parse_time_of_day",
    "format_time_of_day",
]
