"""
Scheduling Command Parser

Turns a free-text booking instruction into an appointment draft:

    schedule "Jane Doe" for a haircut tomorrow at 2pm
        -> client_name="Jane Doe", service_type="haircut",
           appointment_time=<tomorrow 14:00>

Three independent passes run over the same command string:
    1. client name   - quoted span, else "schedule <name> for"
    2. service type  - "for <service>" up to a date/time keyword
    3. date + time   - tomorrow / weekday / numeric date, then clock time

Each pass returns the extracted value or None. Nothing here raises on bad
input; failures come back as ParsedCommand.error so the caller only has to
branch on that one field.

The returned appointment_time is a naive wall-clock datetime. Attaching the
salon timezone for storage is the caller's job.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

# Python weekday(): Monday=0 .. Sunday=6
WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_WEEKDAY_ALTERNATION = "|".join(WEEKDAYS)
_BOUNDARY_KEYWORDS = rf"on|at|tomorrow|next|{_WEEKDAY_ALTERNATION}"

# ────────────────────────────────────────────────────────────────
# Patterns
# ────────────────────────────────────────────────────────────────

# An apostrophe inside a word (O'Neil, Kim's) does not open or close a quote.
QUOTED_NAME_RE = re.compile(r"\"([^\"]+)\"|(?<!\w)'([^']+)'(?!\w)")
SCHEDULE_NAME_RE = re.compile(r"\bschedule\s+([^\"'\s]\S*(?:\s+\S+)*?)\s+for\b", re.IGNORECASE)

SERVICE_RE = re.compile(
    rf"\bfor\s+(\S+(?:\s+\S+)*?)\s+(?:{_BOUNDARY_KEYWORDS})\b",
    re.IGNORECASE,
)
SERVICE_FALLBACK_RE = re.compile(
    rf"\bfor\s+(\S+(?:\s+\S+)*?)(?:\s+(?:{_BOUNDARY_KEYWORDS}|\d{{1,2}}[-/]\d{{1,2}})\b|$)",
    re.IGNORECASE,
)
LEADING_ARTICLE_RE = re.compile(r"^(?:a|an)\s+", re.IGNORECASE)

TOMORROW_RE = re.compile(r"\btomorrow\b", re.IGNORECASE)
WEEKDAY_RE = re.compile(rf"\b({_WEEKDAY_ALTERNATION})\b", re.IGNORECASE)
EXPLICIT_DATE_RE = re.compile(
    r"\b(?:on|at)\s+([a-zA-Z]+day|tomorrow|\d{1,2}[-/]\d{1,2}(?:[-/]\d{2,4})?)\b(?![-/\d])",
    re.IGNORECASE,
)

SPECIAL_TIME_RE = re.compile(r"\b(noon|midnight)\b", re.IGNORECASE)
# The trailing lookahead keeps "at 3/15" from being read as 3 o'clock.
CLOCK_TIME_RE = re.compile(
    r"\b(?:at|and)\s+(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\b(?![-/]\d)",
    re.IGNORECASE,
)


class CommandError(str, Enum):
    """Why a command could not be turned into a bookable appointment."""
    EMPTY_COMMAND = "No command provided"
    MISSING_CLIENT_NAME = "Could not identify client name"
    MISSING_SERVICE_TYPE = "Could not identify service type"
    MISSING_DATE_TIME = "Could not identify appointment time"
    MISSING_EXPLICIT_TIME = "Could not identify a specific time"


MeridiemPolicy = Callable[[int], int]


@dataclass(frozen=True)
class ParsedCommand:
    """Result of parsing one scheduling command.

    When error is set the other fields may still be populated with whatever
    was extracted, for display next to the error.
    """

    client_name: str | None = None
    service_type: str | None = None
    appointment_time: datetime | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "client_name": self.client_name,
            "service_type": self.service_type,
            "appointment_time": self.appointment_time.isoformat() if self.appointment_time else None,
            "error": self.error,
        }


# ────────────────────────────────────────────────────────────────
# Extraction passes
# ────────────────────────────────────────────────────────────────


def extract_client_name(command: str) -> str | None:
    """Client name from the first quoted span, else from 'schedule <name> for'."""
    if not command:
        return None

    match = QUOTED_NAME_RE.search(command)
    if match:
        quoted = (match.group(1) or match.group(2)).strip()
        if quoted:
            return quoted

    match = SCHEDULE_NAME_RE.search(command)
    if match:
        return match.group(1).strip() or None

    return None


def extract_service_type(command: str) -> str | None:
    """
    Service type from the text following 'for'.

    The primary pattern stops at the first date/time keyword (on, at,
    tomorrow, next, a weekday). Commands without one, like
    'schedule Bob for a trim', fall back to a pattern that also stops at a
    numeric M/D fragment or the end of the string.
    """
    if not command:
        return None
    text = command.strip()

    match = SERVICE_RE.search(text) or SERVICE_FALLBACK_RE.search(text)
    if not match:
        return None

    service = LEADING_ARTICLE_RE.sub("", match.group(1).strip()).strip()
    return service or None


def next_weekday(today: date, weekday: int) -> date:
    """Next date falling on weekday, strictly after today (1 to 7 days ahead)."""
    days_ahead = (weekday - today.weekday()) % 7
    if days_ahead == 0:  # Same day means next week
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def _parse_numeric_date(token: str, today: date) -> date | None:
    """Parse 'M/D', 'M-D', 'M/D/YY' or 'M/D/YYYY'. Calendar-invalid tokens give None."""
    parts = re.split(r"[-/]", token)
    month, day = int(parts[0]), int(parts[1])
    year = today.year
    if len(parts) == 3:
        raw_year = parts[2]
        if len(raw_year) == 2:
            year = 2000 + int(raw_year)
        elif len(raw_year) == 4:
            year = int(raw_year)
        else:
            return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def resolve_date(command: str, today: date) -> date | None:
    """
    Resolve the appointment date mentioned in command, relative to today.

    Precedence, first hit wins:
        1. 'tomorrow' anywhere
        2. a weekday name anywhere (always in the future, never today)
        3. 'on'/'at' followed by a weekday, 'tomorrow' or a numeric date

    Returns None when there is no date evidence, including when a numeric
    date is present but not a real calendar day (e.g. 13/45).
    """
    if not command:
        return None

    if TOMORROW_RE.search(command):
        resolved = today + timedelta(days=1)
        logger.debug(f"Parsed date as tomorrow: {resolved}")
        return resolved

    match = WEEKDAY_RE.search(command)
    if match:
        day_name = match.group(1).lower()
        resolved = next_weekday(today, WEEKDAYS.index(day_name))
        logger.debug(f"Parsed date as next {day_name}: {resolved}")
        return resolved

    match = EXPLICIT_DATE_RE.search(command)
    if not match:
        return None

    token = match.group(1).lower()
    if token == "tomorrow":
        return today + timedelta(days=1)
    if token in WEEKDAYS:
        return next_weekday(today, WEEKDAYS.index(token))
    if token.endswith("day"):
        # 'today', 'someday' and friends are not dates we resolve
        return None

    resolved = _parse_numeric_date(token, today)
    if resolved is None:
        logger.warning(f"Failed to parse date: {token!r}")
    else:
        logger.debug(f"Parsed date from {token!r} as {resolved}")
    return resolved


def business_hours_meridiem(hour: int) -> int:
    """
    Pick AM/PM for an hour given without one, assuming salon hours.

    1-11 are read as afternoon/evening (3 -> 15:00, 10 -> 22:00), 12 stays
    noon, and 0 or 24 mean midnight. Anything else is returned as-is.
    """
    if 1 <= hour <= 11:
        return hour + 12
    if hour in (0, 24):
        return 0
    return hour


def resolve_time(
    command: str,
    meridiem_policy: MeridiemPolicy = business_hours_meridiem,
) -> time | None:
    """
    Resolve the time of day mentioned in command.

    Recognizes 'noon', 'midnight', and '(at|and) H[:MM] [am|pm]'. Hours
    without am/pm go through meridiem_policy. Out-of-range results
    (e.g. 'at 45') count as no time.
    """
    if not command:
        return None

    special = SPECIAL_TIME_RE.search(command)
    if special:
        resolved = time(12, 0) if special.group(1).lower() == "noon" else time(0, 0)
        logger.debug(f"Parsed time as {special.group(1).lower()}: {resolved}")
        return resolved

    match = CLOCK_TIME_RE.search(command)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").lower()

    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    elif not meridiem:
        hour = meridiem_policy(hour)

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        logger.warning(f"Ignoring out-of-range time {match.group(0)!r}")
        return None

    resolved = time(hour, minute)
    logger.debug(f"Parsed time as {resolved}")
    return resolved


# ────────────────────────────────────────────────────────────────
# Entry points
# ────────────────────────────────────────────────────────────────


def parse_scheduling_command(
    command: str,
    now: datetime,
    meridiem_policy: MeridiemPolicy = business_hours_meridiem,
) -> ParsedCommand:
    """
    Parse a scheduling command into a ParsedCommand.

    Args:
        command: Raw instruction, e.g. 'schedule John for color on monday at 10'
        now: Reference instant for 'tomorrow' and weekday names. An aware
            datetime contributes its own wall-clock date.
        meridiem_policy: Maps an hour given without am/pm to a 24h hour

    Returns:
        ParsedCommand. error is set to the first applicable CommandError
        message: client name, then service type, then any date/time, then
        an explicit time of day.

    Examples:
        >>> parsed = parse_scheduling_command(
        ...     'schedule "Jane Doe" for a haircut tomorrow at 2pm',
        ...     datetime(2024, 1, 10, 9, 0),
        ... )
        >>> parsed.appointment_time
        datetime.datetime(2024, 1, 11, 14, 0)
    """
    text = (command or "").strip()
    if not text:
        return ParsedCommand(error=CommandError.EMPTY_COMMAND.value)

    logger.debug(f"Processing command: {text!r}")

    client_name = extract_client_name(text)
    service_type = extract_service_type(text)
    logger.debug(f"Extracted client={client_name!r} service={service_type!r}")

    today = now.date()
    appointment_date = resolve_date(text, today)
    appointment_clock = resolve_time(text, meridiem_policy)

    appointment_time = None
    if appointment_date is not None or appointment_clock is not None:
        appointment_time = datetime.combine(
            appointment_date or today,
            appointment_clock or time(0, 0),
        )

    if not client_name:
        error = CommandError.MISSING_CLIENT_NAME
    elif not service_type:
        error = CommandError.MISSING_SERVICE_TYPE
    elif appointment_time is None:
        error = CommandError.MISSING_DATE_TIME
    elif appointment_clock is None:
        error = CommandError.MISSING_EXPLICIT_TIME
    else:
        error = None

    if error:
        logger.info(f"Command not schedulable ({error.name}): {text!r}")

    return ParsedCommand(
        client_name=client_name,
        service_type=service_type,
        appointment_time=appointment_time,
        error=error.value if error else None,
    )


def format_hour(hour: int) -> str:
    """Format a 24h hour as a 12h label, e.g. 0 -> '12 AM', 14 -> '2 PM'."""
    period = "PM" if hour % 24 >= 12 else "AM"
    return f"{hour % 12 or 12} {period}"


def format_appointment_time(value: datetime) -> str:
    """'Thursday, January 11, 2024 at 2:00 PM'"""
    hour = value.hour % 12 or 12
    period = "PM" if value.hour >= 12 else "AM"
    return f"{value:%A, %B} {value.day}, {value.year:04d} at {hour}:{value.minute:02d} {period}"


def format_parsed_command(parsed: ParsedCommand) -> str:
    """Human-readable summary of a parse result, or its error message."""
    if parsed.error:
        return parsed.error

    when = format_appointment_time(parsed.appointment_time) if parsed.appointment_time else ""
    return f"Scheduling {parsed.client_name or ''} for {parsed.service_type or ''} on {when}"
