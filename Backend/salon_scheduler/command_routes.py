"""
Scheduling command endpoints.

POST /commands/parse takes a free-text instruction and returns the
appointment draft the booking form is prefilled with. A command that can't
be scheduled is still a 200: the envelope carries status="error", the
parse error, and whatever fields were extracted.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter
from pydantic import BaseModel, Field

from .command_parser import (
    CommandError,
    ParsedCommand,
    format_parsed_command,
    parse_scheduling_command,
)
from .core.config import get_settings
from .core.responses import ApiResponse, ErrorCodes

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/commands", tags=["commands"])


def get_local_now() -> datetime:
    """Current wall-clock time in the salon timezone, without tzinfo."""
    tz = ZoneInfo(get_settings().salon_timezone)
    return datetime.now(tz).replace(tzinfo=None)


def to_salon_wall_clock(value: datetime) -> datetime:
    """Naive salon-local wall-clock time for value; naive input is taken as already local."""
    if value.tzinfo is None:
        return value
    tz = ZoneInfo(get_settings().salon_timezone)
    return value.astimezone(tz).replace(tzinfo=None)


class ParseCommandRequest(BaseModel):
    command: str = ""
    now: datetime | None = Field(
        default=None,
        description="Reference time for 'tomorrow' and weekday names. Defaults to now in the salon timezone.",
    )


class ParsedCommandOut(BaseModel):
    client_name: str | None = None
    service_type: str | None = None
    appointment_time: datetime | None = None
    summary: str

    @classmethod
    def from_parsed(cls, parsed: ParsedCommand) -> "ParsedCommandOut":
        return cls(
            client_name=parsed.client_name,
            service_type=parsed.service_type,
            appointment_time=parsed.appointment_time,
            summary=format_parsed_command(parsed),
        )


def error_code_for(message: str) -> str:
    """Map a parser error message to its API error code."""
    try:
        return getattr(ErrorCodes, CommandError(message).name)
    except (ValueError, AttributeError):
        return ErrorCodes.INVALID_INPUT


@router.post("/parse", response_model=ApiResponse[ParsedCommandOut])
async def parse_command(request: ParseCommandRequest) -> ApiResponse[ParsedCommandOut]:
    """Parse a natural-language scheduling command into a booking draft."""
    now = to_salon_wall_clock(request.now) if request.now else get_local_now()
    parsed = parse_scheduling_command(request.command, now)
    out = ParsedCommandOut.from_parsed(parsed)

    if parsed.error:
        code = error_code_for(parsed.error)
        logger.info(f"Parse failed with {code} for command {request.command!r}")
        return ApiResponse[ParsedCommandOut].failure(code=code, message=parsed.error, data=out)

    return ApiResponse[ParsedCommandOut].success(out)
