"""
HTTP tests for the command parsing endpoint and app wiring.

Run with: pytest tests/test_command_routes.py -v
"""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from salon_scheduler.command_routes import error_code_for, get_local_now, to_salon_wall_clock
from salon_scheduler.core.config import Settings
from salon_scheduler.core.responses import ErrorCodes


# ────────────────────────────────────────────────────────────────
# Test: POST /commands/parse
# ────────────────────────────────────────────────────────────────

class TestParseEndpoint:
    """Tests for POST /commands/parse."""

    @pytest.mark.asyncio
    async def test_successful_parse(self, client):
        """A complete command returns the draft and a summary."""
        response = await client.post(
            "/commands/parse",
            json={
                "command": 'schedule "Jane Doe" for a haircut tomorrow at 2pm',
                "now": "2024-01-10T09:00:00",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["error"] is None
        assert body["data"]["client_name"] == "Jane Doe"
        assert body["data"]["service_type"] == "haircut"
        assert body["data"]["appointment_time"] == "2024-01-11T14:00:00"
        assert body["data"]["summary"] == (
            "Scheduling Jane Doe for haircut on Thursday, January 11, 2024 at 2:00 PM"
        )

    @pytest.mark.asyncio
    async def test_parse_failure_keeps_partial_fields(self, client):
        """Unschedulable command is a 200 with status=error and partial data."""
        response = await client.post(
            "/commands/parse",
            json={"command": "schedule Bob for a trim", "now": "2024-01-10T09:00:00"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["error"]["code"] == ErrorCodes.MISSING_DATE_TIME
        assert body["error"]["message"] == "Could not identify appointment time"
        assert body["data"]["client_name"] == "Bob"
        assert body["data"]["service_type"] == "trim"
        assert body["data"]["appointment_time"] is None
        assert body["data"]["summary"] == "Could not identify appointment time"

    @pytest.mark.asyncio
    async def test_missing_command_is_empty(self, client):
        """Omitted command defaults to empty and reports EMPTY_COMMAND."""
        response = await client.post("/commands/parse", json={})

        assert response.status_code == 200
        body = response.json()
        assert body["error"]["code"] == ErrorCodes.EMPTY_COMMAND
        assert body["data"]["client_name"] is None

    @pytest.mark.asyncio
    async def test_now_defaults_to_salon_clock(self, client):
        """Without 'now', the salon's local clock is used."""
        fixed = datetime(2024, 1, 10, 9, 0)
        with patch("salon_scheduler.command_routes.get_local_now", return_value=fixed):
            response = await client.post(
                "/commands/parse",
                json={"command": "schedule John for color on monday at 10"},
            )

        assert response.json()["data"]["appointment_time"] == "2024-01-15T22:00:00"

    @pytest.mark.asyncio
    async def test_aware_now_is_read_in_salon_timezone(self, client):
        """02:00 UTC on Jan 11 is still Jan 10 evening at the salon."""
        with patch(
            "salon_scheduler.command_routes.get_settings",
            return_value=Settings(SALON_TIMEZONE="America/Denver"),
        ):
            response = await client.post(
                "/commands/parse",
                json={
                    "command": 'schedule "Jane" for a trim tomorrow at 2pm',
                    "now": "2024-01-11T02:00:00Z",
                },
            )

        assert response.status_code == 200
        assert response.json()["data"]["appointment_time"] == "2024-01-11T14:00:00"

    @pytest.mark.asyncio
    async def test_malformed_body_is_validation_error(self, client):
        """A non-datetime 'now' fails request validation."""
        response = await client.post(
            "/commands/parse",
            json={"command": "schedule Bob for a trim", "now": "not a date"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["status"] == "error"
        assert body["error"]["code"] == ErrorCodes.VALIDATION_ERROR


# ────────────────────────────────────────────────────────────────
# Test: Helpers and app wiring
# ────────────────────────────────────────────────────────────────

class TestHelpers:
    """Tests for route helpers."""

    def test_error_code_for_known_messages(self):
        assert error_code_for("Could not identify client name") == ErrorCodes.MISSING_CLIENT_NAME
        assert error_code_for("Could not identify a specific time") == ErrorCodes.MISSING_EXPLICIT_TIME

    def test_error_code_for_unknown_message(self):
        assert error_code_for("something else") == ErrorCodes.INVALID_INPUT

    def test_local_now_is_naive(self):
        assert get_local_now().tzinfo is None

    def test_wall_clock_converts_aware_values(self):
        settings = Settings(SALON_TIMEZONE="America/Denver")
        aware = datetime(2024, 1, 11, 2, 0, tzinfo=timezone.utc)

        with patch("salon_scheduler.command_routes.get_settings", return_value=settings):
            assert to_salon_wall_clock(aware) == datetime(2024, 1, 10, 19, 0)

    def test_wall_clock_keeps_naive_values(self):
        naive = datetime(2024, 1, 10, 9, 0)

        assert to_salon_wall_clock(naive) is naive


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health_reports_business_context(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["timezone"]
        assert set(body["working_hours"]) == {"start", "end", "label"}
