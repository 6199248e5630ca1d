"""
Pytest configuration and shared fixtures.

Parser tests pin "now" to a fixed Wednesday morning so relative dates are
deterministic. HTTP tests drive the FastAPI app in-process through httpx.
"""
from datetime import datetime

import pytest
from httpx import AsyncClient, ASGITransport


@pytest.fixture
def reference_now() -> datetime:
    """Wednesday, January 10, 2024 at 9:00 AM."""
    return datetime(2024, 1, 10, 9, 0)


@pytest.fixture(scope="function")
async def client():
    """
    Create FastAPI AsyncClient bound to the app via ASGI transport.
    """
    # Import here so settings are read after any env overrides in tests
    from salon_scheduler.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
