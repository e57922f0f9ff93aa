from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tests.factories import RecordingContext, make_app


@pytest.fixture
def ctx() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def calls() -> list[str]:
    """Names of endpoints whose body ran during the test."""
    return []


@pytest.fixture
def app(calls: list[str]) -> FastAPI:
    return make_app(calls)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client talking to the test app in-process.

    raise_app_exceptions=False because Starlette re-raises unhandled
    exceptions after the 500 handler has answered.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
