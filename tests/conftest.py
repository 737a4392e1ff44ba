"""Pytest configuration and fixtures for SunCheck tests.

Provides an in-memory database, a session bound to it and an HTTP client
for the FastAPI app with the database and AI dependencies overridden.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.core.database import get_session
from app.handlers.analysis import GeminiAnalyzer, get_analyzer
from app.models.project import ProjectCreate, RoofType
from main import app


@pytest_asyncio.fixture()
async def engine():
    """Create in-memory database shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def session(session_factory) -> AsyncSession:
    """Database session for handler-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def analyzer() -> GeminiAnalyzer:
    """Analyzer without credentials: every call returns fallback content."""
    return GeminiAnalyzer(api_key=None)


@pytest_asyncio.fixture()
async def client(session_factory, analyzer):
    """HTTP client for the app, wired to the test database and analyzer."""

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def ceramic_project() -> ProjectCreate:
    """Small residential project: 6 panels, 3.3 kW, ceramic roof."""
    return ProjectCreate(
        name="Silva residence",
        roof_type=RoofType.CERAMIC,
        inverter_power_kw=3.3,
        panel_count=6,
        installer="Carlos",
    )


@pytest.fixture
def project_payload() -> dict:
    """JSON body for POST /projects/."""
    return {
        "name": "North warehouse",
        "panel_count": 20,
        "inverter_power_kw": 11.0,
        "roof_type": "metal",
        "inverter_brand": "Fronius",
    }
