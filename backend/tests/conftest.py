"""
Blog API Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the test suite.
How:   Each test gets its own SQLite database (aiosqlite) in pytest's
       tmp_path, a BlogService over it, and an httpx AsyncClient wired to a
       fresh app through ASGITransport.

Fixtures:
    ├── database:      connected Database on a per-test SQLite file
    ├── blog_service:  BlogService over that database
    ├── app:           FastAPI app built around that database
    └── test_client:   HTTPX AsyncClient for endpoint tests
"""

import os
import tempfile

# Settings are read at import time; set them BEFORE importing blog_api
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="blog_api_test_"), "default.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.database import Database
from blog_api.main import create_app
from blog_api.services.blog_service import BlogService


@pytest_asyncio.fixture
async def database(tmp_path):
    """A connected Database backed by a throwaway SQLite file."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'blogs.db'}")
    await db.connect()
    yield db
    await db.dispose()


@pytest.fixture
def blog_service(database):
    return BlogService(database)


@pytest.fixture
def app(database):
    """
    App built around the test database.

    ASGITransport does not run the lifespan, so the database fixture has
    already connected it.
    """
    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/blogs")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_blog_payload():
    return {"title": "First post", "body": "Hello, world.", "author": "Ada"}
