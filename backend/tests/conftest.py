"""
Blog API Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_post:     Unsaved BlogPost with known field values
    ├── blog_store:      Open test store, create schema, seed 10 posts;
    │                    drop schema and dispose engine afterwards
    ├── seed_count:      Number of seeded posts
    ├── new_post_data:   Random well-formed POST /posts body (Faker)
    ├── test_client:     HTTPX AsyncClient bound to the app (requires blog_store)
    ├── bare_client:     HTTPX AsyncClient with no store opened
    ├── fetch_post:      Load a post straight from the store in a fresh session
    └── count_posts:     Count stored posts in a fresh session
"""

import os
import tempfile
from datetime import timezone
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before blog_api.config builds its settings singleton
_test_dir = tempfile.mkdtemp(prefix="blog_api_test_")
os.environ["TEST_DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test_blog.db"
os.environ["LOG_LEVEL"] = "WARNING"

from blog_api.config import settings  # noqa: E402
from blog_api.database import (  # noqa: E402
    create_schema,
    dispose_engine,
    drop_schema,
    get_session_factory,
    init_engine,
)
from blog_api.models.post import BlogPost  # noqa: E402

fake = Faker()

SEED_COUNT = 10
BLOG_TITLES = [
    "Fizz", "Bang", "Foo", "Bar", "Fizzbang", "Yolo", "I enjoy long walks on the beach",
]


# ══════════════════════════════════════════════════════════════════════════
# Random Post Data
# ══════════════════════════════════════════════════════════════════════════

def generate_blog_title() -> str:
    return fake.random_element(BLOG_TITLES)


def generate_author() -> Dict[str, str]:
    return {
        "firstName": fake.first_name(),
        "lastName": fake.last_name(),
    }


def generate_content() -> str:
    return fake.paragraph(nb_sentences=3)


def generate_blog_data(as_json: bool = False) -> Dict[str, Any]:
    """
    Random post fields. With as_json=True `created` is an ISO 8601 string
    ready to be sent as a request body.
    """
    created = fake.past_datetime(tzinfo=timezone.utc)
    return {
        "title": generate_blog_title(),
        "author": generate_author(),
        "content": generate_content(),
        "created": created.isoformat() if as_json else created,
    }


async def seed_blog_data(count: int = SEED_COUNT) -> List[BlogPost]:
    posts = [BlogPost(**generate_blog_data()) for _ in range(count)]
    async with get_session_factory()() as session:
        session.add_all(posts)
        await session.commit()
    return posts


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, post_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post():
    """An unsaved BlogPost with a fixed id and author."""
    return BlogPost(
        id=UUID("6f1c1a52-2d0e-4c5b-9a53-1f6f3f0f2a10"),
        title="Fizz",
        author={"firstName": "Grace", "lastName": "Hopper"},
        content="Original content",
        created=fake.past_datetime(tzinfo=timezone.utc),
    )


# ══════════════════════════════════════════════════════════════════════════
# Integration Fixtures (real SQLite store)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def blog_store():
    """
    Opens the test store, creates the schema and seeds random posts.

    Teardown drops every table and releases the engine, so each test starts
    from a fresh store holding exactly SEED_COUNT posts.
    """
    init_engine(settings.test_database_url)
    await create_schema()
    posts = await seed_blog_data()
    try:
        yield posts
    finally:
        await drop_schema()
        await dispose_engine()


@pytest.fixture
def seed_count(blog_store) -> int:
    return len(blog_store)


@pytest.fixture
def new_post_data() -> Dict[str, Any]:
    """A random, well-formed POST /posts body."""
    return generate_blog_data(as_json=True)


@pytest_asyncio.fixture
async def test_client(blog_store):
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server process).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts")
    """
    from blog_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def bare_client():
    """Client for an app whose store was never opened."""
    from blog_api.main import app
    await dispose_engine()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fetch_post(blog_store):
    """Returns an async callable loading a post by id in its own session (None if absent)."""
    async def _fetch(post_id):
        async with get_session_factory()() as session:
            return await session.get(BlogPost, UUID(str(post_id)))
    return _fetch


@pytest.fixture
def count_posts(blog_store):
    """Returns an async callable counting stored posts in its own session."""
    from blog_api.services.post_service import post_service

    async def _count() -> int:
        async with get_session_factory()() as session:
            return await post_service.count_posts(session)
    return _count
