import os

# core.config.settings is instantiated at import time
os.environ.setdefault("GITHUB_TOKEN", "test-token")
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite://")

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from archive.models import NormalizedRecord


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    yield engine
    await engine.dispose()


def make_repo(**overrides):
    """PyGithub Repository stand-in"""
    base = {
        "id": 1,
        "full_name": "acme/widget",
        "description": "tools:a widget",
        "html_url": "https://github.com/acme/widget",
        "homepage": "https://widget.acme.dev",
        "topics": ["a", "b"],
        "created_at": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "updated_at": datetime(2021, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
    }
    base.update(overrides)
    return MagicMock(**base)


def make_record(**overrides) -> NormalizedRecord:
    base = {
        "owner": "acme",
        "name": "widget",
        "category": "tools",
        "description": "a widget",
        "html_url": "https://github.com/acme/widget",
        "homepage": "",
        "topics": "a,b",
        "created_at": "2020-01-02",
        "updated_at": "2021-02-03",
        "uid": 1,
    }
    base.update(overrides)
    return NormalizedRecord(**base)
