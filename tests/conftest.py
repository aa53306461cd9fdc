"""Shared fixtures: a seeded post store and a client for the app built on it."""

import asyncio

import pytest
from faker import Faker
from fastapi.testclient import TestClient

from blog_api.app.core.config import settings
from blog_api.app.core.db import get_database_path
from blog_api.app.main import create_app
from blog_api.app.repositories import InMemoryPostRepository, SQLitePostRepository

fake = Faker()

SEED_COUNT = 10


def generate_post_data() -> dict:
    return {
        "author": {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
        },
        "title": fake.sentence(),
        "content": fake.text(),
    }


async def seed_posts(repository, count: int = SEED_COUNT) -> list:
    return [await repository.insert(generate_post_data()) for _ in range(count)]


def make_repository(kind: str):
    if kind == "memory":
        repository = InMemoryPostRepository()
    else:
        # The SQLite store lives at TEST_DATABASE_URL and is emptied around each test.
        repository = SQLitePostRepository(get_database_path(settings.test_database_url))
    repository.init()
    asyncio.run(repository.drop_all())
    return repository


@pytest.fixture(params=["memory", "sqlite"])
def empty_repository(request):
    repository = make_repository(request.param)
    yield repository
    asyncio.run(repository.drop_all())


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    repository = make_repository(request.param)
    asyncio.run(seed_posts(repository))
    yield repository
    asyncio.run(repository.drop_all())


@pytest.fixture
def app(repository):
    return create_app(repository=repository)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def any_post(repository):
    """A post already in the store."""
    return asyncio.run(repository.find_all())[0]
