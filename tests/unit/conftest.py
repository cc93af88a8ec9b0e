"""Unit test fixtures using mongomock."""

import mongomock
import pytest

from ublog_migrate import Repository
from ublog_migrate.schema import BLOG_COLLECTION, POST_COLLECTION


@pytest.fixture
def mongo_database():
    """In-memory MongoDB database."""
    client = mongomock.MongoClient()
    yield client["lichess"]
    client.close()


@pytest.fixture
def repository(mongo_database) -> Repository:
    """Repository wrapping the in-memory database."""
    return Repository(mongo_database)


@pytest.fixture
def posts(mongo_database):
    """The post collection."""
    return mongo_database[POST_COLLECTION]


@pytest.fixture
def blogs(mongo_database):
    """The blog collection."""
    return mongo_database[BLOG_COLLECTION]
