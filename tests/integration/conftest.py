"""Integration test fixtures against a real MongoDB server."""

import os
import time
import uuid

import pytest
from pymongo import MongoClient

from ublog_migrate import Repository
from ublog_migrate.config import URI_ENV_VAR


@pytest.fixture(scope="session")
def mongo_uri():
    """MongoDB connection string from environment."""
    uri = os.getenv(URI_ENV_VAR)
    if not uri:
        pytest.skip(f"{URI_ENV_VAR} not set - MongoDB not available")
    return uri


@pytest.fixture(scope="session")
def mongo_client(mongo_uri):
    """Client shared by the whole session."""
    client: MongoClient = MongoClient(mongo_uri, serverSelectionTimeoutMS=5000)
    yield client
    client.close()


@pytest.fixture
def unique_database_name():
    """Generate a unique database name for test isolation."""
    return f"ublog_it_{int(time.time())}_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def mongo_database(mongo_client, unique_database_name):
    """Fresh database, dropped after the test."""
    yield mongo_client[unique_database_name]
    mongo_client.drop_database(unique_database_name)


@pytest.fixture
def repository(mongo_database) -> Repository:
    """Repository over the real database."""
    return Repository(mongo_database)
