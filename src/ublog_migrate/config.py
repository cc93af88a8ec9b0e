"""Connection settings for the ublog-migrate CLI.

The migration routines themselves take an explicit repository and read no
configuration. Only the CLI resolves where to connect:

- Explicit option (``--uri`` / ``--database``)
- Environment variable (``UBLOG_MONGO_URI`` / ``UBLOG_MONGO_DATABASE``)
- Built-in default
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .exceptions import ValidationError

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
"""MongoDB connection string used when nothing else is given."""

DEFAULT_DATABASE = "lichess"
"""Database holding the ublog collections."""

URI_ENV_VAR = "UBLOG_MONGO_URI"
DATABASE_ENV_VAR = "UBLOG_MONGO_DATABASE"

# Characters MongoDB rejects in database names
_INVALID_DATABASE_CHARS = '/\\. "$'

# MongoDB limit on database name length, in bytes
_MAX_DATABASE_NAME_BYTES = 63


def validate_database_name(name: str) -> None:
    """
    Validate a MongoDB database name.

    Args:
        name: The user-provided database name

    Raises:
        ValidationError: If the name is empty, too long, or has invalid characters
    """
    if not name:
        raise ValidationError("database", name, "Database name cannot be empty")

    bad = sorted({c for c in name if c in _INVALID_DATABASE_CHARS})
    if bad:
        raise ValidationError(
            "database",
            name,
            f"Contains invalid characters: {' '.join(repr(c) for c in bad)}",
        )

    if len(name.encode("utf-8")) > _MAX_DATABASE_NAME_BYTES:
        raise ValidationError(
            "database",
            name,
            f"Too long. Database names are limited to {_MAX_DATABASE_NAME_BYTES} bytes.",
        )


def resolve_uri(uri: str | None) -> str:
    """Resolve the connection string: ``uri`` arg, then env var, then default."""
    return uri or os.environ.get(URI_ENV_VAR) or DEFAULT_MONGO_URI


def resolve_database_name(database: str | None) -> str:
    """Resolve and validate the database name: ``database`` arg, then env var, then default."""
    name = database or os.environ.get(DATABASE_ENV_VAR) or DEFAULT_DATABASE
    validate_database_name(name)
    return name


@dataclass(frozen=True)
class MongoSettings:
    """Where the migration connects."""

    uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE

    @classmethod
    def resolve(cls, uri: str | None = None, database: str | None = None) -> MongoSettings:
        """Create settings from explicit values, falling back to the environment."""
        return cls(uri=resolve_uri(uri), database=resolve_database_name(database))

    @classmethod
    def from_environment(cls) -> MongoSettings:
        """Create settings from environment variables only."""
        return cls.resolve()
