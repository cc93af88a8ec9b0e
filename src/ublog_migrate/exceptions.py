"""Exceptions for ublog-migrate."""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class UblogMigrateError(Exception):
    """
    Base exception for all ublog-migrate errors.

    Store errors (``pymongo.errors.PyMongoError``) are not wrapped by the
    provisioner or the backfill walker; they propagate as-is so the operator
    sees the underlying failure.
    """

    pass


# ---------------------------------------------------------------------------
# Input Exceptions
# ---------------------------------------------------------------------------


class ValidationError(UblogMigrateError):
    """
    Raised when a configuration value fails validation.

    Attributes:
        field: Name of the offending setting
        value: The rejected value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class LegacyPostError(UblogMigrateError):
    """
    Raised when a legacy post is missing a field the rewrite depends on.

    The walk has no per-record isolation, so this halts the backfill at the
    offending post. Fix the record and re-run.
    """

    def __init__(self, post_id: Any, reason: str) -> None:
        self.post_id = post_id
        self.reason = reason
        super().__init__(f"Cannot migrate post {post_id!r}: {reason}")


# ---------------------------------------------------------------------------
# Migration Exceptions
# ---------------------------------------------------------------------------


class MigrationError(UblogMigrateError):
    """
    Raised when a registered migration fails.

    The original error is chained as ``__cause__``.

    Attributes:
        name: Migration that failed
        applied: Migrations that completed before the failure
    """

    def __init__(self, name: str, reason: str, applied: list[str] | None = None) -> None:
        self.name = name
        self.reason = reason
        self.applied = applied or []
        super().__init__(f"Migration {name} failed: {reason}. Applied migrations: {self.applied}")


class MigrationNotFoundError(UblogMigrateError):
    """Raised when a migration name is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f"Migration not found: {name}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)
