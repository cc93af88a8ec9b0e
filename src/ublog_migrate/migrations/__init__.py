"""
Migration registry for ublog schema changes.

Each migration is a named, one-way routine run against an explicit
repository. There is no rollback path: recovery is re-invocation, which is
safe as long as the migration selects only records it has not yet rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from ..exceptions import MigrationError, MigrationNotFoundError

if TYPE_CHECKING:
    from ..repository_protocol import RepositoryProtocol


class MigrationFunc(Protocol):
    """Protocol for migration functions."""

    def __call__(self, repository: RepositoryProtocol, **options: Any) -> None:
        """Execute the migration."""
        ...


@dataclass
class Migration:
    """Represents a registered migration."""

    name: str  # Registry key (e.g., "ublog-blog")
    description: str  # Human-readable description
    migrate: MigrationFunc


# Registry of all migrations, in registration order
_MIGRATIONS: dict[str, Migration] = {}


def register_migration(migration: Migration) -> None:
    """Register a migration, replacing any previous one with the same name."""
    _MIGRATIONS[migration.name] = migration


def get_migrations() -> list[Migration]:
    """Get all registered migrations."""
    return list(_MIGRATIONS.values())


def get_migration(name: str) -> Migration:
    """
    Look up a migration by name.

    Raises:
        MigrationNotFoundError: If no migration has that name
    """
    try:
        return _MIGRATIONS[name]
    except KeyError:
        raise MigrationNotFoundError(name, sorted(_MIGRATIONS)) from None


def apply_migrations(
    repository: RepositoryProtocol,
    names: list[str],
    **options: Any,
) -> list[str]:
    """
    Apply migrations in the given order.

    Args:
        repository: Repository the migrations run against
        names: Migration names to apply
        **options: Passed through to every migration function

    Returns:
        List of applied migration names

    Raises:
        MigrationNotFoundError: If a name is not registered (nothing is applied)
        MigrationError: If a migration fails; the store error is the ``__cause__``
    """
    migrations = [get_migration(name) for name in names]

    applied: list[str] = []
    for migration in migrations:
        try:
            migration.migrate(repository, **options)
        except Exception as e:
            raise MigrationError(migration.name, str(e), applied) from e
        applied.append(migration.name)

    return applied


def apply_migration(repository: RepositoryProtocol, name: str, **options: Any) -> None:
    """Apply a single migration by name."""
    apply_migrations(repository, [name], **options)


# Import built-in migrations to register them
from . import m_ublog_blog as _m_ublog_blog  # noqa: F401, E402
