"""Command-line interface for ublog-migrate."""

import logging
import sys
from collections.abc import Callable
from typing import Any, TypeVar

import click

from . import schema
from .backfill import PostBackfillWalker
from .config import DATABASE_ENV_VAR, URI_ENV_VAR, MongoSettings
from .migrations import apply_migration, get_migrations
from .migrations.m_ublog_blog import NAME as DEFAULT_MIGRATION
from .provisioner import IndexProvisioner
from .repository import Repository

_connection_options = [
    click.option(
        "--uri",
        help=f"MongoDB connection string (default: ${URI_ENV_VAR} or localhost)",
    ),
    click.option(
        "--database",
        "-d",
        help=f"Database holding the ublog collections (default: ${DATABASE_ENV_VAR} or lichess)",
    ),
]


F = TypeVar("F", bound=Callable[..., Any])


def connection_options(func: F) -> F:
    """Add --uri and --database to a command."""
    for option in reversed(_connection_options):
        func = option(func)
    return func


def _open_repository(uri: str | None, database: str | None) -> Repository:
    """Resolve settings and connect."""
    settings = MongoSettings.resolve(uri, database)
    return Repository.open(settings.uri, settings.database)


@click.group()
@click.version_option(package_name="ublog-migrate")
@click.option("--verbose", "-v", is_flag=True, help="Log every migrated post")
def cli(verbose: bool) -> None:
    """ublog post and blog migration CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@cli.command("list")
def list_migrations() -> None:
    """List registered migrations."""
    for migration in get_migrations():
        click.echo(f"{migration.name}: {migration.description}")


@cli.command()
@click.argument("name", default=DEFAULT_MIGRATION)
@connection_options
@click.option(
    "--atomic-blog-create",
    is_flag=True,
    help="Create blogs with a single upsert instead of read-then-insert",
)
def run(name: str, uri: str | None, database: str | None, atomic_blog_create: bool) -> None:
    """Run a registered migration (default: ublog-blog)."""
    try:
        with _open_repository(uri, database) as repository:
            click.echo(f"Running migration {name} on {repository.database_name}")
            apply_migration(repository, name, atomic_blog_create=atomic_blog_create)
    except Exception as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Migration {name} complete")


@cli.command("provision-indexes")
@connection_options
def provision_indexes(uri: str | None, database: str | None) -> None:
    """Drop all post indexes and create the partial indexes."""
    try:
        with _open_repository(uri, database) as repository:
            created = IndexProvisioner(repository).provision()
    except Exception as e:
        click.echo(f"✗ Index provisioning failed: {e}", err=True)
        sys.exit(1)

    for name in created:
        click.echo(f"  + {name}")
    click.echo(f"✓ Created {len(created)} indexes on {schema.POST_COLLECTION}")


@cli.command()
@connection_options
@click.option(
    "--atomic-blog-create",
    is_flag=True,
    help="Create blogs with a single upsert instead of read-then-insert",
)
def backfill(uri: str | None, database: str | None, atomic_blog_create: bool) -> None:
    """Rewrite legacy posts and create their blogs."""
    try:
        with _open_repository(uri, database) as repository:
            walker = PostBackfillWalker(repository, atomic_blog_create=atomic_blog_create)
            result = walker.run()
    except Exception as e:
        click.echo(f"✗ Backfill failed: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"✓ Migrated {result.posts_migrated} posts "
        f"({result.blogs_created} blogs created, {result.blogs_reused} reused)"
    )


@cli.command()
@connection_options
def status(uri: str | None, database: str | None) -> None:
    """Show pending posts and index drift."""
    try:
        with _open_repository(uri, database) as repository:
            pending = PostBackfillWalker(repository).count_pending()
            report = IndexProvisioner(repository).verify()
    except Exception as e:
        click.echo(f"✗ Failed to get status: {e}", err=True)
        sys.exit(1)

    click.echo(f"Pending posts: {pending}")
    if report.ok:
        click.echo(f"Indexes:       ✓ up-to-date on {schema.POST_COLLECTION}")
        return

    click.echo("Indexes:       ✗ drift detected")
    for name in report.missing:
        click.echo(f"  missing:    {name}")
    for name in report.mismatched:
        click.echo(f"  mismatched: {name}")
    for name in report.unexpected:
        click.echo(f"  unexpected: {name}")
    sys.exit(1)


if __name__ == "__main__":
    cli()
