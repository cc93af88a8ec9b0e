"""
ublog-migrate: one-time migration of ublog posts to blog ownership.

This package provides:
- Partial index provisioning for the post collection
- A resumable backfill that creates each author's blog and rewrites legacy
  posts into the blog-owned shape
- A named migration registry and the ``ublog-migrate`` CLI

Example:
    from pymongo import MongoClient
    from ublog_migrate import Repository, apply_migration

    client = MongoClient("mongodb://localhost:27017")
    repository = Repository(client["lichess"])
    apply_migration(repository, "ublog-blog")
"""

from .backfill import PostBackfillWalker, rewrite_post
from .exceptions import (
    LegacyPostError,
    MigrationError,
    MigrationNotFoundError,
    UblogMigrateError,
    ValidationError,
)
from .migrations import (
    Migration,
    apply_migration,
    apply_migrations,
    get_migration,
    get_migrations,
    register_migration,
)
from .models import (
    BackfillResult,
    Blog,
    IndexDefinition,
    IndexReport,
    LegacyPost,
    PostRewrite,
    Stamp,
)
from .provisioner import POST_INDEXES, IndexProvisioner, compare_indexes
from .repository import Repository
from .repository_protocol import RepositoryProtocol

__all__ = [
    # Components
    "IndexProvisioner",
    "PostBackfillWalker",
    "compare_indexes",
    "rewrite_post",
    "POST_INDEXES",
    # Store
    "Repository",
    "RepositoryProtocol",
    # Models
    "BackfillResult",
    "Blog",
    "IndexDefinition",
    "IndexReport",
    "LegacyPost",
    "PostRewrite",
    "Stamp",
    # Migrations
    "Migration",
    "apply_migration",
    "apply_migrations",
    "get_migration",
    "get_migrations",
    "register_migration",
    # Exceptions
    "UblogMigrateError",
    "LegacyPostError",
    "MigrationError",
    "MigrationNotFoundError",
    "ValidationError",
]
