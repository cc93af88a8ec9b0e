"""
Migration ublog-blog: blog-owned posts.

Moves posts from author ownership to blog ownership:
- Post indexes: all dropped, then liveByBlog, draftByBlog and liveByRank
  created as partial indexes on ``live``
- Legacy posts (no ``blog`` field): owning blog ``user:{user}`` created with
  tier 2 if absent; ``user``/``createdAt``/``updatedAt``/``liveAt`` folded into
  ``blog``/``created``/``updated``/``lived``; ``troll`` dropped

Indexes are provisioned first and must succeed before any post is touched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..backfill import PostBackfillWalker
from ..provisioner import IndexProvisioner
from . import Migration, register_migration

if TYPE_CHECKING:
    from ..repository_protocol import RepositoryProtocol

logger = logging.getLogger(__name__)

NAME = "ublog-blog"


def migrate_ublog_blog(repository: RepositoryProtocol, atomic_blog_create: bool = False) -> None:
    """Provision the post indexes, then backfill legacy posts."""
    indexes = IndexProvisioner(repository).provision()
    result = PostBackfillWalker(repository, atomic_blog_create=atomic_blog_create).run()

    logger.info(
        "Migration %s complete: %d indexes, %d posts migrated, %d blogs created",
        NAME,
        len(indexes),
        result.posts_migrated,
        result.blogs_created,
    )


# Register the migration
register_migration(
    Migration(
        name=NAME,
        description="Partial post indexes and blog ownership backfill for legacy posts",
        migrate=migrate_ublog_blog,
    )
)
