"""
Backfill of legacy posts into the blog-owned shape.

Streams every post without a ``blog`` field and, one document at a time:

1. Derives the owning blog id from the legacy ``user`` field
2. Looks up the blog and inserts it (tier 2) if it does not exist yet
3. Rewrites the post in a single atomic update: sets ``blog``, ``created``
   and, when applicable, ``updated`` and ``lived``; unsets the legacy fields

The selection filter doubles as the resume marker: a migrated post no longer
matches, so re-running after a failure picks up at the first unmigrated post.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from . import schema
from .models import BackfillResult, Blog, LegacyPost, PostRewrite, Stamp

if TYPE_CHECKING:
    from .repository_protocol import RepositoryProtocol

logger = logging.getLogger(__name__)


def rewrite_post(post: LegacyPost) -> PostRewrite:
    """
    Build the rewrite for one legacy post.

    ``updated`` is recorded only when the legacy update time exists and
    differs from the creation time. ``lived`` is recorded only when the
    legacy live time is truthy.
    """
    updated: Stamp | None = None
    if post.updated_at is not None and post.updated_at != post.created_at:
        updated = Stamp(by=post.user, at=post.updated_at)

    lived: Stamp | None = None
    if post.live_at:
        lived = Stamp(by=post.user, at=post.live_at)

    return PostRewrite(
        post_id=post.id,
        blog_id=schema.blog_id(post.user),
        created=Stamp(by=post.user, at=post.created_at),
        updated=updated,
        lived=lived,
    )


class PostBackfillWalker:
    """
    Walks unmigrated posts and rewrites them, creating blogs on demand.

    By default the blog is created with a plain read-then-insert, which
    assumes a single writer. Two concurrent walkers meeting a new author at
    the same time will fail one of them with a duplicate key error.
    ``atomic_blog_create=True`` switches to a single upsert instead.
    """

    def __init__(
        self,
        repository: RepositoryProtocol,
        atomic_blog_create: bool = False,
    ) -> None:
        self.repository = repository
        self.atomic_blog_create = atomic_blog_create

    def count_pending(self) -> int:
        """Number of posts still matching the selection filter."""
        return self.repository.count_unmigrated_posts()

    def run(self) -> BackfillResult:
        """
        Migrate every unmigrated post.

        The first failure is logged and re-raised, halting the walk.

        Returns:
            Counters for the completed walk
        """
        result = BackfillResult()

        for doc in self.repository.iter_unmigrated_posts():
            post_id = doc.get("_id")
            try:
                created = self._migrate(LegacyPost.from_document(doc))
            except Exception:
                logger.error(
                    "Backfill halted at post %s after migrating %d posts",
                    post_id,
                    result.posts_migrated,
                    exc_info=True,
                )
                raise

            result.posts_migrated += 1
            if created:
                result.blogs_created += 1
            else:
                result.blogs_reused += 1

        logger.info(
            "Backfill complete: migrated %d posts, created %d blogs",
            result.posts_migrated,
            result.blogs_created,
        )
        return result

    def _migrate(self, post: LegacyPost) -> bool:
        """Migrate one post. Returns True if its blog had to be created."""
        rewrite = rewrite_post(post)
        created = self._ensure_blog(Blog(id=rewrite.blog_id))
        self.repository.update_post(rewrite)
        logger.debug("Migrated post %s into %s", post.id, rewrite.blog_id)
        return created

    def _ensure_blog(self, blog: Blog) -> bool:
        if self.atomic_blog_create:
            created = self.repository.insert_blog_if_absent(blog)
        elif self.repository.get_blog(blog.id) is None:
            self.repository.insert_blog(blog)
            created = True
        else:
            created = False

        if created:
            logger.info("Created blog %s with tier %d", blog.id, blog.tier)
        return created
