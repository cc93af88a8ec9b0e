"""MongoDB repository for ublog post and blog records."""

import logging
from collections.abc import Iterator
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from . import schema
from .models import Blog, IndexDefinition, PostRewrite

logger = logging.getLogger(__name__)


class Repository:
    """
    Synchronous MongoDB repository for the migration.

    Wraps an already-established database handle. Every call is a single
    blocking round trip; nothing is batched or retried here.

    Use ``Repository(database)`` to wrap a handle owned by the caller, or
    ``Repository.open(uri, name)`` to have the repository own the client
    and close it on ``close()``.
    """

    def __init__(
        self,
        database: Database,
        post_collection: str = schema.POST_COLLECTION,
        blog_collection: str = schema.BLOG_COLLECTION,
    ) -> None:
        self._database = database
        self._posts = database[post_collection]
        self._blogs = database[blog_collection]
        self._client: MongoClient | None = None

    @classmethod
    def open(cls, uri: str, database_name: str, **client_kwargs: Any) -> "Repository":
        """Connect to ``uri`` and wrap the named database."""
        client: MongoClient = MongoClient(uri, **client_kwargs)
        repository = cls(client[database_name])
        repository._client = client
        return repository

    @property
    def database_name(self) -> str:
        return str(self._database.name)

    def close(self) -> None:
        """Close the client if this repository opened it."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def ping(self) -> bool:
        try:
            self._database.command("ping")
        except PyMongoError:
            logger.debug("Ping to database %s failed", self.database_name, exc_info=True)
            return False
        return True

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Post indexes
    # -------------------------------------------------------------------------

    def drop_post_indexes(self) -> None:
        self._posts.drop_indexes()

    def create_post_index(self, definition: IndexDefinition) -> str:
        return str(self._posts.create_index(list(definition.keys), **definition.create_kwargs()))

    def post_index_information(self) -> dict[str, dict[str, Any]]:
        return dict(self._posts.index_information())

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def iter_unmigrated_posts(self) -> Iterator[dict[str, Any]]:
        yield from self._posts.find(schema.unmigrated_filter())

    def count_unmigrated_posts(self) -> int:
        return int(self._posts.count_documents(schema.unmigrated_filter()))

    def update_post(self, rewrite: PostRewrite) -> None:
        self._posts.update_one({"_id": rewrite.post_id}, rewrite.to_update())

    # -------------------------------------------------------------------------
    # Blogs
    # -------------------------------------------------------------------------

    def get_blog(self, blog_id: str) -> Blog | None:
        doc = self._blogs.find_one({"_id": blog_id})
        if doc is None:
            return None
        return Blog(id=doc["_id"], tier=doc.get("tier", schema.DEFAULT_BLOG_TIER))

    def insert_blog(self, blog: Blog) -> None:
        self._blogs.insert_one(blog.to_document())

    def insert_blog_if_absent(self, blog: Blog) -> bool:
        result = self._blogs.update_one(
            {"_id": blog.id},
            {"$setOnInsert": {"tier": blog.tier}},
            upsert=True,
        )
        return result.upserted_id is not None
