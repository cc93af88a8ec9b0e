"""Repository protocol for the ublog migration store.

The migration never reaches for a global database handle. It receives an
object satisfying RepositoryProtocol, so it can run against a live MongoDB
database or an in-memory stand-in.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import Blog, IndexDefinition, PostRewrite


@runtime_checkable
class RepositoryProtocol(Protocol):
    """
    Protocol for the post/blog store used by the migration.

    The protocol is divided into:

    - **Properties**: Store identification
    - **Lifecycle**: Connection management
    - **Post indexes**: Drop, create and inspect indexes on the post collection
    - **Posts**: Stream and rewrite legacy posts
    - **Blogs**: Lookup and creation of owning blogs

    Every method is a single blocking round trip to the store. Store errors
    propagate to the caller unchanged.
    """

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def database_name(self) -> str:
        """Name of the database holding the post and blog collections."""
        ...

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Release the connection if this repository opened it.

        Safe to call multiple times.
        """
        ...

    def ping(self) -> bool:
        """
        Check if the store is reachable.

        Returns:
            True if the store answered, False otherwise.
        """
        ...

    # -------------------------------------------------------------------------
    # Post indexes
    # -------------------------------------------------------------------------

    def drop_post_indexes(self) -> None:
        """Drop every index on the post collection except ``_id_``."""
        ...

    def create_post_index(self, definition: "IndexDefinition") -> str:
        """
        Create one index on the post collection.

        Returns:
            The name of the created index.
        """
        ...

    def post_index_information(self) -> dict[str, dict[str, Any]]:
        """Index information for the post collection, keyed by index name."""
        ...

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def iter_unmigrated_posts(self) -> Iterator[dict[str, Any]]:
        """Stream raw post documents that have no ``blog`` field, in store order."""
        ...

    def count_unmigrated_posts(self) -> int:
        """Count posts that have no ``blog`` field."""
        ...

    def update_post(self, rewrite: "PostRewrite") -> None:
        """Apply a rewrite as one atomic per-document update."""
        ...

    # -------------------------------------------------------------------------
    # Blogs
    # -------------------------------------------------------------------------

    def get_blog(self, blog_id: str) -> "Blog | None":
        """Get a blog by id."""
        ...

    def insert_blog(self, blog: "Blog") -> None:
        """
        Insert a new blog.

        Raises:
            pymongo.errors.DuplicateKeyError: If a blog with this id exists
        """
        ...

    def insert_blog_if_absent(self, blog: "Blog") -> bool:
        """
        Create a blog in one atomic upsert unless one already exists.

        Returns:
            True if the blog was created, False if it already existed.
        """
        ...
