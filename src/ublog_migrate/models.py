"""Core models for ublog-migrate."""

from dataclasses import dataclass, field
from typing import Any

from . import schema
from .exceptions import LegacyPostError


@dataclass(frozen=True)
class Stamp:
    """
    Actor and timestamp pair recorded on a post.

    Attributes:
        by: User id of the actor
        at: When the action happened (stored as-is from the legacy record)
    """

    by: str
    at: Any

    def to_document(self) -> dict[str, Any]:
        return {"by": self.by, "at": self.at}


@dataclass(frozen=True)
class Blog:
    """
    Owning entity that aggregates an author's posts.

    Attributes:
        id: Blog identity, e.g. ``"user:thibault"``
        tier: Coarse-grained classification
    """

    id: str
    tier: int = schema.DEFAULT_BLOG_TIER

    @classmethod
    def for_user(cls, user_id: str) -> "Blog":
        """Create the implicit blog of an author."""
        return cls(id=schema.blog_id(user_id))

    def to_document(self) -> dict[str, Any]:
        return {"_id": self.id, "tier": self.tier}


@dataclass(frozen=True)
class LegacyPost:
    """
    A post still in the flat legacy shape.

    Only the fields the rewrite reads are kept; everything else on the
    document is left untouched by the update.
    """

    id: Any
    user: str
    created_at: Any
    updated_at: Any = None
    live_at: Any = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "LegacyPost":
        """
        Parse a raw post document.

        Raises:
            LegacyPostError: If ``_id``, ``user`` or ``createdAt`` is missing
        """
        post_id = doc.get("_id")
        if post_id is None:
            raise LegacyPostError(post_id, "document has no _id")
        for name in (schema.LEGACY_USER, schema.LEGACY_CREATED_AT):
            if doc.get(name) is None:
                raise LegacyPostError(post_id, f"missing legacy field '{name}'")
        return cls(
            id=post_id,
            user=doc[schema.LEGACY_USER],
            created_at=doc[schema.LEGACY_CREATED_AT],
            updated_at=doc.get(schema.LEGACY_UPDATED_AT),
            live_at=doc.get(schema.LEGACY_LIVE_AT),
        )


@dataclass(frozen=True)
class PostRewrite:
    """
    The single atomic update that moves one post to the new shape.

    ``updated`` and ``lived`` are either a full Stamp or None. None means the
    key is left out of the write entirely, never written as null.
    """

    post_id: Any
    blog_id: str
    created: Stamp
    updated: Stamp | None = None
    lived: Stamp | None = None

    def set_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            schema.FIELD_BLOG: self.blog_id,
            schema.FIELD_CREATED: self.created.to_document(),
        }
        if self.updated is not None:
            fields[schema.FIELD_UPDATED] = self.updated.to_document()
        if self.lived is not None:
            fields[schema.FIELD_LIVED] = self.lived.to_document()
        return fields

    def unset_fields(self) -> tuple[str, ...]:
        return schema.LEGACY_FIELDS

    def to_update(self) -> dict[str, Any]:
        """Build the ``$set``/``$unset`` update document."""
        to_set = self.set_fields()
        to_unset = self.unset_fields()
        overlap = set(to_set) & set(to_unset)
        if overlap:
            raise ValueError(f"fields both set and unset: {sorted(overlap)}")
        return {
            "$set": to_set,
            "$unset": {name: "" for name in to_unset},
        }


@dataclass(frozen=True)
class IndexDefinition:
    """
    A named partial index.

    Attributes:
        name: Index name
        keys: Ordered (field, direction) pairs
        partial_filter: partialFilterExpression scoping the index
    """

    name: str
    keys: tuple[tuple[str, int], ...]
    partial_filter: dict[str, Any] = field(default_factory=dict, hash=False)

    def create_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``Collection.create_index``."""
        return {
            "name": self.name,
            "partialFilterExpression": self.partial_filter,
        }


@dataclass
class BackfillResult:
    """Counters for a completed backfill walk."""

    posts_migrated: int = 0
    blogs_created: int = 0
    blogs_reused: int = 0


@dataclass
class IndexReport:
    """Differences between the expected and the actual post indexes."""

    missing: list[str] = field(default_factory=list)
    unexpected: list[str] = field(default_factory=list)
    mismatched: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.missing or self.unexpected or self.mismatched)
