"""MongoDB schema definitions and key builders for the ublog collections."""

from typing import Any

# Collection names
POST_COLLECTION = "ublog_post"
BLOG_COLLECTION = "ublog_blog"

# Blog identity prefix
USER_BLOG_PREFIX = "user:"

# Tier assigned to blogs created implicitly by the backfill
DEFAULT_BLOG_TIER = 2

# Post fields (post-migration shape)
FIELD_BLOG = "blog"
FIELD_CREATED = "created"
FIELD_UPDATED = "updated"
FIELD_LIVED = "lived"
FIELD_LIVE = "live"
FIELD_RANK = "rank"

# Legacy post fields
LEGACY_USER = "user"
LEGACY_CREATED_AT = "createdAt"
LEGACY_UPDATED_AT = "updatedAt"
LEGACY_LIVE_AT = "liveAt"
LEGACY_TROLL = "troll"

LEGACY_FIELDS: tuple[str, ...] = (
    LEGACY_USER,
    LEGACY_CREATED_AT,
    LEGACY_UPDATED_AT,
    LEGACY_LIVE_AT,
    LEGACY_TROLL,
)

# MongoDB always keeps this index; drop_indexes() leaves it in place
ID_INDEX_NAME = "_id_"

# Index names
INDEX_LIVE_BY_BLOG = "liveByBlog"
INDEX_DRAFT_BY_BLOG = "draftByBlog"
INDEX_LIVE_BY_RANK = "liveByRank"


def blog_id(user_id: str) -> str:
    """Build the Blog identity for an author."""
    return f"{USER_BLOG_PREFIX}{user_id}"


def stamp_at(field: str) -> str:
    """Build the dotted path to the timestamp of a stamp field."""
    return f"{field}.at"


def unmigrated_filter() -> dict[str, Any]:
    """Selection filter for posts that still need the backfill."""
    return {FIELD_BLOG: {"$exists": False}}


def live_filter(live: bool) -> dict[str, Any]:
    """Partial filter expression scoping an index to live or draft posts."""
    return {FIELD_LIVE: live}
