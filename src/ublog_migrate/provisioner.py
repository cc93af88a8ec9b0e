"""Partial index provisioning for the post collection.

Resets every index on the post collection and creates the three partial
indexes serving the live and draft access patterns. Failures are fatal and
propagate unchanged; there is no retry and no cleanup of indexes created
before the failure.

Not safe to run concurrently with itself or while readers depend on the
previous index names.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, DESCENDING

from . import schema
from .models import IndexDefinition, IndexReport

if TYPE_CHECKING:
    from .repository_protocol import RepositoryProtocol

logger = logging.getLogger(__name__)


POST_INDEXES: tuple[IndexDefinition, ...] = (
    IndexDefinition(
        name=schema.INDEX_LIVE_BY_BLOG,
        keys=(
            (schema.FIELD_BLOG, ASCENDING),
            (schema.stamp_at(schema.FIELD_LIVED), DESCENDING),
        ),
        partial_filter=schema.live_filter(True),
    ),
    IndexDefinition(
        name=schema.INDEX_DRAFT_BY_BLOG,
        keys=(
            (schema.FIELD_BLOG, ASCENDING),
            (schema.stamp_at(schema.FIELD_CREATED), DESCENDING),
        ),
        partial_filter=schema.live_filter(False),
    ),
    IndexDefinition(
        name=schema.INDEX_LIVE_BY_RANK,
        keys=((schema.FIELD_RANK, DESCENDING),),
        partial_filter=schema.live_filter(True),
    ),
)
"""Partial indexes on the post collection, in creation order."""


class IndexProvisioner:
    """Drops and recreates the post collection indexes."""

    def __init__(
        self,
        repository: RepositoryProtocol,
        indexes: tuple[IndexDefinition, ...] = POST_INDEXES,
    ) -> None:
        self.repository = repository
        self.indexes = indexes

    def provision(self) -> list[str]:
        """
        Drop all post indexes, then create the configured partial indexes.

        Returns:
            Names of the created indexes, in creation order.
        """
        logger.info("Dropping all indexes on %s", schema.POST_COLLECTION)
        self.repository.drop_post_indexes()

        created: list[str] = []
        for definition in self.indexes:
            name = self.repository.create_post_index(definition)
            logger.info(
                "Created index %s on %s with filter %s",
                name,
                _format_keys(definition.keys),
                definition.partial_filter,
            )
            created.append(name)
        return created

    def verify(self) -> IndexReport:
        """Compare the live post indexes against the configured set."""
        return compare_indexes(self.indexes, self.repository.post_index_information())


def compare_indexes(
    expected: tuple[IndexDefinition, ...],
    index_information: dict[str, dict[str, Any]],
) -> IndexReport:
    """Compare expected index definitions with ``Collection.index_information()``.

    The mandatory ``_id_`` index is ignored.

    Args:
        expected: Index definitions that should exist.
        index_information: Index name to index info, as returned by pymongo.

    Returns:
        IndexReport listing missing, unexpected and mismatched index names.
    """
    report = IndexReport()
    wanted = {definition.name: definition for definition in expected}

    for name, definition in wanted.items():
        info = index_information.get(name)
        if info is None:
            report.missing.append(name)
            continue
        keys = tuple((field, int(direction)) for field, direction in info.get("key", []))
        partial = dict(info.get("partialFilterExpression") or {})
        if keys != definition.keys or partial != definition.partial_filter:
            report.mismatched.append(name)

    for name in sorted(index_information):
        if name != schema.ID_INDEX_NAME and name not in wanted:
            report.unexpected.append(name)

    return report


def _format_keys(keys: tuple[tuple[str, int], ...]) -> str:
    return "(" + ", ".join(f"{field} {'asc' if d == ASCENDING else 'desc'}" for field, d in keys) + ")"
