"""Integration tests for the ublog-blog migration on a real MongoDB server.

Run with ``UBLOG_MONGO_URI=mongodb://localhost:27017 pytest tests/integration``.
"""

from datetime import datetime

import pytest

from tests.fixtures.posts import legacy_post
from ublog_migrate import IndexProvisioner, PostBackfillWalker, Repository, apply_migration
from ublog_migrate.schema import BLOG_COLLECTION, POST_COLLECTION

pytestmark = pytest.mark.integration


class TestIndexProvisioning:
    """Partial indexes as reported by the server."""

    def test_exact_index_set(self, repository: Repository, mongo_database) -> None:
        """Old indexes are replaced by exactly the three partial indexes."""
        posts = mongo_database[POST_COLLECTION]
        posts.insert_one(legacy_post(1))
        posts.create_index([("user", 1), ("createdAt", -1)], name="user_created")

        provisioner = IndexProvisioner(repository)
        provisioner.provision()

        info = posts.index_information()
        assert set(info) == {"_id_", "liveByBlog", "draftByBlog", "liveByRank"}
        assert info["liveByRank"]["partialFilterExpression"] == {"live": True}
        assert info["draftByBlog"]["partialFilterExpression"] == {"live": False}
        assert provisioner.verify().ok

    def test_live_query_uses_partial_index(self, repository: Repository, mongo_database) -> None:
        """Ranking live posts is served by liveByRank."""
        IndexProvisioner(repository).provision()

        plan = (
            mongo_database[POST_COLLECTION]
            .find({"live": True})
            .sort("rank", -1)
            .explain()["queryPlanner"]["winningPlan"]
        )
        assert "liveByRank" in str(plan)


class TestMigration:
    """Full migration runs."""

    def test_full_run_and_resume(self, repository: Repository, mongo_database) -> None:
        """Every legacy post is migrated and a second run is a no-op."""
        created = datetime(2021, 9, 1, 10, 0)
        edited = datetime(2021, 9, 2, 10, 0)
        posts = mongo_database[POST_COLLECTION]
        posts.insert_many(
            [
                legacy_post(1, user="u1", created_at=created, updated_at=created, live_at=edited),
                legacy_post(2, user="u1", created_at=created, updated_at=edited, live_at=None),
                legacy_post(3, user="u2", created_at=created, updated_at=created),
            ]
        )

        apply_migration(repository, "ublog-blog")

        first = posts.find_one({"_id": 1})
        assert first["blog"] == "user:u1"
        assert first["lived"] == {"by": "u1", "at": edited}
        assert "updated" not in first

        second = posts.find_one({"_id": 2})
        assert second["updated"] == {"by": "u1", "at": edited}
        assert "lived" not in second

        blogs = list(mongo_database[BLOG_COLLECTION].find().sort("_id", 1))
        assert blogs == [{"_id": "user:u1", "tier": 2}, {"_id": "user:u2", "tier": 2}]

        assert PostBackfillWalker(repository).run().posts_migrated == 0
