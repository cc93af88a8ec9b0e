"""Tests for schema constants and key builders."""

from ublog_migrate import schema


class TestKeyBuilders:
    """Tests for key builders."""

    def test_blog_id(self) -> None:
        """Blog ids are the user id prefixed with 'user:'."""
        assert schema.blog_id("u1") == "user:u1"

    def test_stamp_at(self) -> None:
        """Stamp timestamps are addressed with a dotted path."""
        assert schema.stamp_at("created") == "created.at"
        assert schema.stamp_at("lived") == "lived.at"

    def test_unmigrated_filter(self) -> None:
        """Posts needing migration are those without a blog field."""
        assert schema.unmigrated_filter() == {"blog": {"$exists": False}}

    def test_live_filter(self) -> None:
        """Partial filters match on the live flag."""
        assert schema.live_filter(True) == {"live": True}
        assert schema.live_filter(False) == {"live": False}


class TestConstants:
    """Tests for fixed names."""

    def test_collection_names(self) -> None:
        """Collections are addressed by fixed logical names."""
        assert schema.POST_COLLECTION == "ublog_post"
        assert schema.BLOG_COLLECTION == "ublog_blog"

    def test_legacy_fields(self) -> None:
        """All five legacy fields are removed by the rewrite."""
        assert set(schema.LEGACY_FIELDS) == {"user", "createdAt", "updatedAt", "liveAt", "troll"}

    def test_default_tier(self) -> None:
        """Implicitly created blogs get tier 2."""
        assert schema.DEFAULT_BLOG_TIER == 2
