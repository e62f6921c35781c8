"""Tests for the show match cache, TVDB state and the fallback table."""
from otakuflix.episodes.fallback import FallbackTable
from otakuflix.metadata.cache import ShowMatchCache, TVDBState


def test_show_cache_keys_by_name_and_season() -> None:
    cache = ShowMatchCache()
    cache.set("Show", 1, "100")
    cache.set("Show", 2, "200")

    assert ShowMatchCache.make_key("Show", 2) == "Show-2"
    assert cache.get("Show", 1) == "100"
    assert cache.get("Show", 2) == "200"
    assert cache.get("Show", 3) is None
    assert cache.size() == 2

    cache.clear()
    assert cache.size() == 0


def test_invalidate_only_drops_matching_token() -> None:
    state = TVDBState()
    state.set_token("new")

    state.invalidate_token("old")
    assert state.token == "new"

    state.invalidate_token("new")
    assert state.token is None


def test_fallback_table_membership() -> None:
    table = FallbackTable()
    assert "233" in table
    assert "999" not in table
    assert table.get("999") == []


def test_fallback_table_custom_entries() -> None:
    table = FallbackTable(entries={})
    assert table.get("233") == []
