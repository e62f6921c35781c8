"""Tests for merging provider records into canonical episodes."""
from typing import Optional

from otakuflix.episodes.merger import merge_episodes
from otakuflix.providers.models import RawEpisodeRecord


def record(provider: str, number: int, file_code: str, thumbnail: Optional[str] = None,
           synopsis: Optional[str] = None, title: Optional[str] = None) -> RawEpisodeRecord:
    prefix = "rpm" if provider == "RpmShare" else "filemoon"
    return RawEpisodeRecord(
        source_id=f"{prefix}-{file_code}",
        raw_title=title or f"Show E{number:02d}",
        file_code=file_code,
        provider_name=provider,
        episode_number=number,
        thumbnail_url=thumbnail,
        duration_minutes=24,
        synopsis=synopsis,
    )


def test_same_number_from_two_providers_merges_servers() -> None:
    merged = merge_episodes([
        record("RpmShare", 3, "aaa"),
        record("Filemoon", 3, "bbb"),
    ])

    assert len(merged) == 1
    episode = merged[0]
    assert episode.number == 3
    assert [(s.provider, s.file_code) for s in episode.servers] == [("RpmShare", "aaa"), ("Filemoon", "bbb")]
    assert episode.id == "rpm-aaa"
    assert episode.provider == "RpmShare"
    assert episode.file_code == "aaa"


def test_duplicate_server_is_added_once() -> None:
    merged = merge_episodes([
        record("RpmShare", 3, "aaa"),
        record("RpmShare", 3, "aaa"),
    ])

    assert len(merged) == 1
    assert len(merged[0].servers) == 1


def test_same_provider_different_code_is_a_new_server() -> None:
    merged = merge_episodes([
        record("RpmShare", 3, "aaa"),
        record("RpmShare", 3, "zzz"),
    ])

    assert len(merged[0].servers) == 2


def test_thumbnail_first_writer_wins_when_first_has_it() -> None:
    merged = merge_episodes([
        record("RpmShare", 3, "aaa", thumbnail="https://a/3.jpg"),
        record("Filemoon", 3, "bbb"),
    ])

    assert merged[0].thumbnail == "https://a/3.jpg"


def test_thumbnail_is_backfilled_when_first_lacks_it() -> None:
    merged = merge_episodes([
        record("Filemoon", 3, "bbb"),
        record("RpmShare", 3, "aaa", thumbnail="https://a/3.jpg"),
    ])

    assert merged[0].thumbnail == "https://a/3.jpg"
    assert merged[0].id == "filemoon-bbb"


def test_thumbnail_is_never_overwritten() -> None:
    merged = merge_episodes([
        record("Filemoon", 3, "bbb", thumbnail="https://b/3.jpg"),
        record("RpmShare", 3, "aaa", thumbnail="https://a/3.jpg"),
    ])

    assert merged[0].thumbnail == "https://b/3.jpg"


def test_synopsis_is_backfilled_but_not_overwritten() -> None:
    merged = merge_episodes([
        record("RpmShare", 1, "a1"),
        record("Filemoon", 1, "b1", synopsis="first"),
        record("Filemoon", 1, "b2", synopsis="second"),
    ])

    assert merged[0].synopsis == "first"


def test_title_comes_from_first_record() -> None:
    merged = merge_episodes([
        record("RpmShare", 1, "a1", title="From RpmShare"),
        record("Filemoon", 1, "b1", title="From Filemoon"),
    ])

    assert merged[0].title == "From RpmShare"


def test_output_is_sorted_and_numbers_are_distinct() -> None:
    merged = merge_episodes([
        record("RpmShare", 5, "a5"),
        record("RpmShare", 1, "a1"),
        record("Filemoon", 3, "b3"),
        record("Filemoon", 1, "b1"),
    ])

    numbers = [ep.number for ep in merged]
    assert numbers == [1, 3, 5]
    assert all(ep.servers for ep in merged)


def test_empty_input() -> None:
    assert merge_episodes([]) == []


def test_to_dict_omits_unset_fields() -> None:
    episode = merge_episodes([record("RpmShare", 2, "a2")])[0]

    data = episode.to_dict()

    assert data["servers"] == [{"provider": "RpmShare", "file_code": "a2"}]
    assert "thumbnail" not in data
    assert "synopsis" not in data
    assert data["duration"] == 24
