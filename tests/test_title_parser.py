"""Tests for episode number extraction and title cleanup."""
import pytest

from otakuflix.metadata.title_parser import clean_title, episode_title, extract_episode_number, split_season


class TestExtractEpisodeNumber:
    """Ordered pattern matching."""

    @pytest.mark.parametrize("raw_title", [
        "Show Name E07 1080p",
        "Show Name Episode 7",
        "Show Name Ep.7",
        "Show Name [07]",
    ])
    def test_common_markers(self, raw_title: str) -> None:
        assert extract_episode_number(raw_title) == 7

    def test_season_episode_notation_uses_episode(self) -> None:
        assert extract_episode_number("Show Name S01E05 1080p x265 ESub.mkv") == 5

    def test_standalone_number(self) -> None:
        assert extract_episode_number("Show - 01 x264.mp4") == 1

    def test_trailing_number(self) -> None:
        assert extract_episode_number("Kaguya sama 12") == 12

    def test_leading_number(self) -> None:
        assert extract_episode_number("03_kaguya") == 3

    def test_trailing_number_after_separator(self) -> None:
        assert extract_episode_number("kaguya_sama-11") == 11

    def test_first_number_fallback(self) -> None:
        assert extract_episode_number("kaguya2sama") == 2

    def test_no_digits_is_zero(self) -> None:
        assert extract_episode_number("Opening Theme") == 0

    def test_empty_is_zero(self) -> None:
        assert extract_episode_number("") == 0
        assert extract_episode_number(None) == 0

    def test_e_marker_wins_over_brackets(self) -> None:
        assert extract_episode_number("[2023] Show E04") == 4


class TestCleanTitle:
    """Release artifact stripping."""

    def test_strips_release_tokens(self) -> None:
        cleaned = clean_title("Show Name S01E05 1080p x265 ESub.mkv")
        assert cleaned == "Show Name"
        for token in ("S01E05", "1080p", "x265", "ESub", ".mkv"):
            assert token not in cleaned

    def test_strips_extension_and_encoder(self) -> None:
        assert clean_title("Show - 01 x264.mp4") == "Show - 01"

    def test_strips_site_tag(self) -> None:
        assert clean_title("Show E02 720p PikaHD.com.mkv") == "Show E02"

    def test_collapses_whitespace(self) -> None:
        assert clean_title("  Show    Name   E03  ") == "Show Name E03"

    def test_keeps_episode_decimal_marker(self) -> None:
        assert clean_title("Show Ep.7") == "Show Ep.7"

    def test_nothing_left(self) -> None:
        assert clean_title("1080p x265.mkv") == ""

    def test_episode_title_substitutes_generated_name(self) -> None:
        assert episode_title("1080p x265.mkv", 4) == "Episode 4"
        assert episode_title("Show E04.mkv", 4) == "Show E04"


class TestSplitSeason:
    """Season suffix handling for TheTVDB searches."""

    def test_season_suffix(self) -> None:
        assert split_season("Kaguya-sama: Love is War Season 2") == ("Kaguya-sama: Love is War", 2)

    def test_default_season(self) -> None:
        assert split_season("The Eminence in Shadow") == ("The Eminence in Shadow", 1)

    def test_case_insensitive(self) -> None:
        assert split_season("Show season3") == ("Show", 3)
