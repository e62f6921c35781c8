"""Metadata module for normalizing file titles and enriching episodes from TheTVDB."""

from otakuflix.metadata.title_parser import clean_title, episode_title, extract_episode_number, split_season
from otakuflix.metadata.tvdb_client import TVDBClient, EpisodeDetails
from otakuflix.metadata.cache import ShowMatchCache, TVDBState
from otakuflix.metadata.translator import translate_text

__all__ = [
    'clean_title', 'episode_title', 'extract_episode_number', 'split_season',
    'TVDBClient', 'EpisodeDetails', 'ShowMatchCache', 'TVDBState', 'translate_text',
]
