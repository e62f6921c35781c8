"""Parse file host titles to extract episode numbers and clean display titles."""
import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Tried in order, first match wins
EPISODE_PATTERNS = [
    re.compile(r'E(\d+)', re.IGNORECASE),           # E01, e01
    re.compile(r'Episode\s*(\d+)', re.IGNORECASE),  # Episode 1, Episode01
    re.compile(r'Ep\s*\.?\s*(\d+)', re.IGNORECASE), # Ep 1, Ep.1, Ep01
    re.compile(r'\[(\d+)\]'),                       # [01]
    re.compile(r'\s(\d+)\s'),                       # " 01 "
    re.compile(r'\s(\d+)$'),                        # trailing " 01"
    re.compile(r'^(\d+)'),                          # leading "01"
    re.compile(r'\D(\d+)$'),                        # trailing "-01"
]

_ANY_NUMBER = re.compile(r'\d+')

_SEASON_SUFFIX = re.compile(r'\s*Season\s*(\d+)', re.IGNORECASE)

# Release artifacts stripped from display titles
_CLEANUP_PATTERNS = [
    r'\.[A-Za-z][A-Za-z0-9]{1,4}$',  # file extension
    r'\d{3,4}p',                     # resolution (first occurrence only, see clean_title)
    r'x265|x264|ESub|PikaHD\.com|\.mkv|\.mp4',
    r'\b(HEVC|AVC|H\.264|H\.265|10bit)\b',
    r'\b(BluRay|BDRip|WEBRip|WEB-DL|HDRip)\b',
    r'\b(AAC|AC3|FLAC|DTS)\b',
    r'S\d+E\d+',
]


def extract_episode_number(raw_title: Optional[str]) -> int:
    """
    Extract the episode number from a raw file title.

    Args:
        raw_title: File title as reported by the file host

    Returns:
        Episode number, or 0 when the title contains no digits at all
    """
    if not raw_title:
        return 0

    for pattern in EPISODE_PATTERNS:
        match = pattern.search(raw_title)
        if match and match.group(1):
            number = int(match.group(1))
            logger.debug(f"🔢 Extracted episode {number} from '{raw_title}' using {pattern.pattern}")
            return number

    match = _ANY_NUMBER.search(raw_title)
    if match:
        number = int(match.group(0))
        logger.debug(f"⚠️ Fallback: first number {number} in '{raw_title}'")
        return number

    logger.debug(f"❌ No episode number in '{raw_title}', defaulting to 0")
    return 0


def clean_title(raw_title: Optional[str]) -> str:
    """
    Clean up a file title by removing release artifacts.

    Args:
        raw_title: Raw file title

    Returns:
        Cleaned title, possibly empty
    """
    if not raw_title:
        return ''

    cleaned = raw_title
    for pattern in _CLEANUP_PATTERNS:
        count = 1 if pattern in (r'\d{3,4}p', r'S\d+E\d+') else 0
        cleaned = re.sub(pattern, '', cleaned, count=count, flags=re.IGNORECASE)

    # Remove multiple spaces and trim
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()

    # Remove leading/trailing separators
    cleaned = re.sub(r'^[-.\s]+|[-.\s]+$', '', cleaned)

    return cleaned


def episode_title(raw_title: Optional[str], number: int) -> str:
    """Cleaned title, or a generated "Episode N" when nothing usable remains."""
    return clean_title(raw_title) or f"Episode {number}"


def split_season(display_name: str) -> Tuple[str, int]:
    """
    Split a display name like "Show Season 2" into base name and season.

    Args:
        display_name: Anime display name

    Returns:
        Tuple of (base name, season number); season defaults to 1
    """
    match = _SEASON_SUFFIX.search(display_name or '')
    season = int(match.group(1)) if match else 1
    base_name = _SEASON_SUFFIX.sub('', display_name or '').strip()
    return base_name, season
