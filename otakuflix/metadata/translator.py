"""Best-effort translation of Japanese text to English."""
import logging
import re
from typing import Optional

import requests

from otakuflix.config.settings import settings

logger = logging.getLogger(__name__)

# Hiragana, katakana and CJK ideographs
_JAPANESE_SCRIPT = re.compile(r"[\u3040-\u30ff\u4e00-\u9faf\u3400-\u4dbf]")


def contains_japanese(text: Optional[str]) -> bool:
    """True if the text contains Japanese script."""
    return bool(text) and bool(_JAPANESE_SCRIPT.search(text))


def translate_text(text: str, session: Optional[requests.Session] = None,
                   source_lang: str = 'ja', target_lang: str = 'en') -> str:
    """
    Translate Japanese text, returning the original on any failure.

    Args:
        text: Text to translate
        session: Optional requests session
        source_lang: Source language code
        target_lang: Target language code

    Returns:
        Translated text, or the input unchanged
    """
    if not contains_japanese(text):
        return text

    http = session or requests
    try:
        logger.info(f"🔄 Translating Japanese text: '{text[:30]}...'")
        response = http.get(
            settings.translate_url,
            params={'client': 'gtx', 'sl': source_lang, 'tl': target_lang, 'dt': 't', 'q': text},
            timeout=settings.http_timeout
        )
        if not response.ok:
            logger.error(f"❌ Translation failed: HTTP {response.status_code}")
            return text

        data = response.json()
        translated = data[0][0][0]
        if not isinstance(translated, str) or not translated:
            return text

        logger.info(f"✅ Translated to: '{translated[:30]}...'")
        return translated
    except requests.RequestException as e:
        logger.error(f"❌ Translation request failed: {e}")
        return text
    except (ValueError, IndexError, TypeError, KeyError) as e:
        logger.error(f"❌ Unexpected translation response: {e}")
        return text
