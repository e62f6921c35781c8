"""Shared fixtures: fake HTTP responses and sessions."""
from typing import Any, Callable, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests

from otakuflix.config.settings import settings


def make_response(json_data: Any = None, status_code: int = 200, json_error: Optional[Exception] = None) -> MagicMock:
    """A requests.Response stand-in."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    if response.ok:
        response.raise_for_status.return_value = None
    else:
        response.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    return response


def file_listing(*files: Dict[str, Any]) -> Dict[str, Any]:
    """A successful /api/file/list body."""
    return {
        "msg": "OK",
        "status": 200,
        "result": {"results_total": len(files), "pages": 1, "files": list(files)},
    }


def routing_session(handler: Callable[..., MagicMock]) -> MagicMock:
    """A session whose get/post are answered by handler(method, url, **kwargs)."""
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = lambda url, **kwargs: handler("GET", url, **kwargs)
    session.post.side_effect = lambda url, **kwargs: handler("POST", url, **kwargs)
    return session


@pytest.fixture
def rpmshare_url() -> str:
    return settings.rpmshare_api_url


@pytest.fixture
def filemoon_url() -> str:
    return settings.filemoon_api_url
