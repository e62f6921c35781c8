"""Tests for the anime catalog lookup."""
from unittest.mock import MagicMock

import requests

from conftest import make_response
from otakuflix.episodes.catalog import AnimeCatalog, CatalogEntry

CATALOG = [
    {"aid": 233, "name": "Kaguya-sama: Love is War", "cname": "Filemoon, RpmShare", "cid": "296721, 3827"},
    {"aid": 234, "name": "The Eminence in Shadow", "cname": "Filemoon", "cid": ""},
]


def _catalog(response=None, error=None) -> AnimeCatalog:
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return AnimeCatalog(url="https://catalog.test/anime.json", session=session, timeout=5)


def test_finds_entry_and_splits_providers() -> None:
    entry = _catalog(make_response(CATALOG)).find("233")

    assert entry.name == "Kaguya-sama: Love is War"
    assert entry.providers == ["Filemoon", "RpmShare"]
    assert entry.provider_ids == ["296721", "3827"]


def test_empty_ids() -> None:
    entry = _catalog(make_response(CATALOG)).find("234")
    assert entry.provider_ids == []


def test_unknown_anime() -> None:
    assert _catalog(make_response(CATALOG)).find("1") is None


def test_unavailable_catalog() -> None:
    assert _catalog(make_response(None, status_code=404)).find("233") is None
    assert _catalog(error=requests.Timeout("slow")).find("233") is None
    assert _catalog(make_response(json_error=ValueError("bad"))).find("233") is None
    assert _catalog(make_response({"aid": 233})).find("233") is None


def test_malformed_entry() -> None:
    assert _catalog(make_response([{"aid": "not-a-number-233"}])).find("not-a-number-233") is None


def test_entry_properties() -> None:
    entry = CatalogEntry(aid=1, cname="RpmShare,Filemoon", cid="1,2")
    assert entry.providers == ["RpmShare", "Filemoon"]
    assert entry.provider_ids == ["1", "2"]
