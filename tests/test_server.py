"""Tests for the Flask episode API."""
from unittest.mock import MagicMock

import pytest

from otakuflix.episodes.resolver import EpisodeResolver, InvalidRequestError
from otakuflix.web.server import create_app

EPISODE = {
    "id": "rpm-a",
    "number": 1,
    "title": "Show E01",
    "file_code": "a",
    "provider": "RpmShare",
    "duration": 24,
    "servers": [{"provider": "RpmShare", "file_code": "a"}, {"provider": "Filemoon", "file_code": "b"}],
}


@pytest.fixture
def resolver() -> MagicMock:
    resolver = MagicMock(spec=EpisodeResolver)
    resolver.get_episodes.return_value = [dict(EPISODE, servers=[dict(s) for s in EPISODE["servers"]])]
    return resolver


@pytest.fixture
def client(resolver: MagicMock):
    app = create_app(resolver)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_get_with_query_string(client, resolver: MagicMock) -> None:
    response = client.get("/api/episodes?animeId=233&animeName=Kaguya&providers=RpmShare,Filemoon&providerIds=111,222")

    assert response.status_code == 200
    resolver.get_episodes.assert_called_once_with(
        anime_id="233",
        anime_name="Kaguya",
        provider_ids=["111", "222"],
        providers=["RpmShare", "Filemoon"],
    )
    servers = response.get_json()["episodes"][0]["servers"]
    assert servers[0]["embed_url"] == "https://aniflix.rpmvip.com/#a"
    assert servers[1]["embed_url"] == "https://filemoon.in/e/b"


def test_post_with_json(client, resolver: MagicMock) -> None:
    response = client.post("/api/episodes", json={"animeId": "233", "providers": ["RpmShare"], "providerIds": ["111"]})

    assert response.status_code == 200
    resolver.get_episodes.assert_called_once_with(
        anime_id="233",
        anime_name=None,
        provider_ids=["111"],
        providers=["RpmShare"],
    )


def test_missing_anime_id_is_bad_request(client, resolver: MagicMock) -> None:
    resolver.get_episodes.side_effect = InvalidRequestError("animeId is required")

    response = client.get("/api/episodes")

    assert response.status_code == 400
    assert response.get_json() == {"error": "animeId is required"}


def test_unexpected_error_is_server_error(client, resolver: MagicMock) -> None:
    resolver.get_episodes.side_effect = RuntimeError("boom")

    response = client.get("/api/episodes?animeId=1")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}
