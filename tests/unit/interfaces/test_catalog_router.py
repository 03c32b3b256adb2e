"""Tests for the catalog router endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from showflix.domain.entities import (
    BackendUnavailable,
    EpisodeOutOfRange,
    HomeRow,
    MediaKind,
    MediaToken,
    NotFound,
    RawMovieRecord,
    RawSeriesRecord,
    ResolvedStream,
    UnknownCategory,
)
from showflix.infrastructure.catalog import to_detail, to_summary, token_codec
from showflix.interfaces.api.catalog.router import router


def _make_app(
    *,
    environment: str = "dev",
    browse_uc: MagicMock | None = None,
    detail_uc: AsyncMock | None = None,
    stream_uc: AsyncMock | None = None,
) -> FastAPI:
    """Minimal FastAPI app with the catalog router and mocked use cases."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")

    app.state.config = MagicMock(environment=environment)
    app.state.browse_uc = browse_uc or MagicMock()
    app.state.detail_uc = detail_uc or AsyncMock()
    app.state.stream_uc = stream_uc or AsyncMock()
    return app


def _movie() -> RawMovieRecord:
    return RawMovieRecord(
        id="mv001",
        title="Vikram",
        poster_url="https://img.example.com/vikram.jpg",
        category="Tamil",
        stream_url="https://cdn.example.com/vikram.m3u8",
        rating_text="8.4",
    )


def _series() -> RawSeriesRecord:
    return RawSeriesRecord(
        id="sr001",
        title="Suzhal",
        category="Tamil",
        seasons=(("Season 1", ("urlA", "")),),
    )


# ---------------------------------------------------------------------------
# Catalog listings
# ---------------------------------------------------------------------------


class TestCategoryEndpoints:
    def test_categories_list(self) -> None:
        browse = MagicMock()
        browse.category_labels.return_value = ["Tamil", "Hindi"]
        client = TestClient(_make_app(browse_uc=browse))

        resp = client.get("/api/v1/catalog/categories.json")

        assert resp.status_code == 200
        assert resp.json() == {"categories": ["Tamil", "Hindi"]}

    def test_category_listing(self) -> None:
        browse = MagicMock()
        browse.list_category_summaries = AsyncMock(
            return_value=[to_summary(_movie()), to_summary(_series())]
        )
        client = TestClient(_make_app(browse_uc=browse))

        resp = client.get("/api/v1/catalog/Tamil.json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Tamil"
        assert [(i["id"], i["type"], i["quality"]) for i in body["items"]] == [
            ("mv001", "movie", "HD"),
            ("sr001", "series", "HD"),
        ]
        assert token_codec.decode(body["items"][0]["token"]) == MediaToken(
            id="mv001", kind=MediaKind.MOVIE
        )
        browse.list_category_summaries.assert_awaited_once_with("Tamil")

    def test_unknown_category_is_404(self) -> None:
        browse = MagicMock()
        browse.list_category_summaries = AsyncMock(
            side_effect=UnknownCategory("Unknown category 'Klingon'")
        )
        client = TestClient(_make_app(browse_uc=browse))

        resp = client.get("/api/v1/catalog/Klingon.json")

        assert resp.status_code == 404
        assert resp.json()["error"] == "UnknownCategory"

    def test_home_rows(self) -> None:
        browse = MagicMock()
        browse.home_rows = AsyncMock(
            return_value=[
                HomeRow(name="Tamil", items=[to_summary(_movie())]),
                HomeRow(name="Hindi", items=[]),
            ]
        )
        client = TestClient(_make_app(browse_uc=browse))

        resp = client.get("/api/v1/catalog/home.json")

        assert resp.status_code == 200
        rows = resp.json()["rows"]
        assert [r["name"] for r in rows] == ["Tamil", "Hindi"]
        assert rows[0]["items"][0]["title"] == "Vikram"
        assert rows[1]["items"] == []

    def test_backend_failure_is_502(self) -> None:
        browse = MagicMock()
        browse.home_rows = AsyncMock(side_effect=BackendUnavailable("timeout"))
        client = TestClient(_make_app(browse_uc=browse))

        resp = client.get("/api/v1/catalog/home.json")

        assert resp.status_code == 502
        assert resp.json() == {"error": "BackendUnavailable", "detail": "timeout"}


# ---------------------------------------------------------------------------
# Detail
# ---------------------------------------------------------------------------


class TestMetaEndpoint:
    def test_movie_detail(self) -> None:
        detail_uc = AsyncMock()
        detail_uc.execute.return_value = to_detail(_movie())
        client = TestClient(_make_app(detail_uc=detail_uc))
        token = token_codec.encode(MediaToken(id="mv001", kind=MediaKind.MOVIE))

        resp = client.get(f"/api/v1/meta/{token}.json")

        assert resp.status_code == 200
        meta = resp.json()["meta"]
        assert meta["title"] == "Vikram"
        assert meta["rating"] == 8400
        assert meta["tags"] == ["Tamil"]
        assert meta["episodes"] == []
        detail_uc.execute.assert_awaited_once_with(
            MediaToken(id="mv001", kind=MediaKind.MOVIE)
        )

    def test_series_detail_episodes(self) -> None:
        detail_uc = AsyncMock()
        detail_uc.execute.return_value = to_detail(_series())
        client = TestClient(_make_app(detail_uc=detail_uc))
        token = token_codec.encode(MediaToken(id="sr001", kind=MediaKind.SERIES))

        resp = client.get(f"/api/v1/meta/{token}.json")

        episodes = resp.json()["meta"]["episodes"]
        assert [
            (e["season"], e["seasonLabel"], e["episode"], e["name"], e["available"])
            for e in episodes
        ] == [
            (1, "Season 1", 1, "Episode 1", True),
            (1, "Season 1", 2, "Episode 2", False),
        ]
        assert token_codec.decode(episodes[1]["token"]) == MediaToken(
            id="sr001",
            kind=MediaKind.SERIES,
            season_label="Season 1",
            episode_index=1,
        )

    def test_malformed_token_is_400(self) -> None:
        detail_uc = AsyncMock()
        client = TestClient(_make_app(detail_uc=detail_uc))

        resp = client.get("/api/v1/meta/%21%21not-a-token.json")

        assert resp.status_code == 400
        assert resp.json()["error"] == "MalformedToken"
        detail_uc.execute.assert_not_awaited()

    def test_unsupported_kind_is_400(self) -> None:
        client = TestClient(_make_app())
        # {"id":"x","type":"anime"}
        token = "eyJpZCI6IngiLCJ0eXBlIjoiYW5pbWUifQ"

        resp = client.get(f"/api/v1/meta/{token}.json")

        assert resp.status_code == 400
        assert resp.json()["error"] == "UnsupportedKind"

    def test_not_found_is_404(self) -> None:
        detail_uc = AsyncMock()
        detail_uc.execute.side_effect = NotFound("No movie with id 'gone'")
        client = TestClient(_make_app(detail_uc=detail_uc))
        token = token_codec.encode(MediaToken(id="gone", kind=MediaKind.MOVIE))

        resp = client.get(f"/api/v1/meta/{token}.json")

        assert resp.status_code == 404
        assert resp.json()["error"] == "NotFound"

    def test_prod_hides_detail(self) -> None:
        detail_uc = AsyncMock()
        detail_uc.execute.side_effect = NotFound("No movie with id 'gone'")
        client = TestClient(_make_app(environment="prod", detail_uc=detail_uc))
        token = token_codec.encode(MediaToken(id="gone", kind=MediaKind.MOVIE))

        resp = client.get(f"/api/v1/meta/{token}.json")

        assert resp.status_code == 404
        assert resp.json() == {"error": "NotFound"}


# ---------------------------------------------------------------------------
# Stream
# ---------------------------------------------------------------------------


class TestStreamEndpoint:
    def test_stream_resolved(self) -> None:
        stream_uc = AsyncMock()
        stream_uc.execute.return_value = ResolvedStream(
            url="https://cdn.example.com/vikram.m3u8",
            source_name="showflix",
            referer="https://showflix.test/",
        )
        client = TestClient(_make_app(stream_uc=stream_uc))
        token = token_codec.encode(MediaToken(id="mv001", kind=MediaKind.MOVIE))

        resp = client.get(f"/api/v1/stream/{token}.json")

        assert resp.status_code == 200
        assert resp.json() == {
            "stream": {
                "url": "https://cdn.example.com/vikram.m3u8",
                "name": "showflix",
                "referer": "https://showflix.test/",
            }
        }

    def test_no_link_is_null(self) -> None:
        stream_uc = AsyncMock()
        stream_uc.execute.return_value = None
        client = TestClient(_make_app(stream_uc=stream_uc))
        token = token_codec.encode(MediaToken(id="mv002", kind=MediaKind.MOVIE))

        resp = client.get(f"/api/v1/stream/{token}.json")

        assert resp.status_code == 200
        assert resp.json() == {"stream": None}

    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (EpisodeOutOfRange("no such episode"), 404),
            (NotFound("gone"), 404),
            (BackendUnavailable("down"), 502),
        ],
    )
    def test_error_status_mapping(self, exc: Exception, status: int) -> None:
        stream_uc = AsyncMock()
        stream_uc.execute.side_effect = exc
        client = TestClient(_make_app(stream_uc=stream_uc))
        token = token_codec.encode(
            MediaToken(
                id="sr001",
                kind=MediaKind.SERIES,
                season_label="Season 1",
                episode_index=9,
            )
        )

        resp = client.get(f"/api/v1/stream/{token}.json")

        assert resp.status_code == status
        assert resp.json()["error"] == type(exc).__name__
