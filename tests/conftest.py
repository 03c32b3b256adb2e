"""Shared test fixtures for the Showflix test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from showflix.domain.entities import (
    MediaKind,
    MediaToken,
    RawMovieRecord,
    RawSeriesRecord,
)

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def movie_record() -> RawMovieRecord:
    """Complete movie record."""
    return RawMovieRecord(
        id="mv001",
        title="Vikram",
        poster_url="https://img.example.com/vikram.jpg",
        category="Tamil",
        stream_url="https://cdn.example.com/vikram.m3u8",
        backdrop_url="https://img.example.com/vikram-bg.jpg",
        rating_text="8.4",
        plot="A special agent investigates a series of murders.",
    )


@pytest.fixture()
def series_record() -> RawSeriesRecord:
    """Series with two numbered seasons."""
    return RawSeriesRecord(
        id="sr001",
        title="Suzhal",
        poster_url="https://img.example.com/suzhal.jpg",
        category="Tamil",
        backdrop_url="https://img.example.com/suzhal-bg.jpg",
        rating_text="7.9",
        plot="A missing girl and a factory fire.",
        seasons=(
            ("Season 1", ("urlA", "urlB")),
            ("Season 2", ("urlC",)),
        ),
    )


@pytest.fixture()
def movie_token() -> MediaToken:
    return MediaToken(id="mv001", kind=MediaKind.MOVIE)


@pytest.fixture()
def episode_token() -> MediaToken:
    return MediaToken(
        id="sr001",
        kind=MediaKind.SERIES,
        season_label="Season 1",
        episode_index=1,
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_backend(
    movie_record: RawMovieRecord, series_record: RawSeriesRecord
) -> AsyncMock:
    """Mock CatalogBackendPort returning one record per kind."""

    async def _by_kind(kind: MediaKind, *args: object) -> list[object]:
        return [movie_record] if kind is MediaKind.MOVIE else [series_record]

    backend = AsyncMock()
    backend.query_by_category = AsyncMock(side_effect=_by_kind)
    backend.query_all = AsyncMock(side_effect=_by_kind)
    return backend
