"""Map raw backend objects into records, and records into the unified
summary/detail shape.

Movies and series use different field names for the same data
(``poster`` vs ``seriesPoster``, ...). That divergence is handled here and
nowhere else:

| unified     | movie        | series            |
|-------------|--------------|-------------------|
| id          | objectId     | objectId          |
| title       | movieName    | seriesName        |
| poster_url  | poster       | seriesPoster      |
| category    | category     | seriesCategory    |
| stream_url  | streamlink   | -                 |
| backdrop_url| backdrop     | seriesBackdrop    |
| rating_text | rating       | seriesRating      |
| plot        | storyline    | seriesStoryline   |
| seasons     | -            | Seasons           |
"""

from __future__ import annotations

import math
from typing import Any

import structlog

from showflix.domain.entities.errors import UnsupportedKind
from showflix.domain.entities.media import (
    MediaDetail,
    MediaKind,
    MediaSummary,
    MediaToken,
    RawMovieRecord,
    RawRecord,
    RawSeriesRecord,
)
from showflix.infrastructure.catalog.episode_flattener import flatten

log = structlog.get_logger(__name__)

# Ratings arrive as text on a 0-10 scale and are stored as rating * 1000.
_RATING_SCALE = 1000
_RATING_MAX = 10 * _RATING_SCALE

_SeasonPairs = tuple[tuple[str, tuple[str | None, ...]], ...]


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _parse_seasons(raw: Any) -> _SeasonPairs:
    if not isinstance(raw, dict):
        return ()
    # Decoders may attach the raw key/value pairs to keep duplicate labels.
    pairs = getattr(raw, "pairs", None) or list(raw.items())
    seasons: list[tuple[str, tuple[str | None, ...]]] = []
    for label, links in pairs:
        if not isinstance(links, list):
            log.warning("season_not_a_list", season=label)
            links = []
        seasons.append((str(label), tuple(_opt_str(link) for link in links)))
    return tuple(seasons)


def movie_from_json(item: dict[str, Any]) -> RawMovieRecord | None:
    """Movie object -> record; None when id or title is missing."""
    record_id = _opt_str(item.get("objectId"))
    title = _opt_str(item.get("movieName"))
    if record_id is None or title is None:
        return None
    return RawMovieRecord(
        id=record_id,
        title=title,
        poster_url=_opt_str(item.get("poster")),
        category=_opt_str(item.get("category")),
        stream_url=_opt_str(item.get("streamlink")),
        backdrop_url=_opt_str(item.get("backdrop")),
        rating_text=_opt_str(item.get("rating")),
        plot=_opt_str(item.get("storyline")),
    )


def series_from_json(item: dict[str, Any]) -> RawSeriesRecord | None:
    """Series object -> record; None when id or title is missing."""
    record_id = _opt_str(item.get("objectId"))
    title = _opt_str(item.get("seriesName"))
    if record_id is None or title is None:
        return None
    return RawSeriesRecord(
        id=record_id,
        title=title,
        poster_url=_opt_str(item.get("seriesPoster")),
        category=_opt_str(item.get("seriesCategory")),
        backdrop_url=_opt_str(item.get("seriesBackdrop")),
        rating_text=_opt_str(item.get("seriesRating")),
        plot=_opt_str(item.get("seriesStoryline")),
        seasons=_parse_seasons(item.get("Seasons")),
    )


def record_from_json(kind: MediaKind, item: dict[str, Any]) -> RawRecord | None:
    if kind is MediaKind.MOVIE:
        return movie_from_json(item)
    if kind is MediaKind.SERIES:
        return series_from_json(item)
    raise UnsupportedKind(f"Unsupported kind {kind!r}")


def parse_rating(text: str | None) -> int | None:
    """Parse rating text into 0..10000, or None when missing/unparsable."""
    if text is None:
        return None
    try:
        value = abs(float(text.strip()))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return min(round(value * _RATING_SCALE), _RATING_MAX)


def kind_of(record: RawRecord) -> MediaKind:
    if isinstance(record, RawMovieRecord):
        return MediaKind.MOVIE
    if isinstance(record, RawSeriesRecord):
        return MediaKind.SERIES
    raise UnsupportedKind(f"Unsupported record type {type(record).__name__!r}")


def to_summary(record: RawRecord) -> MediaSummary:
    """Browse-view entry with a fresh title token."""
    kind = kind_of(record)
    return MediaSummary(
        id=record.id,
        title=record.title,
        kind=kind,
        token=MediaToken(id=record.id, kind=kind),
        poster_url=record.poster_url or None,
    )


def to_detail(record: RawRecord) -> MediaDetail:
    """Full title view; series get their flattened episode list."""
    kind = kind_of(record)
    episodes = (
        tuple(flatten(record.id, record.seasons))
        if isinstance(record, RawSeriesRecord)
        else ()
    )

    return MediaDetail(
        id=record.id,
        title=record.title,
        kind=kind,
        token=MediaToken(id=record.id, kind=kind),
        poster_url=record.poster_url or None,
        backdrop_url=record.backdrop_url or None,
        rating=parse_rating(record.rating_text),
        plot=record.plot,
        tags=frozenset([record.category]) if record.category else frozenset(),
        episodes=episodes,
    )
