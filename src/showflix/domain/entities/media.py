"""Domain entities for the movie/series catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class MediaKind(str, Enum):
    """Discriminator selecting the record schema and resolution path."""

    MOVIE = "movie"
    SERIES = "series"


# Universal wildcard used to scan the whole catalog.
MATCH_ANYTHING = ".*"


@dataclass(frozen=True)
class CatalogQuery:
    """One catalog fetch: regex category filter, newest first."""

    category_pattern: str
    result_limit: int
    sort_order: str = "-createdAt"

    def __post_init__(self) -> None:
        if self.result_limit <= 0:
            raise ValueError("result_limit must be > 0")


@dataclass(frozen=True)
class RawMovieRecord:
    """Movie record as stored by the backend (field names already mapped)."""

    id: str
    title: str
    poster_url: str | None = None
    category: str | None = None
    stream_url: str | None = None
    backdrop_url: str | None = None
    rating_text: str | None = None
    plot: str | None = None


@dataclass(frozen=True)
class RawSeriesRecord:
    """Series record as stored by the backend.

    ``seasons`` keeps the backend's season order; position ``i`` inside an
    episode list is episode number ``i + 1``.
    """

    id: str
    title: str
    poster_url: str | None = None
    category: str | None = None
    backdrop_url: str | None = None
    rating_text: str | None = None
    plot: str | None = None
    seasons: Sequence[tuple[str, Sequence[str | None]]] = ()


RawRecord = RawMovieRecord | RawSeriesRecord


@dataclass(frozen=True)
class MediaToken:
    """Self-contained identifier carried between browse and resolve.

    ``season_label`` and ``episode_index`` are only set on series episode
    tokens; ``episode_index`` is the 0-based position within the season.
    """

    id: str
    kind: MediaKind
    season_label: str | None = None
    episode_index: int | None = None


@dataclass(frozen=True)
class MediaSummary:
    """Catalog entry for browse views."""

    id: str
    title: str
    kind: MediaKind
    token: MediaToken
    poster_url: str | None = None
    quality: str = "HD"


@dataclass(frozen=True)
class FlattenedEpisode:
    """One addressable episode of a series."""

    season_label: str
    season_number: int | None  # None when the label is not "Season <n>"
    episode_number: int  # 1-based position within the season
    display_name: str
    token: MediaToken
    stream_url: str | None = None


@dataclass(frozen=True)
class MediaDetail:
    """Full title view: summary fields plus metadata and episodes."""

    id: str
    title: str
    kind: MediaKind
    token: MediaToken
    poster_url: str | None = None
    backdrop_url: str | None = None
    rating: int | None = None  # 0..10000 (rating * 1000)
    plot: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    episodes: tuple[FlattenedEpisode, ...] = ()


@dataclass(frozen=True)
class ResolvedStream:
    """A playable link for a movie or an episode."""

    url: str
    source_name: str
    referer: str = ""


@dataclass(frozen=True)
class HomeRow:
    """Home page row: one category label and its mixed movie/series items."""

    name: str
    items: list[MediaSummary] = field(default_factory=list)

