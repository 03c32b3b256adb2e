"""Resolve a token to a playable stream URL.

Movie token -> record.stream_url.
Series token -> record.seasons[season_label][episode_index].

A matched record without a link is not an error: the result is ``None``
and the caller decides how to present it.
"""

from __future__ import annotations

import structlog

from showflix.domain.entities.errors import EpisodeOutOfRange, UnsupportedKind
from showflix.domain.entities.media import (
    MediaKind,
    MediaToken,
    RawMovieRecord,
    RawRecord,
    RawSeriesRecord,
    ResolvedStream,
)
from showflix.domain.ports.catalog_backend import CatalogBackendPort

from .record_lookup import find_record

log = structlog.get_logger(__name__)


def select_episode_link(record: RawSeriesRecord, season_label: str, index: int) -> str | None:
    """Link at a season/position coordinate.

    Blocks repeating a label are addressed as one sequence in backend
    order, matching the positions the flattener hands out.

    Raises:
        EpisodeOutOfRange: Unknown season label or position past the end.
    """
    blocks = [links for label, links in record.seasons if label == season_label]
    if not blocks:
        raise EpisodeOutOfRange(f"{record.id!r} has no season {season_label!r}")

    links = [link for block in blocks for link in block]
    if not 0 <= index < len(links):
        raise EpisodeOutOfRange(
            f"{season_label!r} of {record.id!r} has {len(links)} episode(s), "
            f"index {index} requested"
        )
    return links[index]


def select_stream_url(record: RawRecord, token: MediaToken) -> str | None:
    """Stream URL the token addresses on an already fetched record."""
    if token.kind is MediaKind.MOVIE:
        if not isinstance(record, RawMovieRecord):
            raise UnsupportedKind(f"Expected a movie record for {token.id!r}")
        return record.stream_url
    if token.kind is MediaKind.SERIES:
        if not isinstance(record, RawSeriesRecord):
            raise UnsupportedKind(f"Expected a series record for {token.id!r}")
        if token.season_label is None or token.episode_index is None:
            raise EpisodeOutOfRange(f"Series token for {token.id!r} names no episode")
        return select_episode_link(record, token.season_label, token.episode_index)
    raise UnsupportedKind(f"Unsupported kind {token.kind!r}")


class ResolveStreamUseCase:
    """Token -> fresh record -> ResolvedStream, or None when no link exists."""

    def __init__(
        self,
        backend: CatalogBackendPort,
        *,
        source_name: str,
        referer: str = "",
    ) -> None:
        self._backend = backend
        self._source_name = source_name
        self._referer = referer

    async def execute(self, token: MediaToken) -> ResolvedStream | None:
        """Resolve a movie or episode token.

        Raises:
            NotFound: No record with ``token.id``.
            EpisodeOutOfRange: Season/episode does not exist on the record.
            BackendUnavailable: Catalog scan failed.
        """
        record = await find_record(self._backend, token.kind, token.id)
        url = select_stream_url(record, token)

        if not url:
            log.info(
                "stream_unavailable",
                id=token.id,
                kind=token.kind.value,
                season=token.season_label,
                episode_index=token.episode_index,
            )
            return None

        log.info("stream_resolved", id=token.id, kind=token.kind.value)
        return ResolvedStream(
            url=url,
            source_name=self._source_name,
            referer=self._referer,
        )
