"""Load the full detail view of one title."""

from __future__ import annotations

import structlog

from showflix.domain.entities.media import MediaDetail, MediaToken
from showflix.domain.ports.catalog_backend import CatalogBackendPort
from showflix.infrastructure.catalog.normalizer import to_detail

from .record_lookup import find_record

log = structlog.get_logger(__name__)


class LoadDetailUseCase:
    """Token -> fresh record -> MediaDetail (with episodes for series)."""

    def __init__(self, backend: CatalogBackendPort) -> None:
        self._backend = backend

    async def execute(self, token: MediaToken) -> MediaDetail:
        record = await find_record(self._backend, token.kind, token.id)
        detail = to_detail(record)
        log.info(
            "detail_loaded",
            id=detail.id,
            kind=detail.kind.value,
            episodes=len(detail.episodes),
        )
        return detail
