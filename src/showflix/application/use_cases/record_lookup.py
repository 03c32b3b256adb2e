"""Locate one catalog record by id."""

from __future__ import annotations

import structlog

from showflix.domain.entities.errors import NotFound
from showflix.domain.entities.media import MediaKind, RawRecord
from showflix.domain.ports.catalog_backend import CatalogBackendPort

log = structlog.get_logger(__name__)


async def find_record(
    backend: CatalogBackendPort, kind: MediaKind, record_id: str
) -> RawRecord:
    """Re-fetch the catalog of ``kind`` and return the record with ``record_id``.

    Raises:
        NotFound: No record of that kind carries the id.
        BackendUnavailable: The scan itself failed.
    """
    records = await backend.query_all(kind)
    for record in records:
        if record.id == record_id:
            return record

    log.info("record_not_found", kind=kind.value, id=record_id, scanned=len(records))
    raise NotFound(f"No {kind.value} with id {record_id!r}")
