"""Port for catalog backend queries."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from showflix.domain.entities.media import MediaKind, RawRecord


@runtime_checkable
class CatalogBackendPort(Protocol):
    """Async interface to the remote movie/series catalog.

    The backend exposes no lookup by id; ``query_all`` scans the whole
    catalog instead. A backend with a real by-id endpoint can implement
    ``query_all`` more efficiently without changing callers.
    """

    async def query_by_category(
        self, kind: MediaKind, category_pattern: str, limit: int
    ) -> list[RawRecord]:
        """Newest-first records whose category matches the regex pattern.

        Raises BackendUnavailable on transport or non-2xx errors.
        """
        ...

    async def query_all(self, kind: MediaKind) -> list[RawRecord]:
        """Every record of a kind, bounded by the backend's scan limit."""
        ...
