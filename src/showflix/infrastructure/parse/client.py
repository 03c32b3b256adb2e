"""Parse Server catalog client (async httpx).

Queries go to ``{base}/classes/movies`` and ``{base}/classes/series`` as
POST requests tunnelling a GET (``_method``), which is how the site's web
client talks to the backend.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import structlog

from showflix.domain.entities.errors import BackendUnavailable, UnsupportedKind
from showflix.domain.entities.media import (
    MATCH_ANYTHING,
    CatalogQuery,
    MediaKind,
    RawMovieRecord,
    RawRecord,
    RawSeriesRecord,
)
from showflix.infrastructure.catalog.normalizer import (
    movie_from_json,
    series_from_json,
)
from showflix.infrastructure.config.schema import BackendConfig

log = structlog.get_logger(__name__)

_CLASS_NAME = {MediaKind.MOVIE: "movies", MediaKind.SERIES: "series"}
_CATEGORY_FIELD = {MediaKind.MOVIE: "category", MediaKind.SERIES: "seriesCategory"}

_R = TypeVar("_R", RawMovieRecord, RawSeriesRecord)


class _PairsDict(dict):
    """JSON object that also remembers its raw key/value pairs.

    ``Seasons`` may repeat a label; the pairs keep every entry.
    """

    def __init__(self, pairs: list[tuple[str, Any]]) -> None:
        super().__init__(pairs)
        self.pairs = pairs


class HttpxParseCatalogClient:
    """Async Parse Server client using a shared httpx.AsyncClient.

    Implements ``CatalogBackendPort`` from domain.ports.catalog_backend.
    One network call per query, no retries, nothing cached.
    """

    def __init__(
        self,
        *,
        config: BackendConfig,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._config = config
        self._http = http_client

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _url(self, kind: MediaKind) -> str:
        return f"{self._config.parse_base_url}/classes/{_CLASS_NAME[kind]}"

    def _body(self, kind: MediaKind, query: CatalogQuery) -> dict[str, Any]:
        """Build the Parse query body (regex filter, paging, auth fields)."""
        return {
            "where": {_CATEGORY_FIELD[kind]: {"$regex": query.category_pattern}},
            "limit": query.result_limit,
            "order": query.sort_order,
            "_method": "GET",
            "_ApplicationId": self._config.application_id,
            "_JavaScriptKey": self._config.javascript_key,
            "_ClientVersion": self._config.client_version,
            "_InstallationId": self._config.installation_id,
        }

    async def _post(self, kind: MediaKind, query: CatalogQuery) -> list[dict[str, Any]]:
        """POST one query and return the raw ``results`` objects."""
        url = self._url(kind)
        try:
            resp = await self._http.post(
                url,
                json=self._body(kind, query),
                headers={"Referer": f"{self._config.site_url}/"},
            )
            resp.raise_for_status()
            payload = resp.json(object_pairs_hook=_PairsDict)
        except httpx.HTTPStatusError as exc:
            log.warning(
                "parse_http_error",
                url=url,
                status=exc.response.status_code,
            )
            raise BackendUnavailable(
                f"{url} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("parse_network_error", url=url, error=str(exc))
            raise BackendUnavailable(f"{url} unreachable: {exc}") from exc
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for undecodable bytes
            log.warning("parse_invalid_json", url=url)
            raise BackendUnavailable(f"{url} returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise BackendUnavailable(f"{url} returned a non-object body")

        results = payload.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise BackendUnavailable(f"{url} returned non-list results")
        items: list[dict[str, Any]] = []
        for item in results:
            if not isinstance(item, dict):
                log.warning(
                    "parse_record_skipped",
                    kind=kind.value,
                    reason="not_an_object",
                    item_type=type(item).__name__,
                )
                continue
            items.append(item)
        return items

    async def _fetch(
        self,
        kind: MediaKind,
        category_pattern: str,
        limit: int,
        parse: Callable[[dict[str, Any]], _R | None],
    ) -> list[_R]:
        items = await self._post(kind, CatalogQuery(category_pattern, limit))
        records: list[_R] = []
        for item in items:
            record = parse(item)
            if record is None:
                log.warning(
                    "parse_record_skipped",
                    kind=kind.value,
                    reason="missing_id_or_title",
                    object_id=item.get("objectId"),
                )
                continue
            records.append(record)
        log.debug(
            "parse_records_fetched",
            kind=kind.value,
            pattern=category_pattern,
            limit=limit,
            received=len(items),
            count=len(records),
        )
        return records

    # ------------------------------------------------------------------
    # Backend client contract
    # ------------------------------------------------------------------

    async def fetch_movies(self, category_pattern: str, limit: int) -> list[RawMovieRecord]:
        """Newest-first movies whose ``category`` matches the pattern."""
        return await self._fetch(MediaKind.MOVIE, category_pattern, limit, movie_from_json)

    async def fetch_series(self, category_pattern: str, limit: int) -> list[RawSeriesRecord]:
        """Newest-first series whose ``seriesCategory`` matches the pattern."""
        return await self._fetch(MediaKind.SERIES, category_pattern, limit, series_from_json)

    # ------------------------------------------------------------------
    # Public API (CatalogBackendPort)
    # ------------------------------------------------------------------

    async def query_by_category(
        self, kind: MediaKind, category_pattern: str, limit: int
    ) -> list[RawRecord]:
        if kind is MediaKind.MOVIE:
            return list(await self.fetch_movies(category_pattern, limit))
        if kind is MediaKind.SERIES:
            return list(await self.fetch_series(category_pattern, limit))
        raise UnsupportedKind(f"Unsupported kind {kind!r}")

    async def query_all(self, kind: MediaKind) -> list[RawRecord]:
        """Wildcard scan bounded by ``scan_limit``.

        Parse offers no by-id query here, so lookups scan the catalog; a full
        page means the searched id may lie beyond it.
        """
        limit = self._config.scan_limit
        records = await self.query_by_category(kind, MATCH_ANYTHING, limit)
        if len(records) >= limit:
            log.warning("catalog_scan_truncated", kind=kind.value, limit=limit)
        return records
