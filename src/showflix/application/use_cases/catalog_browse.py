"""Catalog browse use case: category listings and home rows."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Callable, Mapping

import structlog

from showflix.domain.entities.errors import UnknownCategory
from showflix.domain.entities.media import HomeRow, MediaKind, MediaSummary
from showflix.domain.ports.catalog_backend import CatalogBackendPort
from showflix.infrastructure.catalog.normalizer import to_summary

log = structlog.get_logger(__name__)

ShuffleFn = Callable[[list[MediaSummary]], None]


class CatalogBrowseUseCase:
    """Lists the newest movies and series of a configured category.

    Movie and series fetches run in parallel. Their combined result is
    permuted by the injected ``shuffle`` (in place); everything before that
    step is deterministic.
    """

    def __init__(
        self,
        backend: CatalogBackendPort,
        *,
        categories: Mapping[str, str],
        limit: int,
        shuffle: ShuffleFn = random.shuffle,
    ) -> None:
        self._backend = backend
        self._categories = dict(categories)
        self._limit = limit
        self._shuffle = shuffle

    def category_labels(self) -> list[str]:
        """Configured labels in display order."""
        return list(self._categories)

    async def list_category_summaries(self, label: str) -> list[MediaSummary]:
        """Mixed movie + series summaries for one category label.

        Raises:
            UnknownCategory: Label is not configured.
            BackendUnavailable: Either fetch failed.
        """
        pattern = self._categories.get(label)
        if pattern is None:
            raise UnknownCategory(f"Unknown category {label!r}")

        movies, series = await asyncio.gather(
            self._backend.query_by_category(MediaKind.MOVIE, pattern, self._limit),
            self._backend.query_by_category(MediaKind.SERIES, pattern, self._limit),
        )

        summaries = [to_summary(record) for record in [*movies, *series]]
        self._shuffle(summaries)

        log.info(
            "category_listed",
            category=label,
            movies=len(movies),
            series=len(series),
        )
        return summaries

    async def home_rows(self) -> list[HomeRow]:
        """One row per configured category, in configuration order."""
        labels = self.category_labels()
        listings = await asyncio.gather(
            *(self.list_category_summaries(label) for label in labels)
        )
        return [
            HomeRow(name=label, items=items)
            for label, items in zip(labels, listings)
        ]
