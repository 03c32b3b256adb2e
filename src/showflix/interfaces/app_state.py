"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from showflix.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from showflix.application.use_cases import (
        CatalogBrowseUseCase,
        LoadDetailUseCase,
        ResolveStreamUseCase,
    )
    from showflix.domain.ports import CatalogBackendPort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    backend: CatalogBackendPort

    # Use cases (the host surface)
    browse_uc: CatalogBrowseUseCase
    detail_uc: LoadDetailUseCase
    stream_uc: ResolveStreamUseCase
