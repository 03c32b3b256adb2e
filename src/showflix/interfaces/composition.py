"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from showflix.application.use_cases import (
    CatalogBrowseUseCase,
    LoadDetailUseCase,
    ResolveStreamUseCase,
)
from showflix.infrastructure.config.schema import AppConfig
from showflix.infrastructure.parse import HttpxParseCatalogClient
from showflix.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def wire_use_cases(state: AppState, config: AppConfig) -> None:
    """Build backend client and use cases on top of ``state.http_client``."""
    state.backend = HttpxParseCatalogClient(
        config=config.backend,
        http_client=state.http_client,
    )
    state.browse_uc = CatalogBrowseUseCase(
        state.backend,
        categories=config.categories,
        limit=config.backend.home_page_limit,
    )
    state.detail_uc = LoadDetailUseCase(state.backend)
    state.stream_uc = ResolveStreamUseCase(
        state.backend,
        source_name=config.app_name,
        referer=f"{config.backend.site_url}/",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared by the backend client)
        2. Parse backend client
        3. Use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client (no retries: failures surface as BackendUnavailable)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2+3) Backend client and use cases
    wire_use_cases(state, config)
    log.info(
        "app_startup_complete",
        backend=config.backend.parse_base_url,
        categories=list(config.categories),
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
