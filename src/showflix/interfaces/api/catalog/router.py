"""Catalog API endpoints (categories, home rows, detail, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from showflix.domain.entities import (
    BackendUnavailable,
    EpisodeOutOfRange,
    FlattenedEpisode,
    MalformedToken,
    MediaDetail,
    MediaSummary,
    NotFound,
    ResolvedStream,
    ShowflixError,
    UnknownCategory,
    UnsupportedKind,
)
from showflix.infrastructure.catalog import token_codec
from showflix.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["catalog"])

_STATUS_BY_ERROR: dict[type[ShowflixError], int] = {
    MalformedToken: 400,
    UnsupportedKind: 400,
    UnknownCategory: 404,
    NotFound: 404,
    EpisodeOutOfRange: 404,
    BackendUnavailable: 502,
}


def _is_prod(state: AppState) -> bool:
    return state.config.environment == "prod"


def _error(state: AppState, exc: ShowflixError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        500,
    )
    log.warning(
        "catalog_request_failed",
        error=type(exc).__name__,
        status_code=status_code,
        detail=str(exc),
    )
    content: dict[str, Any] = {"error": type(exc).__name__}
    if not _is_prod(state):
        content["detail"] = str(exc)
    return JSONResponse(content=content, status_code=status_code)


def _summary_json(summary: MediaSummary) -> dict[str, Any]:
    return {
        "id": summary.id,
        "type": summary.kind.value,
        "title": summary.title,
        "poster": summary.poster_url,
        "quality": summary.quality,
        "token": token_codec.encode(summary.token),
    }


def _episode_json(episode: FlattenedEpisode) -> dict[str, Any]:
    return {
        "season": episode.season_number,
        "seasonLabel": episode.season_label,
        "episode": episode.episode_number,
        "name": episode.display_name,
        "available": episode.stream_url is not None,
        "token": token_codec.encode(episode.token),
    }


def _detail_json(detail: MediaDetail) -> dict[str, Any]:
    return {
        "id": detail.id,
        "type": detail.kind.value,
        "title": detail.title,
        "poster": detail.poster_url,
        "backdrop": detail.backdrop_url,
        "rating": detail.rating,
        "plot": detail.plot,
        "tags": sorted(detail.tags),
        "episodes": [_episode_json(e) for e in detail.episodes],
        "token": token_codec.encode(detail.token),
    }


def _stream_json(stream: ResolvedStream | None) -> dict[str, Any] | None:
    if stream is None:
        return None
    return {
        "url": stream.url,
        "name": stream.source_name,
        "referer": stream.referer,
    }


@router.get("/catalog/categories.json")
async def catalog_categories(request: Request) -> JSONResponse:
    """Configured category labels in display order."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content={"categories": state.browse_uc.category_labels()})


@router.get("/catalog/home.json")
async def catalog_home(request: Request) -> JSONResponse:
    """One shuffled row of newest movies + series per category."""
    state = cast(AppState, request.app.state)
    try:
        rows = await state.browse_uc.home_rows()
    except ShowflixError as exc:
        return _error(state, exc)

    return JSONResponse(
        content={
            "rows": [
                {"name": row.name, "items": [_summary_json(s) for s in row.items]}
                for row in rows
            ]
        }
    )


@router.get("/catalog/{label}.json")
async def catalog_category(request: Request, label: str) -> JSONResponse:
    """Summaries for one category label."""
    state = cast(AppState, request.app.state)
    try:
        summaries = await state.browse_uc.list_category_summaries(label)
    except ShowflixError as exc:
        return _error(state, exc)

    return JSONResponse(
        content={"name": label, "items": [_summary_json(s) for s in summaries]}
    )


@router.get("/meta/{token}.json")
async def media_detail(request: Request, token: str) -> JSONResponse:
    """Detail view of the title a token points to."""
    state = cast(AppState, request.app.state)
    try:
        detail = await state.detail_uc.execute(token_codec.decode(token))
    except ShowflixError as exc:
        return _error(state, exc)

    return JSONResponse(content={"meta": _detail_json(detail)})


@router.get("/stream/{token}.json")
async def media_stream(request: Request, token: str) -> JSONResponse:
    """Stream URL for a movie or episode token (``null`` when none exists)."""
    state = cast(AppState, request.app.state)
    try:
        stream = await state.stream_uc.execute(token_codec.decode(token))
    except ShowflixError as exc:
        return _error(state, exc)

    return JSONResponse(content={"stream": _stream_json(stream)})
