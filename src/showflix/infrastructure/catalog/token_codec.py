"""Serialize MediaToken to a compact, path-safe string and back.

Wire form: unpadded urlsafe base64 of compact JSON::

    {"id": "<objectId>", "type": "movie"}
    {"id": "<objectId>", "type": "series", "season": "Season 1", "episode": 0}

The payload holds only the token fields, never backend/session state, so
a token survives process restarts and always resolves against fresh data.
"""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from showflix.domain.entities.errors import MalformedToken, UnsupportedKind
from showflix.domain.entities.media import MediaKind, MediaToken


class _TokenPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    id: str = Field(min_length=1)
    type: str
    season: str | None = None
    episode: int | None = Field(default=None, ge=0)


def _check_coordinates(kind: MediaKind, season: str | None, episode: int | None) -> None:
    if kind is MediaKind.MOVIE:
        if season is not None or episode is not None:
            raise MalformedToken("movie tokens carry no season/episode")
    elif kind is MediaKind.SERIES:
        if (season is None) != (episode is None):
            raise MalformedToken("season and episode must be given together")
    else:
        raise UnsupportedKind(f"Unsupported kind {kind!r}")


def encode(token: MediaToken) -> str:
    """Serialize a token; raises MalformedToken for inconsistent tokens."""
    if not isinstance(token.kind, MediaKind):
        raise UnsupportedKind(f"Unsupported kind {token.kind!r}")
    _check_coordinates(token.kind, token.season_label, token.episode_index)
    try:
        payload = _TokenPayload(
            id=token.id,
            type=token.kind.value,
            season=token.season_label,
            episode=token.episode_index,
        )
    except ValidationError as exc:
        raise MalformedToken(str(exc)) from exc

    raw = payload.model_dump_json(exclude_none=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def decode(value: str) -> MediaToken:
    """Parse a token string.

    Raises:
        MalformedToken: Not base64/JSON, missing or mistyped fields, or
            coordinates that do not fit the kind.
        UnsupportedKind: Well-formed payload with an unknown ``type``.
    """
    try:
        padded = value.encode("ascii") + b"=" * (-len(value) % 4)
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (UnicodeEncodeError, binascii.Error) as exc:
        raise MalformedToken("token is not urlsafe base64") from exc

    try:
        payload = _TokenPayload.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedToken(f"invalid token payload: {exc.error_count()} error(s)") from exc

    try:
        kind = MediaKind(payload.type)
    except ValueError as exc:
        raise UnsupportedKind(f"Unsupported kind {payload.type!r}") from exc

    _check_coordinates(kind, payload.season, payload.episode)
    return MediaToken(
        id=payload.id,
        kind=kind,
        season_label=payload.season,
        episode_index=payload.episode,
    )
