"""Error taxonomy shared by all layers."""

from __future__ import annotations


class ShowflixError(Exception):
    """Base error for catalog domain/use cases."""


class BackendUnavailable(ShowflixError):
    """Network / non-success status / malformed payload from the catalog backend."""


class NotFound(ShowflixError):
    """No backend record matches the requested id."""


class EpisodeOutOfRange(ShowflixError):
    """Season label or episode position does not address an existing entry."""


class MalformedToken(ShowflixError):
    """Token string is not a valid serialization of a MediaToken."""


class UnsupportedKind(ShowflixError):
    """Kind outside {movie, series}."""


class UnknownCategory(ShowflixError):
    """Category label is not configured."""
