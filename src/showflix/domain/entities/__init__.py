from .errors import (
    BackendUnavailable,
    EpisodeOutOfRange,
    MalformedToken,
    NotFound,
    ShowflixError,
    UnknownCategory,
    UnsupportedKind,
)
from .media import (
    MATCH_ANYTHING,
    CatalogQuery,
    FlattenedEpisode,
    HomeRow,
    MediaDetail,
    MediaKind,
    MediaSummary,
    MediaToken,
    RawMovieRecord,
    RawRecord,
    RawSeriesRecord,
    ResolvedStream,
)

__all__ = [
    "MATCH_ANYTHING",
    "BackendUnavailable",
    "CatalogQuery",
    "EpisodeOutOfRange",
    "FlattenedEpisode",
    "HomeRow",
    "MalformedToken",
    "MediaDetail",
    "MediaKind",
    "MediaSummary",
    "MediaToken",
    "NotFound",
    "RawMovieRecord",
    "RawRecord",
    "RawSeriesRecord",
    "ResolvedStream",
    "ShowflixError",
    "UnknownCategory",
    "UnsupportedKind",
]
