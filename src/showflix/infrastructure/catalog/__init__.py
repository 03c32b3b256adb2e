from .episode_flattener import flatten, parse_season_number
from .normalizer import (
    movie_from_json,
    parse_rating,
    record_from_json,
    series_from_json,
    to_detail,
    to_summary,
)
from .token_codec import decode, encode

__all__ = [
    "decode",
    "encode",
    "flatten",
    "movie_from_json",
    "parse_rating",
    "parse_season_number",
    "record_from_json",
    "series_from_json",
    "to_detail",
    "to_summary",
]
