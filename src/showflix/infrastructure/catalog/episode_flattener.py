"""Flatten a season -> episode-list structure into one episode sequence.

Pure function: identical input yields identical output. Season order and
episode order are taken as given; nothing is sorted or merged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from showflix.domain.entities.media import (
    FlattenedEpisode,
    MediaKind,
    MediaToken,
)

_SEASON_PREFIX = "Season "
_INT_RE = re.compile(r"[+-]?\d+")

SeasonEntries = Mapping[str, Sequence[str | None]] | Iterable[
    tuple[str, Sequence[str | None]]
]


def parse_season_number(label: str) -> int | None:
    """``"Season 3"`` -> 3, ``"Specials"`` -> None."""
    rest = label.removeprefix(_SEASON_PREFIX)
    if not _INT_RE.fullmatch(rest):
        return None
    return int(rest)


def _entries(seasons: SeasonEntries) -> Iterable[tuple[str, Sequence[str | None]]]:
    # Pair sequences keep duplicate labels that a mapping would collapse.
    if isinstance(seasons, Mapping):
        return seasons.items()
    return seasons


def flatten(series_id: str, seasons: SeasonEntries) -> list[FlattenedEpisode]:
    """Linearize seasons into episodes numbered by position within their season.

    Each episode carries a token binding series id, season label and
    0-based position so it can be resolved later on its own. The position
    counts across every block sharing a label, so episodes of a repeated
    label stay addressable while their display number restarts at 1.
    """
    episodes: list[FlattenedEpisode] = []
    offsets: dict[str, int] = {}
    for label, links in _entries(seasons):
        season_number = parse_season_number(label)
        offset = offsets.get(label, 0)
        offsets[label] = offset + len(links)
        for index, link in enumerate(links):
            episodes.append(
                FlattenedEpisode(
                    season_label=label,
                    season_number=season_number,
                    episode_number=index + 1,
                    display_name=f"Episode {index + 1}",
                    token=MediaToken(
                        id=series_id,
                        kind=MediaKind.SERIES,
                        season_label=label,
                        episode_index=offset + index,
                    ),
                    stream_url=link or None,
                )
            )
    return episodes
