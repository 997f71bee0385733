"""Field extraction from loosely-shaped IMDb API payloads.

The autocomplete and details endpoints return different key names depending
on the upstream response variant. Each logical field is described by an
ordered tuple of dotted paths; the first path holding a usable value wins.

Two presence policies apply:
    title / id            -- empty values ("" / None) are skipped
    synopsis/rating/year  -- any non-None scalar counts, including 0 and ""

All functions here are pure and never raise for any JSON value.
"""

from collections.abc import Mapping
from typing import Any

from ..models import DEFAULT_RATING, DEFAULT_SYNOPSIS, DEFAULT_YEAR

TITLE_PATHS = ("primaryTitle", "title", "l", "name", "originalTitle")
IMDB_ID_PATHS = ("imdbId", "id", "tconst", "const", "i")
SYNOPSIS_PATHS = (
    "description",
    "plot",
    "plotSummary",
    "storyline",
    "plotOutline.text",
    "plot.plotText.plainText",
    "plot.plotText.text",
)
RATING_PATHS = (
    "averageRating",
    "rating",
    "ratingsSummary.aggregateRating",
    "ratingsSummary.rating",
    "aggregateRating",
)
DETAILS_YEAR_PATHS = ("startYear", "year", "releaseYear")
CANDIDATE_YEAR_PATHS = ("startYear", "year", "y")

_MISSING = object()


def dig(obj: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings.

    Returns the sentinel ``_MISSING`` when any step is absent or not a mapping.
    """
    current = obj
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _first_nonempty(obj: Any, paths: tuple[str, ...]) -> Any:
    for path in paths:
        value = dig(obj, path)
        if value is not _MISSING and value:
            return value
    return _MISSING


def _first_present(obj: Any, paths: tuple[str, ...]) -> Any:
    # Containers at a probed path are parents of deeper paths, not values
    for path in paths:
        value = dig(obj, path)
        if value is _MISSING or value is None:
            continue
        if isinstance(value, (Mapping, list)):
            continue
        return value
    return _MISSING


def to_text(value: Any) -> str:
    """Render a scalar the way it appears in the API's JSON (8.0 -> "8")."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_title(candidate: Any) -> str:
    """Return the candidate's display title, or "" if it has none."""
    value = _first_nonempty(candidate, TITLE_PATHS)
    return "" if value is _MISSING else to_text(value)


def get_imdb_id(candidate: Any) -> str | None:
    """Return the candidate's IMDb id without validating its prefix."""
    value = _first_nonempty(candidate, IMDB_ID_PATHS)
    return None if value is _MISSING else to_text(value)


def extract_synopsis(details: Any) -> str:
    value = _first_present(details, SYNOPSIS_PATHS)
    return DEFAULT_SYNOPSIS if value is _MISSING else to_text(value)


def extract_rating(details: Any) -> str:
    """Return the aggregate rating as text. A rating of 0 is kept."""
    value = _first_present(details, RATING_PATHS)
    return DEFAULT_RATING if value is _MISSING else to_text(value)


def extract_year(details: Any, fallback: Any) -> str:
    """Return the release year from details, else from the search candidate."""
    value = _first_present(details, DETAILS_YEAR_PATHS)
    if value is _MISSING:
        value = _first_present(fallback, CANDIDATE_YEAR_PATHS)
    return DEFAULT_YEAR if value is _MISSING else to_text(value)
