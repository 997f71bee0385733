"""Build the canonical MovieRecord from a chosen candidate and its details."""

from typing import Any

from .api.extract import (
    extract_rating,
    extract_synopsis,
    extract_year,
    get_imdb_id,
    get_title,
)
from .errors import MissingIdError
from .models import MovieRecord


def build_record(best: Any, query: str, details: Any) -> MovieRecord:
    """Normalize a best candidate + details payload into a MovieRecord.

    Title falls back from the details' primaryTitle to the candidate title to
    the raw query. Year falls back from details to the candidate.
    """
    imdb_id = get_imdb_id(best)
    if not imdb_id:
        raise MissingIdError(f"Candidate has no IMDb id: {best!r}")

    primary = details.get("primaryTitle") if isinstance(details, dict) else None
    title = (str(primary) if primary else "") or get_title(best) or query

    return MovieRecord(
        imdb_id=imdb_id,
        title=title,
        year=extract_year(details, best),
        synopsis=extract_synopsis(details),
        rating=extract_rating(details),
    )
