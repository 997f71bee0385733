"""Core enums, constants, and record types for IMDb ratings lookup.

Types:
    MovieRecord  -- Canonical, always-complete record persisted per IMDb id.
    LookupState  -- Request state machine (start through rendered).
    LookupResult -- Outcome of one lookup: a record or a user-facing error.
"""

from dataclasses import asdict, dataclass
from enum import StrEnum

IMDB_ID_PREFIX = "tt"
DEFAULT_SYNOPSIS = "No synopsis available."
DEFAULT_RATING = "N/A"
DEFAULT_YEAR = ""


class LookupState(StrEnum):
    START = "start"
    QUERY_VALIDATED = "query_validated"
    CANDIDATES_FETCHED = "candidates_fetched"
    BEST_SELECTED = "best_selected"
    DETAILS_FETCHED = "details_fetched"
    RECORD_BUILT = "record_built"
    PERSISTED = "persisted"
    RENDERED = "rendered"


# Happy-path order; failures short-circuit to RENDERED from any state
STATE_ORDER: list[LookupState] = list(LookupState)


@dataclass(frozen=True)
class MovieRecord:
    """Normalized movie metadata. Every field is a defined string."""

    imdb_id: str
    title: str
    year: str = DEFAULT_YEAR
    synopsis: str = DEFAULT_SYNOPSIS
    rating: str = DEFAULT_RATING

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class LookupResult:
    """Result of MovieLookup.run().

    Exactly one of record/error is set. ``state`` is the last state the
    request reached before rendering.
    """

    record: MovieRecord | None = None
    error: str | None = None
    state: LookupState = LookupState.START

    @property
    def ok(self) -> bool:
        return self.record is not None
