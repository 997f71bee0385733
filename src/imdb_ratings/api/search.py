"""Candidate scoring for IMDb autocomplete results.

Scores each candidate title against the user's query by containment:
exact match beats prefix match beats substring match. Candidates whose id
is not a title id (names, companies) are ignored.
"""

from typing import Any

from loguru import logger

from ..models import IMDB_ID_PREFIX
from .extract import get_imdb_id, get_title

log = logger.bind(stage="search")

SCORE_EXACT = 3
SCORE_PREFIX = 2
SCORE_CONTAINS = 1


def score_candidate(candidate: Any, query: str) -> int:
    """Score one candidate against a query. 0 means the candidate is skipped."""
    q = query.strip().lower()
    title = get_title(candidate).lower()
    if not title:
        return 0

    imdb_id = get_imdb_id(candidate)
    if imdb_id and not imdb_id.startswith(IMDB_ID_PREFIX):
        return 0

    if title == q:
        return SCORE_EXACT
    if title.startswith(q):
        return SCORE_PREFIX
    if q in title:
        return SCORE_CONTAINS
    return 0


def pick_best(candidates: list[Any], query: str) -> Any | None:
    """Return the highest-scoring candidate, or None if nothing matched.

    Single greedy pass; on equal scores the earliest candidate wins.
    """
    best = None
    best_score = 0

    for candidate in candidates:
        score = score_candidate(candidate, query)
        if score > best_score:
            best_score = score
            best = candidate

    if best is not None:
        log.debug(f"Best match: {get_title(best)!r} score={best_score}")
    else:
        log.debug(f"No match for {query!r} among {len(candidates)} candidates")
    return best
