"""Lookup orchestration -- query to cached MovieRecord.

Runs one request through the state machine

    start -> query_validated -> candidates_fetched -> best_selected
          -> details_fetched -> record_built -> persisted -> rendered

and is the only place errors are turned into user-facing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .api.extract import get_imdb_id
from .api.search import pick_best
from .errors import (
    CollaboratorError,
    ConfigError,
    MissingIdError,
    NoMatchError,
    RatingsError,
    ValidationError,
    user_message,
)
from .models import LookupResult, LookupState, MovieRecord
from .normalize import build_record

if TYPE_CHECKING:
    from .api.imdb import ImdbClient
    from .movie_db import MovieDB

log = logger.bind(stage="lookup")


class MovieLookup:
    """Search, disambiguate, normalize and cache one movie per request.

    Holds no per-request state, so one instance can serve concurrent
    requests; each request tracks its progress in its own LookupResult.
    """

    def __init__(self, client: ImdbClient, db: MovieDB) -> None:
        self.client = client
        self.db = db

    @staticmethod
    def _advance(result: LookupResult, state: LookupState) -> None:
        log.debug(f"{result.state} -> {state}")
        result.state = state

    def lookup(self, query: str) -> MovieRecord:
        """Run the full pipeline for a query. Raises RatingsError subclasses."""
        return self._execute(query, LookupResult())

    def _execute(self, query: str, result: LookupResult) -> MovieRecord:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Empty query")
        self._advance(result, LookupState.QUERY_VALIDATED)

        candidates = self.client.search(query)
        self._advance(result, LookupState.CANDIDATES_FETCHED)

        best = pick_best(candidates, query)
        if best is None:
            raise NoMatchError(f"No match for {query!r} in {len(candidates)} results")
        self._advance(result, LookupState.BEST_SELECTED)

        imdb_id = get_imdb_id(best)
        if not imdb_id:
            raise MissingIdError(f"Best match for {query!r} has no IMDb id")

        details = self.client.details(imdb_id)
        self._advance(result, LookupState.DETAILS_FETCHED)

        record = build_record(best, query, details)
        self._advance(result, LookupState.RECORD_BUILT)

        self.db.upsert(record)
        self._advance(result, LookupState.PERSISTED)

        log.info(f"{query!r} -> {record.imdb_id} {record.title!r} rating={record.rating}")
        return record

    def run(self, query: str) -> LookupResult:
        """Error boundary around lookup(): never raises for lookup failures.

        The returned state is the last one reached before rendering.
        """
        result = LookupResult()
        try:
            result.record = self._execute(query, result)
        except (CollaboratorError, ConfigError) as e:
            log.exception(f"Lookup failed for {query!r} at {result.state}")
            result.error = user_message(e)
        except RatingsError as e:
            log.info(f"Lookup for {query!r} stopped at {result.state}: {e}")
            result.error = user_message(e)
        except Exception as e:
            log.exception(f"Unexpected failure for {query!r} at {result.state}")
            result.error = user_message(e)
        log.debug(f"{result.state} -> {LookupState.RENDERED}")
        return result

    def list_movies(self) -> list[MovieRecord]:
        return self.db.list_all()

    def clear(self) -> int:
        return self.db.clear()
