"""Tests for models.py -- record type, lookup states."""

import dataclasses

import pytest

from imdb_ratings.models import (
    STATE_ORDER,
    LookupResult,
    LookupState,
    MovieRecord,
)


class TestMovieRecord:
    def test_defaults(self):
        record = MovieRecord(imdb_id="tt1049413", title="Up")
        assert record.year == ""
        assert record.synopsis == "No synopsis available."
        assert record.rating == "N/A"

    def test_to_dict(self):
        record = MovieRecord(imdb_id="tt1", title="Up", year="2009")
        assert record.to_dict() == {
            "imdb_id": "tt1",
            "title": "Up",
            "year": "2009",
            "synopsis": "No synopsis available.",
            "rating": "N/A",
        }

    def test_frozen(self):
        record = MovieRecord(imdb_id="tt1", title="Up")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.title = "Down"  # type: ignore[misc]


class TestLookupState:
    def test_order(self):
        assert STATE_ORDER[0] == LookupState.START
        assert STATE_ORDER[-1] == LookupState.RENDERED
        assert STATE_ORDER.index(LookupState.BEST_SELECTED) < STATE_ORDER.index(
            LookupState.DETAILS_FETCHED
        )

    def test_from_string(self):
        assert LookupState("persisted") is LookupState.PERSISTED


class TestLookupResult:
    def test_ok(self):
        assert LookupResult(record=MovieRecord(imdb_id="tt1", title="Up")).ok
        assert not LookupResult(error="No matching movie found.").ok
