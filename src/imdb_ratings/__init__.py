"""IMDb Ratings -- look up a movie by title, pick the best match, cache the result.

Core modules:
    config     -- Configuration via pydantic-settings (RAPIDAPI_KEY, DATA_DIR, ...)
                  and loguru setup.
    cli        -- Click CLI (search, list, clear).
    lookup     -- Request orchestration and the single error boundary. Turns
                  every failure into a short user-facing message.
    normalize  -- Builds the canonical MovieRecord from candidate + details.
    movie_db   -- SQLite movie cache keyed by IMDb id (upsert, list, clear).
    models     -- MovieRecord, LookupState, LookupResult, defaults.
    errors     -- Exception taxonomy with per-kind user messages.

Subpackages:
    api -- RapidAPI IMDb client, fallback-chain field extraction, candidate scoring
"""
