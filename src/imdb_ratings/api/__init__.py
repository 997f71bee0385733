"""External API client and match-and-normalize helpers.

Submodules:
    imdb    -- RapidAPI IMDb client (autocomplete search, details)
    extract -- Fallback-chain field extraction from raw payloads
    search  -- Candidate scoring and best-match selection
"""
