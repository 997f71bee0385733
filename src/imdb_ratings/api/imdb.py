"""IMDb metadata client (RapidAPI imdb236 proxy).

Two calls per lookup: autocomplete search for candidates, then a details
fetch for the chosen IMDb id. Bodies are returned as decoded JSON with no
shape guarantees -- see api.extract for field access.
"""

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from ..config import RatingsConfig
from ..errors import ConfigError, TransportError

log = logger.bind(stage="imdb")

# Autocomplete responses wrap the result list under different keys
_RESULT_LIST_KEYS = ("d", "results", "titles", "items")


def unwrap_results(data: Any) -> list[Any]:
    """Return the candidate list from an autocomplete body, or []."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in _RESULT_LIST_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                return value
    return []


class ImdbClient:
    """Thin GET + JSON wrapper around the RapidAPI IMDb endpoints."""

    def __init__(self, config: RatingsConfig) -> None:
        self.config = config

    def _headers(self) -> dict[str, str]:
        if not self.config.rapidapi_key:
            raise ConfigError("RAPIDAPI_KEY is not set")
        return {
            "x-rapidapi-key": self.config.rapidapi_key,
            "x-rapidapi-host": self.config.rapidapi_host,
        }

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        url = f"{self.config.api_base}{path}"
        log.debug(f"GET {url} params={params}")

        try:
            resp = httpx.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.config.http_timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportError(
                f"API {status}: {e.response.text[:200]}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        except (httpx.InvalidURL, ValueError) as e:
            # Bad host or non-ASCII header value, raised before any I/O
            raise TransportError(f"Cannot build request to {url}: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                f"Non-JSON response from {url}: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from e

    def search(self, query: str) -> list[Any]:
        """Autocomplete search. Returns zero or more raw candidate dicts."""
        data = self._get("/api/imdb/autocomplete", params={"query": query.strip()})
        results = unwrap_results(data)
        log.debug(f"Autocomplete {query!r}: {len(results)} candidates")
        return results

    def details(self, imdb_id: str) -> dict[str, Any]:
        """Fetch the details record for one IMDb id ({} if not an object)."""
        data = self._get(f"/api/imdb/{quote(imdb_id, safe='')}")
        if not isinstance(data, dict):
            log.warning(f"Details for {imdb_id} is not an object, ignoring body")
            return {}
        return data
