"""Tests for api/imdb.py -- RapidAPI client with mocked HTTP."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from imdb_ratings.api.imdb import ImdbClient, unwrap_results
from imdb_ratings.config import RatingsConfig
from imdb_ratings.errors import ConfigError, TransportError


@pytest.fixture
def client():
    config = RatingsConfig(_env_file=None, rapidapi_key="secret")
    return ImdbClient(config)


def _json_response(payload, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    return resp


class TestUnwrapResults:
    def test_bare_list(self):
        assert unwrap_results([{"id": "tt1"}]) == [{"id": "tt1"}]

    @pytest.mark.parametrize("key", ["d", "results", "titles", "items"])
    def test_envelope_keys(self, key):
        assert unwrap_results({key: [{"id": "tt1"}]}) == [{"id": "tt1"}]

    def test_first_list_key_wins(self):
        data = {"d": "not-a-list", "results": [{"id": "tt1"}], "items": [{"id": "tt2"}]}
        assert unwrap_results(data) == [{"id": "tt1"}]

    @pytest.mark.parametrize("data", [{}, {"message": "x"}, None, "text", 3])
    def test_unknown_shape_is_empty(self, data):
        assert unwrap_results(data) == []


class TestSearch:
    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_returns_candidates(self, mock_get, client):
        mock_get.return_value = _json_response(
            {"d": [{"l": "Up", "id": "tt1049413", "y": 2009}]}
        )
        results = client.search("  up ")
        assert results == [{"l": "Up", "id": "tt1049413", "y": 2009}]

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_request_shape(self, mock_get, client):
        mock_get.return_value = _json_response([])
        client.search("  the matrix ")

        url = mock_get.call_args[0][0]
        kwargs = mock_get.call_args.kwargs
        assert url == "https://imdb236.p.rapidapi.com/api/imdb/autocomplete"
        assert kwargs["params"] == {"query": "the matrix"}
        assert kwargs["headers"]["x-rapidapi-key"] == "secret"
        assert kwargs["headers"]["x-rapidapi-host"] == "imdb236.p.rapidapi.com"
        assert kwargs["timeout"] == 30.0

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_http_status_error(self, mock_get, client):
        request = httpx.Request("GET", "https://imdb236.p.rapidapi.com/api/imdb/x")
        mock_get.return_value = httpx.Response(429, text="slow down", request=request)
        with pytest.raises(TransportError) as exc_info:
            client.search("up")
        assert exc_info.value.status_code == 429
        assert "429" in str(exc_info.value)

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_network_error(self, mock_get, client):
        mock_get.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(TransportError):
            client.search("up")

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_invalid_host(self, mock_get, client):
        mock_get.side_effect = httpx.InvalidURL("Invalid port: 'xx'")
        with pytest.raises(TransportError) as exc_info:
            client.search("up")
        assert "Cannot build request" in str(exc_info.value)

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_non_ascii_header(self, mock_get, client):
        mock_get.side_effect = UnicodeEncodeError(
            "ascii", "ключ", 0, 4, "ordinal not in range(128)"
        )
        with pytest.raises(TransportError):
            client.search("up")

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_non_json_body(self, mock_get, client):
        resp = _json_response(None)
        resp.json.side_effect = ValueError("Expecting value")
        resp.text = "<html>oops</html>"
        mock_get.return_value = resp
        with pytest.raises(TransportError) as exc_info:
            client.search("up")
        assert "Non-JSON" in str(exc_info.value)

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_missing_api_key(self, mock_get):
        client = ImdbClient(RatingsConfig(_env_file=None, rapidapi_key=""))
        with pytest.raises(ConfigError):
            client.search("up")
        mock_get.assert_not_called()


class TestDetails:
    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_returns_object(self, mock_get, client):
        mock_get.return_value = _json_response({"primaryTitle": "Up"})
        assert client.details("tt1049413") == {"primaryTitle": "Up"}
        assert mock_get.call_args[0][0].endswith("/api/imdb/tt1049413")

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_id_is_url_encoded(self, mock_get, client):
        mock_get.return_value = _json_response({})
        client.details("tt1/../x")
        assert mock_get.call_args[0][0].endswith("/api/imdb/tt1%2F..%2Fx")

    @patch("imdb_ratings.api.imdb.httpx.get")
    def test_non_object_body_is_empty(self, mock_get, client):
        mock_get.return_value = _json_response(["unexpected"])
        assert client.details("tt1049413") == {}
