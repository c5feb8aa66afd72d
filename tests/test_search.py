"""Tests for the document search client."""

from __future__ import annotations

import httpx
import pytest

from procfinder.api.search import (
    DocumentSearchClient,
    build_search_url,
    parse_hits,
    quote_phrase,
)
from procfinder.models import SearchHit

ENDPOINT = "https://ausearch.promapp.io"

HIT = {
    "Name": "Raise an action item",
    "ProcessUniqueId": "p-1",
    "ItemUrl": "https://go.promapp.com/acme/Process/p-1",
    "EntityType": "UnpublishedProcess",
}


class TestQuery:
    """Test query construction."""

    def test_quote_phrase(self) -> None:
        """Should quote and percent-encode the whole phrase."""
        assert quote_phrase("Action Item") == "%22Action%20Item%22"

    def test_quote_phrase_reserved_characters(self) -> None:
        assert quote_phrase("R&D / QA #1") == "%22R%26D%20%2F%20QA%20%231%22"

    def test_build_search_url(self) -> None:
        url = build_search_url(ENDPOINT + "/", "Action Item")

        assert url == (
            "https://ausearch.promapp.io/fullsearch?SearchCriteria=%22Action%20Item%22"
            "&IncludedTypes=1&SearchMatchType=0&pageNumber=1"
        )


class TestParseHits:
    """Test parse_hits function."""

    def test_list_response(self) -> None:
        second = dict(HIT, Name="Second", ProcessUniqueId="p-2")

        hits = parse_hits({"success": True, "response": [HIT, second]})

        assert [hit.process_unique_id for hit in hits] == ["p-1", "p-2"]
        assert hits[0] == SearchHit(
            name="Raise an action item",
            process_unique_id="p-1",
            item_url="https://go.promapp.com/acme/Process/p-1",
            entity_type="UnpublishedProcess",
        )

    def test_single_object_response(self) -> None:
        """Should treat a lone object as one hit."""
        hits = parse_hits({"success": True, "response": HIT})

        assert len(hits) == 1
        assert hits[0].name == "Raise an action item"

    def test_empty_list_response(self) -> None:
        assert parse_hits({"success": True, "response": []}) == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"success": False, "response": [HIT]},
            {"success": True},
            {"success": True, "response": None},
            {"response": [HIT]},
            [HIT],
            "oops",
        ],
    )
    def test_unsuccessful_or_missing(self, payload) -> None:
        """Should yield no hits instead of failing."""
        assert parse_hits(payload) == []

    def test_camel_case_fields_and_nulls(self) -> None:
        hits = parse_hits(
            {
                "success": 1,
                "response": [{"name": "P", "processUniqueId": 42, "itemUrl": None, "entityType": "x"}],
            }
        )

        assert hits == [SearchHit(name="P", process_unique_id="42", item_url="", entity_type="x")]

    def test_empty_object_response(self) -> None:
        """Should not turn an empty object into a blank hit."""
        assert parse_hits({"success": True, "response": {}}) == []

    def test_skips_empty_objects_in_list(self) -> None:
        hits = parse_hits({"success": True, "response": [{}, HIT, {}]})

        assert [hit.process_unique_id for hit in hits] == ["p-1"]

    def test_skips_malformed_entries(self) -> None:
        hits = parse_hits({"success": True, "response": [HIT, "junk", 7]})

        assert len(hits) == 1


class TestDocumentSearchClient:
    """Test DocumentSearchClient class."""

    def test_search_sends_exact_phrase(self, mock_client) -> None:
        """Should request the encoded quoted phrase with the search token."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "response": [HIT]})

        searcher = DocumentSearchClient(ENDPOINT, "search-token", mock_client(handler))
        hits = searcher.search("Action Item")

        assert len(hits) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/fullsearch"
        assert "SearchCriteria=%22Action%20Item%22" in str(request.url)
        assert request.url.params["SearchCriteria"] == '"Action Item"'
        assert request.url.params["IncludedTypes"] == "1"
        assert request.url.params["SearchMatchType"] == "0"
        assert request.url.params["pageNumber"] == "1"
        assert request.headers["authorization"] == "Bearer search-token"

    def test_http_error_yields_no_hits(self, mock_client, caplog: pytest.LogCaptureFixture) -> None:
        """Should absorb server errors and log a warning."""
        client = mock_client(lambda request: httpx.Response(500))
        searcher = DocumentSearchClient(ENDPOINT, "search-token", client)

        with caplog.at_level("WARNING"):
            hits = searcher.search("Broken")

        assert hits == []
        assert "Search for 'Broken' failed" in caplog.text

    def test_network_error_yields_no_hits(self, mock_client) -> None:
        """Should not let connection errors escape."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        searcher = DocumentSearchClient(ENDPOINT, "search-token", mock_client(handler))

        assert searcher.search("Anything") == []

    def test_invalid_json_yields_no_hits(self, mock_client) -> None:
        client = mock_client(lambda request: httpx.Response(200, text="<html/>"))
        searcher = DocumentSearchClient(ENDPOINT, "search-token", client)

        assert searcher.search("Anything") == []

    def test_invalid_endpoint_yields_no_hits(self, mock_client) -> None:
        client = mock_client(lambda request: httpx.Response(200, json={"success": True, "response": [HIT]}))
        searcher = DocumentSearchClient("https://ausearch.promapp.io:abc", "search-token", client)

        assert searcher.search("Anything") == []

    def test_unsuccessful_response_yields_no_hits(self, mock_client) -> None:
        client = mock_client(lambda request: httpx.Response(200, json={"success": False}))
        searcher = DocumentSearchClient(ENDPOINT, "search-token", client)

        assert searcher.search("Anything") == []

    def test_search_token_not_logged(self, mock_client, caplog: pytest.LogCaptureFixture) -> None:
        client = mock_client(lambda request: httpx.Response(200, json={"success": True, "response": []}))
        searcher = DocumentSearchClient(ENDPOINT, "very-secret-token", client)

        with caplog.at_level("DEBUG"):
            searcher.search("Doc")

        assert "very-secret-token" not in caplog.text
