"""Exact-phrase full-text search against the regional search service."""

from __future__ import annotations

import logging
from typing import Any, List
from urllib.parse import quote

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from procfinder.errors import SearchRequestError
from procfinder.models import SearchHit

LOGGER = logging.getLogger(__name__)

# Restricts results to unpublished processes.
UNPUBLISHED_PROCESS_TYPE = 1
DEFAULT_MATCH_TYPE = 0
FIRST_PAGE = 1


class SearchHitPayload(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(default="", validation_alias=AliasChoices("Name", "name"))
    process_unique_id: str = Field(
        default="",
        validation_alias=AliasChoices("ProcessUniqueId", "processUniqueId", "process_unique_id"),
    )
    item_url: str = Field(default="", validation_alias=AliasChoices("ItemUrl", "itemUrl", "item_url"))
    entity_type: str = Field(
        default="", validation_alias=AliasChoices("EntityType", "entityType", "entity_type")
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_hit(self) -> SearchHit:
        return SearchHit(
            name=self.name,
            process_unique_id=self.process_unique_id,
            item_url=self.item_url,
            entity_type=self.entity_type,
        )


class SearchResponse(BaseModel):
    success: Any = Field(default=False, validation_alias=AliasChoices("success", "Success"))
    response: Any = Field(default=None, validation_alias=AliasChoices("response", "Response"))


def quote_phrase(document_name: str) -> str:
    """Wrap the name in double quotes and percent-encode it for exact matching."""
    return quote(f'"{document_name}"', safe="")


def build_search_url(endpoint: str, document_name: str) -> str:
    return (
        f"{endpoint.rstrip('/')}/fullsearch"
        f"?SearchCriteria={quote_phrase(document_name)}"
        f"&IncludedTypes={UNPUBLISHED_PROCESS_TYPE}"
        f"&SearchMatchType={DEFAULT_MATCH_TYPE}"
        f"&pageNumber={FIRST_PAGE}"
    )


def parse_hits(payload: Any) -> List[SearchHit]:
    """Turn a search response body into hits, whether it holds one object or many."""
    try:
        body = SearchResponse.model_validate(payload)
    except ValidationError:
        LOGGER.debug("Search response is not an object: %s", type(payload).__name__)
        return []
    if not body.success or not body.response:
        LOGGER.debug("Search response unsuccessful or empty (success=%r)", body.success)
        return []

    items = body.response if isinstance(body.response, list) else [body.response]
    hits: List[SearchHit] = []
    for item in items:
        if item == {}:
            continue
        try:
            hits.append(SearchHitPayload.model_validate(item).to_hit())
        except ValidationError as exc:
            LOGGER.warning("Skipping malformed search hit: %s", exc.errors()[0]["msg"])
    return hits


class DocumentSearchClient:
    """Runs one exact-phrase search per document name.

    Failures never leave :meth:`search`; they are logged and reported as an
    empty hit list so one bad document cannot stop a batch.
    """

    def __init__(self, endpoint: str, search_token: str, client: httpx.Client) -> None:
        self.endpoint = endpoint
        self.client = client
        self._headers = {"Authorization": f"Bearer {search_token}"}

    def search(self, document_name: str) -> List[SearchHit]:
        try:
            payload = self._fetch(document_name)
        except SearchRequestError as exc:
            LOGGER.warning("Search for %r failed: %s", document_name, exc)
            LOGGER.debug("Search failure detail", exc_info=exc.cause)
            return []
        hits = parse_hits(payload)
        LOGGER.debug("Search for %r returned %d hit(s)", document_name, len(hits))
        return hits

    def _fetch(self, document_name: str) -> Any:
        url = build_search_url(self.endpoint, document_name)
        LOGGER.debug("GET %s", url)
        try:
            response = self.client.get(url, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise SearchRequestError(f"HTTP {exc.response.status_code}", cause=exc) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise SearchRequestError(str(exc) or type(exc).__name__, cause=exc) from exc
        except ValueError as exc:
            raise SearchRequestError("response was not valid JSON", cause=exc) from exc
