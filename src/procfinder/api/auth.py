"""OAuth2 password grant and search-service token exchange."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import ContextManager

import httpx
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from procfinder.errors import AuthenticationError, TokenExchangeError

LOGGER = logging.getLogger(__name__)

SEARCH_TOKEN_SUCCESS = "Success"


class TokenResponse(BaseModel):
    access_token: str = Field(min_length=1)


class SearchServiceTokenResponse(BaseModel):
    status: str = Field(default="", validation_alias=AliasChoices("Status", "status"))
    message: str | None = Field(default=None, validation_alias=AliasChoices("Message", "message"))


def client_scope(client: httpx.Client | None) -> ContextManager[httpx.Client]:
    """Use ``client`` as-is, or open a short-lived one that is closed afterwards."""
    if client is not None:
        return nullcontext(client)
    return httpx.Client()


def authenticate(
    base_url: str,
    tenant_id: str,
    username: str,
    password: str,
    *,
    client: httpx.Client | None = None,
) -> str:
    """Run the password grant and return the bearer access token."""
    url = f"{base_url.rstrip('/')}/{tenant_id}/oauth2/token"
    LOGGER.debug("Requesting access token from %s for %s", url, username)
    form = {"grant_type": "password", "username": username, "password": password}
    try:
        with client_scope(client) as http:
            response = http.post(url, data=form)
            response.raise_for_status()
            payload = response.json()
        token = TokenResponse.model_validate(payload)
    except httpx.HTTPStatusError as exc:
        raise AuthenticationError(
            f"Authentication failed with HTTP {exc.response.status_code}", cause=exc
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise AuthenticationError(f"Authentication request failed: {exc}", cause=exc) from exc
    except ValidationError as exc:
        raise AuthenticationError("Token response did not contain an access token", cause=exc) from exc
    except ValueError as exc:
        raise AuthenticationError("Token response was not valid JSON", cause=exc) from exc
    return token.access_token


def get_search_token(
    base_url: str,
    tenant_id: str,
    bearer_token: str,
    *,
    client: httpx.Client | None = None,
) -> str:
    """Exchange the bearer token for a token accepted by the search service."""
    url = f"{base_url.rstrip('/')}/{tenant_id}/search/GetSearchServiceToken"
    LOGGER.debug("Requesting search service token from %s", url)
    headers = {"Authorization": f"Bearer {bearer_token}"}
    try:
        with client_scope(client) as http:
            response = http.get(url, headers=headers)
            response.raise_for_status()
            payload = response.json()
        result = SearchServiceTokenResponse.model_validate(payload)
    except httpx.HTTPStatusError as exc:
        raise TokenExchangeError(
            f"Search token request failed with HTTP {exc.response.status_code}", cause=exc
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise TokenExchangeError(f"Search token request failed: {exc}", cause=exc) from exc
    except ValidationError as exc:
        raise TokenExchangeError("Unexpected search token response", cause=exc) from exc
    except ValueError as exc:
        raise TokenExchangeError("Search token response was not valid JSON", cause=exc) from exc

    LOGGER.debug("Search token response status: %r", result.status)
    if result.status != SEARCH_TOKEN_SUCCESS:
        raise TokenExchangeError(f"Search token request returned status {result.status!r}")
    if not result.message or not result.message.strip():
        raise TokenExchangeError("Search token response contained an empty message")
    return result.message
