"""Map a site hostname to the search endpoint serving its region."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

LOGGER = logging.getLogger(__name__)

REGIONAL_SEARCH_ENDPOINTS: dict[str, str] = {
    "demo.promapp.com": "https://dmsearch.promapp.io",
    "go.promapp.com": "https://ausearch.promapp.io",
    "us.promapp.com": "https://ussearch.promapp.io",
    "ca.promapp.com": "https://casearch.promapp.io",
    "eu.promapp.com": "https://eusearch.promapp.io",
}


def normalize_site_url(value: str) -> str:
    """Trim the URL and default to https when no scheme was given."""
    url = value.strip().rstrip("/")
    if url and "://" not in url:
        url = f"https://{url}"
    return url


def resolve_search_endpoint(site_url: str) -> str:
    """Return the regional search endpoint for ``site_url``.

    Hosts missing from the table are assumed to serve search themselves, so
    the site URL is returned unchanged.
    """
    hostname = urlparse(site_url).hostname or ""
    endpoint = REGIONAL_SEARCH_ENDPOINTS.get(hostname)
    if endpoint is None:
        LOGGER.info("No regional search endpoint for %s, using the site URL", hostname or site_url)
        return site_url
    LOGGER.debug("Resolved %s to search endpoint %s", hostname, endpoint)
    return endpoint
