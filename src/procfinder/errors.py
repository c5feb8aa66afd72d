"""Exception hierarchy for ProcFinder."""

from __future__ import annotations


class ProcFinderError(Exception):
    """Base class for all ProcFinder errors."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class AuthenticationError(ProcFinderError):
    """The OAuth2 password grant did not yield an access token."""


class TokenExchangeError(ProcFinderError):
    """The bearer token could not be exchanged for a search token."""


class SearchRequestError(ProcFinderError):
    """A single full-text search request failed."""


class InputValidationError(ProcFinderError):
    """The input file is missing, unreadable or lacks the required column."""


class ReportExportError(ProcFinderError):
    """The results report could not be written."""
