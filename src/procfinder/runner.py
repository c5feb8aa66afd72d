"""Run orchestration: authenticate, search every document, export the report."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx

from procfinder.api.auth import authenticate, client_scope, get_search_token
from procfinder.api.regions import resolve_search_endpoint
from procfinder.api.search import DocumentSearchClient
from procfinder.config import AppConfig
from procfinder.errors import ProcFinderError
from procfinder.export.report import write_report
from procfinder.ingestion.csv_loader import load_document_queries
from procfinder.models import Credentials, DocumentQuery, ResultRow, RunContext

LOGGER = logging.getLogger(__name__)


class RunStage(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    EXCHANGING_TOKEN = "exchanging_token"
    RESOLVING_ENDPOINT = "resolving_endpoint"
    LOADING_INPUT = "loading_input"
    SEARCHING = "searching"
    EXPORTING = "exporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class RunFailure:
    """Why a run stopped, and in which stage."""

    stage: RunStage
    message: str
    cause: Optional[ProcFinderError] = None


@dataclass(slots=True)
class RunResult:
    stage: RunStage = RunStage.IDLE
    queries: List[DocumentQuery] = field(default_factory=list)
    rows: List[ResultRow] = field(default_factory=list)
    output_path: Optional[Path] = None
    failure: Optional[RunFailure] = None

    @property
    def ok(self) -> bool:
        return self.stage is RunStage.DONE

    @property
    def total_matches(self) -> int:
        return len(self.rows)

    def breakdown(self) -> Dict[str, int]:
        """Match count per document name, in the order documents were searched."""
        counts: Dict[str, int] = {}
        for row in self.rows:
            counts[row.document_name] = counts.get(row.document_name, 0) + 1
        return counts

    def fail(self, stage: RunStage, exc: ProcFinderError) -> "RunResult":
        self.failure = RunFailure(stage=stage, message=str(exc), cause=exc)
        self.stage = RunStage.FAILED
        return self


ProgressCallback = Callable[[int, int, DocumentQuery, int], None]


class Runner:
    """Sequences one complete search run.

    Fatal problems (login, token exchange, input file, report export) end the run with a
    ``FAILED`` result rather than an exception; individual searches that fail
    simply contribute no rows.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        client: httpx.Client | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.client = client
        self.on_progress = on_progress

    def run(self, credentials: Credentials, input_path: Path) -> RunResult:
        with client_scope(self.client) as http:
            return self._run(http, credentials, Path(input_path))

    def _run(self, http: httpx.Client, credentials: Credentials, input_path: Path) -> RunResult:
        result = RunResult()

        result.stage = RunStage.AUTHENTICATING
        try:
            bearer = authenticate(
                credentials.site_url,
                credentials.tenant_id,
                credentials.username,
                credentials.password,
                client=http,
            )
        except ProcFinderError as exc:
            LOGGER.error("Authentication failed: %s", exc)
            return result.fail(RunStage.AUTHENTICATING, exc)

        result.stage = RunStage.EXCHANGING_TOKEN
        try:
            search_token = get_search_token(
                credentials.site_url, credentials.tenant_id, bearer, client=http
            )
        except ProcFinderError as exc:
            LOGGER.error("Search token exchange failed: %s", exc)
            return result.fail(RunStage.EXCHANGING_TOKEN, exc)

        result.stage = RunStage.RESOLVING_ENDPOINT
        context = RunContext(
            site_url=credentials.site_url,
            tenant_id=credentials.tenant_id,
            search_token=search_token,
            endpoint=resolve_search_endpoint(credentials.site_url),
        )

        result.stage = RunStage.LOADING_INPUT
        try:
            result.queries = load_document_queries(input_path, column=self.config.input_column)
        except ProcFinderError as exc:
            LOGGER.error("Unable to load input: %s", exc)
            return result.fail(RunStage.LOADING_INPUT, exc)

        result.stage = RunStage.SEARCHING
        result.rows = self.search_all(context, result.queries, http)

        result.stage = RunStage.EXPORTING
        if result.rows:
            output_path = self.config.resolve_output_path(input_path, datetime.now())
            try:
                result.output_path = write_report(result.rows, output_path)
            except ProcFinderError as exc:
                LOGGER.error("Export failed: %s", exc)
                return result.fail(RunStage.EXPORTING, exc)
        else:
            LOGGER.info("No unpublished processes found, skipping report")

        result.stage = RunStage.DONE
        return result

    def search_all(
        self, context: RunContext, queries: List[DocumentQuery], http: httpx.Client
    ) -> List[ResultRow]:
        """Search each query in turn, pausing between consecutive requests."""
        searcher = DocumentSearchClient(context.endpoint, context.search_token, http)
        rows: List[ResultRow] = []
        total = len(queries)
        for position, query in enumerate(queries, start=1):
            if position > 1 and self.config.delay_seconds:
                time.sleep(self.config.delay_seconds)
            LOGGER.debug("[%d/%d] Searching for %s", position, total, query.document_name)
            hits = searcher.search(query.document_name)
            rows.extend(ResultRow.from_hit(query, hit) for hit in hits)
            if self.on_progress is not None:
                self.on_progress(position, total, query, len(hits))
        return rows
