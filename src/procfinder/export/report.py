"""Write search results to the CSV report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from procfinder.errors import ReportExportError
from procfinder.models import ResultRow

LOGGER = logging.getLogger(__name__)

REPORT_COLUMNS = ["DocumentName", "ProcessName", "ProcessUniqueId", "ItemUrl", "EntityType"]


def rows_to_frame(rows: Sequence[ResultRow]) -> pd.DataFrame:
    records = [
        {
            "DocumentName": row.document_name,
            "ProcessName": row.process_name,
            "ProcessUniqueId": row.process_unique_id,
            "ItemUrl": row.item_url,
            "EntityType": row.entity_type,
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=REPORT_COLUMNS)


def write_report(rows: Sequence[ResultRow], path: Path) -> Path:
    """Write ``rows`` to ``path`` in report column order."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        rows_to_frame(rows).to_csv(path, index=False, encoding="utf-8")
    except OSError as exc:
        raise ReportExportError(f"Unable to write report {path}: {exc}", cause=exc) from exc
    LOGGER.info("Wrote %d row(s) to %s", len(rows), path)
    return path
