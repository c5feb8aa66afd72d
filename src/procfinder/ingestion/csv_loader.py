"""Read the document names to search for from a CSV file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from procfinder.config import DEFAULT_INPUT_COLUMN
from procfinder.errors import InputValidationError
from procfinder.models import DocumentQuery

LOGGER = logging.getLogger(__name__)


def load_document_queries(path: Path, *, column: str = DEFAULT_INPUT_COLUMN) -> List[DocumentQuery]:
    """Return one query per non-blank value of ``column``, in file order.

    Values are kept as text, so names like ``NA`` are searched verbatim.
    """
    path = Path(path)
    if not path.is_file():
        raise InputValidationError(f"Input file not found: {path}")

    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as exc:
        raise InputValidationError(f"Input file is empty: {path}", cause=exc) from exc
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise InputValidationError(f"Unable to read {path}: {exc}", cause=exc) from exc

    if column not in frame.columns:
        raise InputValidationError(
            f"Required column '{column}' not found in {path.name} "
            f"(columns: {', '.join(map(str, frame.columns)) or 'none'})"
        )

    queries = [
        DocumentQuery(document_name=value.strip())
        for value in frame[column]
        if isinstance(value, str) and value.strip()
    ]
    LOGGER.info("Loaded %d document name(s) from %s", len(queries), path)
    return queries
