"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

DEFAULT_INPUT_COLUMN = "DocumentName"
DEFAULT_OUTPUT_PREFIX = "UnpublishedProcesses_Results"


@dataclass(slots=True)
class AppConfig:
    delay_seconds: float = 0.5
    input_column: str = DEFAULT_INPUT_COLUMN
    output_prefix: str = DEFAULT_OUTPUT_PREFIX
    timestamp_format: str = "%Y%m%d_%H%M%S"

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")

    def resolve_output_path(self, input_path: Path, now: datetime | None = None) -> Path:
        """Place the report beside the input file, stamped with ``now``."""
        stamp = (now or datetime.now()).strftime(self.timestamp_format)
        return Path(input_path).parent / f"{self.output_prefix}_{stamp}.csv"
