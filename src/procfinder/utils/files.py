"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path


def expand_input_path(value: str | Path) -> Path:
    """Expand ``~`` and strip the quotes some shells add when pasting a path."""
    text = str(value).strip().strip('"').strip("'")
    return Path(text).expanduser()
