"""ProcFinder - find unpublished processes that reference documents."""

__version__ = "0.1.0"
