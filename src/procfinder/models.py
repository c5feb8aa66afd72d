"""Core ProcFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Credentials:
    """Login details for one run. Never persisted."""

    site_url: str
    tenant_id: str
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class RunContext:
    """Values established during authentication and shared by every search."""

    site_url: str
    tenant_id: str
    search_token: str = field(repr=False)
    endpoint: str


@dataclass(frozen=True, slots=True)
class DocumentQuery:
    document_name: str


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Unpublished process returned by the search service."""

    name: str
    process_unique_id: str
    item_url: str
    entity_type: str


@dataclass(frozen=True, slots=True)
class ResultRow:
    """One report line: a searched document joined with one of its hits."""

    document_name: str
    process_name: str
    process_unique_id: str
    item_url: str
    entity_type: str

    @classmethod
    def from_hit(cls, query: DocumentQuery, hit: SearchHit) -> "ResultRow":
        return cls(
            document_name=query.document_name,
            process_name=hit.name,
            process_unique_id=hit.process_unique_id,
            item_url=hit.item_url,
            entity_type=hit.entity_type,
        )
