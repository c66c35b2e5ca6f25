"""Facet count response returned by ``/ws/occurrences/search.json``."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pybiocache.models._base import BiocacheBaseModel, dict_items, dict_values, safe_int, safe_str


class FieldResultEntry(BiocacheBaseModel):
    """One value of a facet field with its occurrence count."""

    label: str | None = None
    count: int = 0
    fq: str | None = None
    """Ready-made filter fragment, when the service supplies one."""
    i18n_code: str | None = None

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        parsed = safe_int(value)
        return parsed if parsed is not None else 0

    @field_validator("label", "fq", "i18n_code", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)


class FacetResult(BiocacheBaseModel):
    """Counts for every value of one facet field."""

    field_name: str = ""
    field_result: list[FieldResultEntry] = Field(default_factory=list)

    @field_validator("field_name", mode="before")
    @classmethod
    def _coerce_field_name(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("field_result", mode="before")
    @classmethod
    def _drop_malformed(cls, value: Any) -> list[dict[str, Any]]:
        return dict_items(value)


class ActiveFacet(BiocacheBaseModel):
    """A filter the service reports as already implied by the query."""

    name: str = ""
    value: str = ""
    display_name: str | None = None

    @field_validator("name", "value", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("display_name", mode="before")
    @classmethod
    def _coerce_display_name(cls, value: Any) -> str | None:
        return safe_str(value)


class FacetCountResult(BiocacheBaseModel):
    """Facet counts and active facets for a query."""

    total_records: int = 0
    facet_results: list[FacetResult] = Field(default_factory=list)
    active_facet_map: dict[str, ActiveFacet] = Field(default_factory=dict)

    @field_validator("total_records", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> int:
        parsed = safe_int(value)
        return parsed if parsed is not None else 0

    @field_validator("facet_results", mode="before")
    @classmethod
    def _drop_malformed_results(cls, value: Any) -> list[dict[str, Any]]:
        return dict_items(value)

    @field_validator("active_facet_map", mode="before")
    @classmethod
    def _drop_malformed_active(cls, value: Any) -> dict[str, dict[str, Any]]:
        return dict_values(value)
