"""Facet group schema returned by ``/ws/search/grouped/facets``."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pybiocache.models._base import BiocacheBaseModel, dict_items, safe_str


class FacetGroupField(BiocacheBaseModel):
    """A facet field belonging to a group."""

    field: str = ""
    """Raw index field name (e.g. ``"basis_of_record"``)."""
    sort: str | None = None
    description: str | None = None

    @field_validator("field", mode="before")
    @classmethod
    def _coerce_field(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("sort", "description", mode="before")
    @classmethod
    def _coerce_optional(cls, value: Any) -> str | None:
        return safe_str(value)


class FacetGroup(BiocacheBaseModel):
    """A named category bundling related facet fields for display."""

    title: str = ""
    facets: list[FacetGroupField] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("facets", mode="before")
    @classmethod
    def _drop_malformed(cls, value: Any) -> list[dict[str, Any]]:
        return dict_items(value)
