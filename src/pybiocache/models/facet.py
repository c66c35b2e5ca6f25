"""Facet filter models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Facet(BaseModel):
    """A single filter criterion.

    ``fq`` is the canonical ``field:value`` filter fragment; ``label`` is
    for display only. Two facets are equal when their ``fq`` matches.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str = ""
    fq: str

    @field_validator("fq")
    @classmethod
    def _fq_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("fq must be non-empty")
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Facet):
            return NotImplemented
        return self.fq == other.fq

    def __hash__(self) -> int:
        return hash(self.fq)


class FacetSelection(BaseModel):
    """Payload emitted by the renderer when a facet entry is clicked."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    field_name: str
    fq: str
    label: str = ""
    count: int | None = None

    def to_facet(self) -> Facet:
        return Facet(label=f"{self.field_name}: {self.label}", fq=self.fq)


def coerce_facet(value: Facet | FacetSelection | dict[str, Any]) -> Facet:
    """Accept a :class:`Facet`, a :class:`FacetSelection` or a plain mapping."""
    if isinstance(value, Facet):
        return value
    if isinstance(value, FacetSelection):
        return value.to_facet()
    if "field_name" in value or "fieldName" in value:
        data = dict(value)
        data.setdefault("field_name", data.pop("fieldName", ""))
        return FacetSelection.model_validate(data).to_facet()
    return Facet.model_validate(value)
