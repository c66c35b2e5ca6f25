"""Display-side models handed to and received from the renderer."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pybiocache.models.facet import Facet, FacetSelection
from pybiocache.models.search import FieldResultEntry


def filter_for_label(field_name: str, label: str | None) -> str:
    """Filter fragment selecting *label* in *field_name*, for entries the service sent without ``fq``."""
    return f'{field_name}:"{label or ""}"'


class GroupedField(BaseModel):
    """A facet field placed under a display group."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    """Raw field name as reported by the search service."""
    display_name: str
    """Formatted field name for display."""
    field_result: list[FieldResultEntry] = Field(default_factory=list)
    """Entries with a positive count, formatted labels and a filter built from the raw label."""

    def selection(self, entry: FieldResultEntry) -> FacetSelection:
        """Build the click payload for one of this field's entries."""
        fq = entry.fq or filter_for_label(self.field_name, entry.label)
        return FacetSelection(
            field_name=self.display_name,
            fq=fq,
            label=entry.label or "",
            count=entry.count,
        )


GroupedFacetList = dict[str, list[GroupedField]]


class RenderContent(BaseModel):
    """Everything a renderer needs to draw the facet panel."""

    model_config = ConfigDict(frozen=True)

    grouped_facets: GroupedFacetList = Field(default_factory=dict)
    selected_facets: list[Facet] = Field(default_factory=list)
    expanded_groups: dict[str, bool] = Field(default_factory=dict)


class ActionKind(enum.StrEnum):
    FACET_CLICKED = "facet_clicked"
    SELECTED_FACET_CLICKED = "selected_facet_clicked"
    GROUP_TOGGLED = "group_toggled"
    CLEAR_ALL_CLICKED = "clear_all_clicked"


class UserAction(BaseModel):
    """A discrete user action reported back by the renderer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ActionKind
    selection: FacetSelection | None = None
    facet: Facet | None = None
    group: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> UserAction:
        if self.kind == ActionKind.FACET_CLICKED and self.selection is None and self.facet is None:
            raise ValueError("facet_clicked requires a selection or facet")
        if self.kind == ActionKind.SELECTED_FACET_CLICKED and self.facet is None:
            raise ValueError("selected_facet_clicked requires a facet")
        if self.kind == ActionKind.GROUP_TOGGLED and not self.group:
            raise ValueError("group_toggled requires a group")
        return self
