"""Turn facet counts into the grouped list shown to users."""

from __future__ import annotations

import re
from collections.abc import Mapping

from pybiocache._constants import UNGROUPED_TITLE
from pybiocache.models.display import GroupedFacetList, GroupedField, filter_for_label
from pybiocache.models.search import FacetCountResult, FieldResultEntry

_NON_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-\\/.]")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SPACE_RUNS = re.compile(r" +")


def format_facet_name(name: str | None) -> str:
    """Format a raw field name or value for display.

    ``"basisOfRecord"`` becomes ``"Basis Of Record"`` and
    ``"data_resource.name"`` becomes ``"Data resource.name"``. Missing
    names format to ``"Unknown"``.
    """
    if not name:
        return "Unknown"
    formatted = _NON_NAME_CHARS.sub(" ", name)
    formatted = _CAMEL_BOUNDARY.sub(r"\1 \2", formatted)
    formatted = _SPACE_RUNS.sub(" ", formatted)
    return formatted[0].upper() + formatted[1:]


def _visible_entries(field_name: str, entries: list[FieldResultEntry]) -> list[FieldResultEntry]:
    # fq comes from the raw label; the display label is reformatted
    return [
        entry.model_copy(
            update={
                "label": format_facet_name(entry.label),
                "fq": entry.fq or filter_for_label(field_name, entry.label),
            }
        )
        for entry in entries
        if entry.count > 0
    ]


def compose_facet_list(
    field_map: Mapping[str, str],
    count_result: FacetCountResult,
    *,
    exclude_singles: bool,
) -> GroupedFacetList:
    """Group the fields of *count_result* by their display group.

    Entries with a zero count are dropped. With *exclude_singles* set, a
    field left with a single entry is hidden; selecting or clearing that
    facet is unaffected. Fields absent from *field_map* land in the
    ``"Unknown"`` group.
    """
    grouped: GroupedFacetList = {}
    for facet in count_result.facet_results:
        entries = _visible_entries(facet.field_name, facet.field_result)
        if len(entries) <= 1 and exclude_singles:
            continue

        title = field_map.get(facet.field_name) or UNGROUPED_TITLE
        grouped.setdefault(title, []).append(
            GroupedField(
                field_name=facet.field_name,
                display_name=format_facet_name(facet.field_name),
                field_result=entries,
            )
        )
    return grouped
