"""Selected-facet list operations.

The selection is an ordered list of :class:`Facet` that is unique by
``fq``. Every helper here returns a new list and leaves its input alone.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pybiocache.facets.compose import format_facet_name
from pybiocache.models.facet import Facet
from pybiocache.models.search import ActiveFacet


def contains_facet(selected: Sequence[Facet], facet: Facet) -> bool:
    return any(existing.fq == facet.fq for existing in selected)


def add_facet(selected: Sequence[Facet], facet: Facet) -> list[Facet]:
    """Append *facet* unless a facet with the same ``fq`` is already selected."""
    if contains_facet(selected, facet):
        return list(selected)
    return [*selected, facet]


def remove_facet(selected: Sequence[Facet], facet: Facet) -> list[Facet]:
    """Drop the first facet whose ``fq`` matches *facet*."""
    remaining = list(selected)
    for index, existing in enumerate(remaining):
        if existing.fq == facet.fq:
            del remaining[index]
            break
    return remaining


def active_to_facet(key: str, active: ActiveFacet) -> Facet:
    """Build the facet implied by one entry of the service's active facet map."""
    name = active.name or key
    return Facet(label=f"{format_facet_name(name)}: {active.value}", fq=f"{name}:{active.value}")


def reconcile_selection(selected: Sequence[Facet], active_facet_map: Mapping[str, ActiveFacet]) -> list[Facet]:
    """Merge server-confirmed facets into *selected*.

    Facets implied by the query itself (for example after a saved query is
    restored) become visible and removable even though the user never
    picked them. Existing entries are kept; nothing is ever removed.
    """
    reconciled = list(selected)
    for key, active in active_facet_map.items():
        if not (active.name or key):
            continue
        reconciled = add_facet(reconciled, active_to_facet(key, active))
    return reconciled
