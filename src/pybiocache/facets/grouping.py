"""Map raw facet fields to their display group."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pybiocache.models.facet_groups import FacetGroup

_logger = logging.getLogger(__name__)


def build_field_map(groups: Iterable[FacetGroup]) -> dict[str, str]:
    """Return ``{field: group title}`` for every field of every group.

    A field listed by more than one group maps to the last group that lists
    it. An empty schema yields an empty map; callers treat every field as
    ungrouped in that case.
    """
    field_map: dict[str, str] = {}
    for group in groups:
        for facet in group.facets:
            if not facet.field:
                continue
            previous = field_map.get(facet.field)
            if previous is not None and previous != group.title:
                _logger.debug("Facet field %s moved from group %r to %r", facet.field, previous, group.title)
            field_map[facet.field] = group.title
    return field_map
