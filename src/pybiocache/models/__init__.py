"""Data models for Biocache responses and facet state."""

from pybiocache.models._base import BiocacheBaseModel
from pybiocache.models.display import (
    ActionKind,
    GroupedFacetList,
    GroupedField,
    RenderContent,
    UserAction,
    filter_for_label,
)
from pybiocache.models.facet import Facet, FacetSelection, coerce_facet
from pybiocache.models.facet_groups import FacetGroup, FacetGroupField
from pybiocache.models.search import ActiveFacet, FacetCountResult, FacetResult, FieldResultEntry

__all__ = [
    "ActionKind",
    "ActiveFacet",
    "BiocacheBaseModel",
    "Facet",
    "FacetCountResult",
    "FacetGroup",
    "FacetGroupField",
    "FacetResult",
    "FacetSelection",
    "FieldResultEntry",
    "GroupedFacetList",
    "GroupedField",
    "RenderContent",
    "UserAction",
    "coerce_facet",
    "filter_for_label",
]
