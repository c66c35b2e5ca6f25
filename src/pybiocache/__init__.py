"""pybiocache - Async facet-driven query sync for Biocache occurrence maps."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybiocache")
except PackageNotFoundError:
    __version__ = "0+local"
from pybiocache.client import OccurrenceMap
from pybiocache.config import OccurrenceMapConfig, PointStyle
from pybiocache.exceptions import (
    BiocacheConfigError,
    BiocacheDataShapeError,
    BiocacheError,
    BiocacheFetchError,
)
from pybiocache.facets import build_field_map, compose_facet_list, format_facet_name
from pybiocache.models import (
    ActionKind,
    ActiveFacet,
    Facet,
    FacetCountResult,
    FacetGroup,
    FacetResult,
    FacetSelection,
    FieldResultEntry,
    GroupedField,
    RenderContent,
    UserAction,
)
from pybiocache.overlay import WmsLayerSpec
from pybiocache.query import build_query, strip_filter_queries
from pybiocache.state.selection import reconcile_selection
from pybiocache.state.store import SyncState, SyncStatus, UpdateOutcome

__all__ = [
    "__version__",
    "ActionKind",
    "ActiveFacet",
    "BiocacheConfigError",
    "BiocacheDataShapeError",
    "BiocacheError",
    "BiocacheFetchError",
    "Facet",
    "FacetCountResult",
    "FacetGroup",
    "FacetResult",
    "FacetSelection",
    "FieldResultEntry",
    "GroupedField",
    "OccurrenceMap",
    "OccurrenceMapConfig",
    "PointStyle",
    "RenderContent",
    "SyncState",
    "SyncStatus",
    "UpdateOutcome",
    "UserAction",
    "WmsLayerSpec",
    "build_field_map",
    "build_query",
    "compose_facet_list",
    "format_facet_name",
    "reconcile_selection",
    "strip_filter_queries",
]
