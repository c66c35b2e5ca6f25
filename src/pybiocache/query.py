"""Query string composition.

A Biocache query string is an ``&``-separated list of parameters with a
mandatory ``q=`` term. Selected facets are appended as ``fq=`` filter
parameters, one per facet, in selection order.
"""

from __future__ import annotations

from collections.abc import Iterable

from pybiocache.exceptions import BiocacheConfigError
from pybiocache.models.facet import Facet

FILTER_PREFIX = "fq="


def build_query(base_query: str, selected_facets: Iterable[Facet]) -> str:
    """Append ``&fq=<fq>`` to *base_query* for every selected facet.

    The input is assumed to be distinct already; no deduplication happens here.
    """
    query = base_query
    for facet in selected_facets:
        query += f"&{FILTER_PREFIX}{facet.fq}"
    return query


def strip_filter_queries(base_query: str) -> str:
    """Remove every ``fq=`` parameter from *base_query*."""
    params = [param for param in base_query.split("&") if not param.startswith(FILTER_PREFIX)]
    return "&".join(params).rstrip("&")


def validate_base_query(base_query: str | None) -> str:
    """Return *base_query* unchanged, or raise if it has no usable ``q=`` term."""
    if not base_query or not base_query.strip() or base_query.strip() == "q=":
        raise BiocacheConfigError("You must define the base query to use to populate the map.")
    params = base_query.lstrip("?").split("&")
    if not any(param.startswith("q=") and len(param) > 2 for param in params):
        raise BiocacheConfigError(f"Base query must include a 'q=' term: {base_query!r}")
    return base_query
