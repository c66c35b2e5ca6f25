"""Occurrence search endpoint, used for facet counts.

Endpoint:
  - /ws/occurrences/search.json?<query> (single request)
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from pybiocache._constants import SEARCH_ENDPOINT
from pybiocache._transport import Transport
from pybiocache.exceptions import BiocacheDataShapeError
from pybiocache.models.search import FacetCountResult


def parse_facet_counts(body: Any) -> FacetCountResult:
    """Parse a search body into a :class:`FacetCountResult`.

    Missing or malformed ``facetResults``, ``fieldResult`` and
    ``activeFacetMap`` members become empty collections, so an empty object
    parses to an empty result.

    Raises
    ------
    BiocacheDataShapeError
        If the body is not a JSON object or cannot be read as a search result.
    """
    if not isinstance(body, dict):
        raise BiocacheDataShapeError(
            f"Expected a search result object, got {type(body).__name__}",
            endpoint=SEARCH_ENDPOINT,
        )
    try:
        return FacetCountResult.model_validate(body)
    except ValidationError as exc:
        raise BiocacheDataShapeError(
            f"Malformed search result: {exc.error_count()} validation errors",
            endpoint=SEARCH_ENDPOINT,
        ) from exc


async def fetch_facet_counts(transport: Transport, query: str) -> FacetCountResult:
    """Run *query* against the search service and return its facet counts."""
    body = await transport.get_json(SEARCH_ENDPOINT, query)
    return parse_facet_counts(body)
