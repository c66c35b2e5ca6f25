"""Facet group schema endpoint.

Endpoint:
  - /ws/search/grouped/facets (single request, no parameters)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pybiocache._constants import FACET_GROUPS_ENDPOINT
from pybiocache._transport import Transport
from pybiocache.exceptions import BiocacheDataShapeError
from pybiocache.models._base import dict_items
from pybiocache.models.facet_groups import FacetGroup

_logger = logging.getLogger(__name__)


def parse_facet_groups(body: Any) -> list[FacetGroup]:
    """Parse the grouped-facets body into :class:`FacetGroup` models.

    Raises
    ------
    BiocacheDataShapeError
        If the body is not a JSON array or a group cannot be read.
    """
    if not isinstance(body, list):
        raise BiocacheDataShapeError(
            f"Expected a list of facet groups, got {type(body).__name__}",
            endpoint=FACET_GROUPS_ENDPOINT,
        )
    try:
        groups = [FacetGroup.model_validate(item) for item in dict_items(body)]
    except ValidationError as exc:
        raise BiocacheDataShapeError(
            f"Malformed facet group: {exc.error_count()} validation errors",
            endpoint=FACET_GROUPS_ENDPOINT,
        ) from exc
    if len(groups) != len(body):
        _logger.debug("Skipped %d malformed facet groups", len(body) - len(groups))
    return groups


async def fetch_facet_groups(transport: Transport) -> list[FacetGroup]:
    """Fetch the facet group schema of the Biocache instance."""
    body = await transport.get_json(FACET_GROUPS_ENDPOINT)
    return parse_facet_groups(body)
