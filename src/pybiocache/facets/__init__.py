"""Facet grouping and display composition."""

from pybiocache.facets.compose import compose_facet_list, format_facet_name
from pybiocache.facets.grouping import build_field_map

__all__ = ["build_field_map", "compose_facet_list", "format_facet_name"]
