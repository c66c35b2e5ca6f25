"""Internal constants shared across the library."""

USER_AGENT = "pybiocache"

FACET_GROUPS_ENDPOINT = "/ws/search/grouped/facets"
SEARCH_ENDPOINT = "/ws/occurrences/search.json"
WMS_REFLECT_ENDPOINT = "/ws/mapping/wms/reflect"

#: Group title used for fields that no facet group claims.
UNGROUPED_TITLE = "Unknown"

WMS_LAYER_NAME = "ALA:occurrences"
WMS_IMAGE_FORMAT = "image/png"
WMS_Z_INDEX = 99
