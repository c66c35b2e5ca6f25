"""State layer.

This package owns the facet selection and the sync state of an occurrence
map. Only :class:`pybiocache.client.OccurrenceMap` mutates it.
"""
