"""Owned sync state of an occurrence map.

The state is a plain pydantic model so the sync state machine can be
driven and inspected without a network. Updates are numbered; a result is
only committed while its number is still the latest one handed out.
"""

from __future__ import annotations

import enum
import logging

from pydantic import BaseModel, ConfigDict, Field

from pybiocache.exceptions import BiocacheError
from pybiocache.facets.compose import compose_facet_list
from pybiocache.models.display import GroupedFacetList, RenderContent
from pybiocache.models.facet import Facet
from pybiocache.models.facet_groups import FacetGroup
from pybiocache.models.search import FacetCountResult
from pybiocache.query import FILTER_PREFIX, build_query
from pybiocache.state.selection import contains_facet, reconcile_selection

_logger = logging.getLogger(__name__)


class SyncStatus(enum.StrEnum):
    IDLE = "idle"
    LOADING = "loading"


class UpdateOutcome(enum.StrEnum):
    COMMITTED = "committed"
    SUPERSEDED = "superseded"
    FAILED = "failed"


class SyncState(BaseModel):
    """Mutable state of one occurrence map.

    Invariant: after every commit or rollback, ``build_query(base_query,
    selected_facets) == committed_query``.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    base_query: str
    selected_facets: list[Facet] = Field(default_factory=list)
    committed_query: str = ""
    committed_base_query: str = ""
    committed_selection: list[Facet] = Field(default_factory=list)
    facet_groups: list[FacetGroup] | None = None
    field_map: dict[str, str] | None = None
    grouped_facets: GroupedFacetList = Field(default_factory=dict)
    expanded_groups: dict[str, bool] = Field(default_factory=dict)
    status: SyncStatus = SyncStatus.IDLE
    generation: int = 0
    last_error: BiocacheError | None = None

    def derived_query(self) -> str:
        return build_query(self.base_query, self.selected_facets)

    def render_content(self) -> RenderContent:
        return RenderContent(
            grouped_facets=self.grouped_facets,
            selected_facets=list(self.selected_facets),
            expanded_groups=dict(self.expanded_groups),
        )

    def begin_update(self) -> int:
        """Hand out a new update number and enter LOADING."""
        self.generation += 1
        self.status = SyncStatus.LOADING
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def finish_update(self, generation: int) -> None:
        """Return to IDLE unless a later update is still running."""
        if self.is_current(generation):
            self.status = SyncStatus.IDLE

    def commit(self, query: str, result: FacetCountResult, *, exclude_singles: bool) -> None:
        """Make the response for *query* the authoritative state.

        Facets the service reports as active are merged into the selection.
        When such a facet is spelled out as an ``fq=`` parameter of the base
        query, the parameter moves from the base query into the selection
        so it can be cleared like any other selected facet.
        """
        reconciled = reconcile_selection(self.selected_facets, result.active_facet_map)
        base_query = self.base_query
        for facet in reconciled:
            if contains_facet(self.selected_facets, facet):
                continue
            base_query = _remove_param(base_query, f"{FILTER_PREFIX}{facet.fq}")

        self.base_query = base_query
        self.selected_facets = reconciled
        self.committed_query = self.derived_query()
        self.committed_base_query = base_query
        self.committed_selection = list(reconciled)
        self.grouped_facets = compose_facet_list(
            self.field_map or {},
            result,
            exclude_singles=exclude_singles,
        )
        self.last_error = None
        if self.committed_query != query:
            _logger.debug("Active facets moved into selection: %s -> %s", query, self.committed_query)

    def rollback(self) -> None:
        """Restore the base query and selection of the last commit."""
        self.base_query = self.committed_base_query
        self.selected_facets = list(self.committed_selection)

    def toggle_group(self, title: str) -> bool:
        expanded = not self.expanded_groups.get(title, False)
        self.expanded_groups[title] = expanded
        return expanded


def _remove_param(query: str, param: str) -> str:
    params = query.split("&")
    for index in range(1, len(params)):
        if params[index] == param:
            del params[index]
            break
    return "&".join(params)
