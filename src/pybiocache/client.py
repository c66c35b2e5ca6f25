"""High-level async occurrence map controller."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pybiocache._api.facet_groups import fetch_facet_groups
from pybiocache._api.search import fetch_facet_counts
from pybiocache._redact import redact_query
from pybiocache._transport import HttpTransport
from pybiocache.config import OccurrenceMapConfig
from pybiocache.exceptions import BiocacheDataShapeError, BiocacheError, BiocacheFetchError
from pybiocache.facets.grouping import build_field_map
from pybiocache.models.display import ActionKind, GroupedFacetList, RenderContent, UserAction
from pybiocache.models.facet import Facet, FacetSelection, coerce_facet
from pybiocache.overlay import WmsOverlay
from pybiocache.query import strip_filter_queries, validate_base_query
from pybiocache.state.selection import add_facet, contains_facet, remove_facet
from pybiocache.state.store import SyncState, SyncStatus, UpdateOutcome
from pybiocache.widgets import FacetRenderer, LayerFactory, MapFactory, MapWidget

_logger = logging.getLogger(__name__)

FacetLike = Facet | FacetSelection | dict[str, Any]


class OccurrenceMap:
    """Keeps a Biocache query in sync with the facets a user picks.

    Every mutation re-fetches the facet counts for the resulting query and,
    once the response arrives, commits the query, the merged selection and
    the grouped facet list. A newer mutation supersedes any update still in
    flight; its result is discarded when it finally arrives.

    Usage::

        config = OccurrenceMapConfig.from_options(url, "q=*:*", {"excludeSingles": False})
        async with OccurrenceMap(config, renderer=renderer) as occurrence_map:
            await occurrence_map.start()
            await occurrence_map.select_facet(Facet(label="Country: Australia", fq="country:Australia"))
            occurrence_map.get_query_string()
    """

    def __init__(
        self,
        config: OccurrenceMapConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        map_factory: MapFactory | None = None,
        layer_factory: LayerFactory | None = None,
        renderer: FacetRenderer | None = None,
        on_error: Callable[[BiocacheError], None] | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None
        self._state = SyncState(
            base_query=config.base_query,
            committed_query=config.base_query,
            committed_base_query=config.base_query,
        )
        self._map: MapWidget | None = map_factory(config.container_id, config.map_options) if map_factory else None
        self._overlay = WmsOverlay(config, layer_factory)
        self._renderer = renderer
        self._on_error = on_error
        self._groups_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OccurrenceMap:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> OccurrenceMapConfig:
        return self._config

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def map(self) -> MapWidget | None:
        return self._map

    @property
    def overlay(self) -> WmsOverlay:
        return self._overlay

    @property
    def is_loading(self) -> bool:
        return self._state.status == SyncStatus.LOADING

    @property
    def selected_facets(self) -> list[Facet]:
        return list(self._state.selected_facets)

    @property
    def grouped_facets(self) -> GroupedFacetList:
        return self._state.grouped_facets

    @property
    def last_error(self) -> BiocacheError | None:
        return self._state.last_error

    def render_content(self) -> RenderContent:
        return self._state.render_content()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def get_query_string(self) -> str:
        """Return the query string last committed as authoritative."""
        return self._state.committed_query

    async def start(self) -> UpdateOutcome:
        """Initial load of facet groups and counts."""
        return await self.update()

    async def set_query_string(self, query_string: str) -> UpdateOutcome:
        """Replace the base query, dropping every selected facet."""
        self._state.base_query = validate_base_query(query_string)
        self._state.selected_facets = []
        return await self.update()

    async def select_facet(self, facet: FacetLike) -> UpdateOutcome:
        """Add *facet* to the selection (unless already selected) and resync."""
        self._state.selected_facets = add_facet(self._state.selected_facets, coerce_facet(facet))
        return await self.update()

    async def clear_facet(self, facet: FacetLike) -> UpdateOutcome | None:
        """Remove the selected facet with the same ``fq``.

        Returns ``None`` without resyncing when no such facet is selected.
        """
        target = coerce_facet(facet)
        if not contains_facet(self._state.selected_facets, target):
            return None
        self._state.selected_facets = remove_facet(self._state.selected_facets, target)
        return await self.update()

    async def clear_all_facets(self) -> UpdateOutcome:
        """Drop every selected facet and every ``fq=`` of the base query."""
        self._state.selected_facets = []
        self._state.base_query = strip_filter_queries(self._state.base_query)
        return await self.update()

    def toggle_group(self, title: str) -> bool:
        """Flip the expanded state of a facet group; returns the new state."""
        return self._state.toggle_group(title)

    async def dispatch(self, action: UserAction) -> UpdateOutcome | bool | None:
        """Route a renderer action to the matching public operation."""
        if action.kind == ActionKind.FACET_CLICKED:
            return await self.select_facet(action.selection or action.facet)  # type: ignore[arg-type]
        if action.kind == ActionKind.SELECTED_FACET_CLICKED:
            return await self.clear_facet(action.facet)  # type: ignore[arg-type]
        if action.kind == ActionKind.GROUP_TOGGLED:
            return self.toggle_group(action.group or "")
        return await self.clear_all_facets()

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    async def update(self) -> UpdateOutcome:
        """Re-fetch facet counts for the current selection and commit them.

        Fetch and data-shape failures never escape: they restore the last
        committed query and selection, are recorded in :attr:`last_error` and
        reported to ``on_error``.
        """
        state = self._state
        generation = state.begin_update()
        if self._map is not None:
            self._map.start_loading()
        try:
            return await self._sync(generation)
        finally:
            state.finish_update(generation)
            if self._map is not None:
                self._map.finish_loading()

    async def _sync(self, generation: int) -> UpdateOutcome:
        state = self._state
        transport = self._require_transport()
        try:
            await self._ensure_field_map(transport)
            if not state.is_current(generation):
                return UpdateOutcome.SUPERSEDED

            query = state.derived_query()
            result = await fetch_facet_counts(transport, query)
        except (BiocacheFetchError, BiocacheDataShapeError) as exc:
            if not state.is_current(generation):
                _logger.debug("Superseded update %d failed: %s", generation, exc)
                return UpdateOutcome.SUPERSEDED
            return self._fail(exc)

        if not state.is_current(generation):
            _logger.debug("Discarding superseded result for %s", redact_query(query))
            return UpdateOutcome.SUPERSEDED

        state.commit(query, result, exclude_singles=self._config.exclude_singles)
        _logger.debug(
            "Committed %s (%d records, %d selected facets)",
            redact_query(state.committed_query),
            result.total_records,
            len(state.selected_facets),
        )

        if self._map is not None:
            if self._config.wms:
                self._overlay.refresh(self._map, state.committed_query)
            else:
                _logger.debug("WMS disabled; no occurrence layer drawn")
        if self._config.show_facets and self._renderer is not None:
            self._renderer.render(state.render_content())
        return UpdateOutcome.COMMITTED

    async def _ensure_field_map(self, transport: HttpTransport) -> None:
        """Load the facet group schema once per instance."""
        async with self._groups_lock:
            if self._state.field_map is not None:
                return
            groups = await fetch_facet_groups(transport)
            self._state.facet_groups = groups
            self._state.field_map = build_field_map(groups)
            _logger.debug("Loaded %d facet groups", len(groups))

    def _fail(self, exc: BiocacheError) -> UpdateOutcome:
        _logger.warning("Facet sync failed: %s", exc)
        self._state.rollback()
        self._state.last_error = exc
        if self._on_error is not None:
            self._on_error(exc)
        return UpdateOutcome.FAILED

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise BiocacheError("Map not initialized. Use 'async with OccurrenceMap(...) as occurrence_map:'")
        return self._transport
