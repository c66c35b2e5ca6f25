"""Structural interfaces of the display collaborators.

The sync engine never draws anything itself. It drives a map widget, asks a
layer factory for overlay objects and hands facet content to a renderer.
Any object with the right methods will do.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from pybiocache.models.display import RenderContent
from pybiocache.overlay import WmsLayerSpec


class MapWidget(Protocol):
    def start_loading(self) -> None: ...

    def finish_loading(self) -> None: ...

    def add_layer(self, layer: Any, options: Mapping[str, Any]) -> None: ...

    def remove_layer(self, layer: Any) -> None: ...


class FacetRenderer(Protocol):
    def render(self, content: RenderContent) -> None: ...


MapFactory = Callable[[str, Mapping[str, Any]], MapWidget]
"""``(container_id, map_options) -> MapWidget``."""

LayerFactory = Callable[[WmsLayerSpec], Any]
"""Turns an overlay description into whatever the map widget accepts as a layer."""
