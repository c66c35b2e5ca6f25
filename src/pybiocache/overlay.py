"""WMS overlay showing the occurrences matched by the committed query."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from pybiocache._constants import WMS_IMAGE_FORMAT, WMS_LAYER_NAME, WMS_REFLECT_ENDPOINT, WMS_Z_INDEX
from pybiocache.config import OccurrenceMapConfig

if TYPE_CHECKING:
    from pybiocache.widgets import LayerFactory, MapWidget

_logger = logging.getLogger(__name__)


class WmsLayerSpec(BaseModel):
    """Description of a styled WMS tile overlay."""

    model_config = ConfigDict(frozen=True)

    url: str
    layers: str = WMS_LAYER_NAME
    format: str = WMS_IMAGE_FORMAT
    attribution: str = ""
    outline: str = "true"
    env: str = ""
    z_index: int = WMS_Z_INDEX

    def layer_options(self) -> dict[str, Any]:
        """Options in the shape tile-layer libraries expect (``ENV`` upper-cased)."""
        return {
            "layers": self.layers,
            "format": self.format,
            "attribution": self.attribution,
            "outline": self.outline,
            "ENV": self.env,
        }


def build_wms_layer(config: OccurrenceMapConfig, query: str) -> WmsLayerSpec:
    return WmsLayerSpec(
        url=f"{config.biocache_base_url}{WMS_REFLECT_ENDPOINT}?{query}",
        attribution=config.map_attribution,
        env=config.point.env(),
    )


def _spec_as_layer(spec: WmsLayerSpec) -> WmsLayerSpec:
    return spec


class WmsOverlay:
    """Keeps exactly one occurrence layer on a map widget."""

    def __init__(self, config: OccurrenceMapConfig, layer_factory: LayerFactory | None = None) -> None:
        self._config = config
        self._layer_factory = layer_factory or _spec_as_layer
        self._layer: Any = None
        self._spec: WmsLayerSpec | None = None

    @property
    def spec(self) -> WmsLayerSpec | None:
        return self._spec

    def refresh(self, map_widget: MapWidget, query: str) -> None:
        """Replace the current layer with one for *query*."""
        if self._layer is not None:
            map_widget.remove_layer(self._layer)
            self._layer = None

        spec = build_wms_layer(self._config, query)
        layer = self._layer_factory(spec)
        map_widget.add_layer(layer, {})
        self._layer = layer
        self._spec = spec
        _logger.debug("WMS layer set to %s", spec.url)
