"""Map configuration for pybiocache."""

from __future__ import annotations

import copy
import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pybiocache.exceptions import BiocacheConfigError
from pybiocache.query import validate_base_query

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def default_map_options() -> dict[str, Any]:
    """Options forwarded to the map widget when the caller sets none."""
    return {
        "useMyLocation": False,
        "allowSearchLocationByAddress": False,
        "allowSearchRegionByAddress": False,
        "drawOptions": {"marker": False},
        "drawControl": False,
    }


@dataclasses.dataclass(frozen=True)
class PointStyle:
    """Style of occurrence points drawn by the WMS overlay.

    Parameters
    ----------
    colour : str
        Hex colour without the leading ``#``.
    name : str
        Point shape (``"circle"`` etc.).
    size : int
        Point radius in px.
    opacity : float
        Point opacity between 0 and 1.
    """

    colour: str = "FF9900"
    name: str = "circle"
    size: int = 4
    opacity: float = 1.0

    def __post_init__(self) -> None:
        colour = self.colour.lstrip("#")
        if not colour or any(ch not in _HEX_DIGITS for ch in colour):
            raise BiocacheConfigError(f"point colour must be a hex string, got {self.colour!r}")
        object.__setattr__(self, "colour", colour)
        if self.size <= 0:
            raise BiocacheConfigError(f"point size must be positive, got {self.size}")
        if not 0.0 <= self.opacity <= 1.0:
            raise BiocacheConfigError(f"point opacity must be between 0 and 1, got {self.opacity}")

    def env(self) -> str:
        """Encode the style as a WMS ``ENV`` parameter (``key:value;...``)."""
        return f"color:{self.colour};name:{self.name};size:{self.size};opacity:{self.opacity:g}"


@dataclasses.dataclass(frozen=True)
class OccurrenceMapConfig:
    """Occurrence map configuration.

    Parameters
    ----------
    biocache_base_url : str
        Base URL of the Biocache instance used for all data. Mandatory.
    base_query : str
        Initial query string passed to the Biocache search service. Must
        contain a ``q=`` term. Mandatory.
    container_id : str
        Identifier of the map container, forwarded to the map factory.
    map_options : dict
        Options forwarded opaquely to the map widget.
    show_facets : bool
        Hand the facet content to the renderer after every sync.
    exclude_singles : bool
        Hide facet fields that only offer a single option.
    wms : bool
        Display occurrences through a WMS overlay.
    map_attribution : str
        Attribution text for the overlay.
    point : PointStyle
        Occurrence point style.
    request_timeout : float
        Total timeout in seconds for each web-service request.
    """

    biocache_base_url: str
    base_query: str
    container_id: str = "occurrenceMap"
    map_options: dict[str, Any] = dataclasses.field(default_factory=default_map_options)
    show_facets: bool = True
    exclude_singles: bool = True
    wms: bool = True
    map_attribution: str = ""
    point: PointStyle = dataclasses.field(default_factory=PointStyle)
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        base_url = (self.biocache_base_url or "").strip()
        if not base_url:
            raise BiocacheConfigError("You must define the base URL for the Biocache instance you wish to use.")
        object.__setattr__(self, "biocache_base_url", base_url.rstrip("/"))
        object.__setattr__(self, "base_query", validate_base_query(self.base_query))
        if self.request_timeout <= 0:
            raise BiocacheConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_options(
        cls,
        biocache_base_url: str,
        base_query: str,
        options: Mapping[str, Any] | None = None,
        *,
        container_id: str = "occurrenceMap",
    ) -> OccurrenceMapConfig:
        """Create configuration from a camelCase options mapping.

        Unset options fall back to the defaults. The nested ``point`` and
        ``mapOptions`` mappings are merged key by key with their defaults
        rather than replacing them wholesale.

        Parameters
        ----------
        biocache_base_url : str
            Biocache base URL.
        base_query : str
            Initial query string.
        options : Mapping or None
            Any of ``mapOptions``, ``showFacets``, ``excludeSingles``,
            ``wms``, ``mapAttribution``, ``point`` and ``requestTimeout``.

        Returns
        -------
        OccurrenceMapConfig
            Populated configuration.
        """
        options = dict(options or {})

        map_options = default_map_options()
        map_overrides = options.pop("mapOptions", None)
        if isinstance(map_overrides, Mapping):
            map_options.update(copy.deepcopy(dict(map_overrides)))

        point_kwargs: dict[str, Any] = {}
        point_overrides = options.pop("point", None)
        if isinstance(point_overrides, PointStyle):
            point_kwargs = dataclasses.asdict(point_overrides)
        elif isinstance(point_overrides, Mapping):
            point_kwargs = {k: v for k, v in point_overrides.items() if k in {"colour", "name", "size", "opacity"}}

        _OPTION_MAP = {
            "showFacets": "show_facets",
            "excludeSingles": "exclude_singles",
            "wms": "wms",
            "mapAttribution": "map_attribution",
            "requestTimeout": "request_timeout",
        }
        config_kwargs: dict[str, Any] = {
            "map_options": map_options,
            "point": PointStyle(**point_kwargs),
            "container_id": container_id,
        }
        for option_key, field_name in _OPTION_MAP.items():
            if option_key in options and options[option_key] is not None:
                config_kwargs[field_name] = options[option_key]

        return cls(biocache_base_url, base_query, **config_kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> OccurrenceMapConfig:
        """Create configuration from ``BIOCACHE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {
            "biocache_base_url": env.get("BIOCACHE_BASE_URL", ""),
            "base_query": env.get("BIOCACHE_BASE_QUERY", ""),
        }
        attribution = env.get("BIOCACHE_MAP_ATTRIBUTION")
        if attribution is not None:
            config_kwargs["map_attribution"] = attribution

        for env_key, field_name, default in (
            ("BIOCACHE_SHOW_FACETS", "show_facets", True),
            ("BIOCACHE_EXCLUDE_SINGLES", "exclude_singles", True),
            ("BIOCACHE_WMS", "wms", True),
        ):
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        timeout_env = env.get("BIOCACHE_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
