"""Base model for Biocache web-service responses.

Every response model inherits from :class:`BiocacheBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase service keys map
  automatically to snake_case fields.
* ``extra="ignore"`` so additional service fields never break parsing.
* Helpers that keep only the well-formed items of a list or mapping, so a
  partially malformed payload degrades to empty collections.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def safe_int(value: Any) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return int(result)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def dict_items(value: Any) -> list[dict[str, Any]]:
    """Return the dict members of *value*, or ``[]`` if it is not a list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def dict_values(value: Any) -> dict[str, dict[str, Any]]:
    """Return the dict-valued entries of *value*, or ``{}`` if it is not a mapping."""
    if not isinstance(value, Mapping):
        return {}
    return {str(key): item for key, item in value.items() if isinstance(item, dict)}


class BiocacheBaseModel(BaseModel):
    """Base for Biocache response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
