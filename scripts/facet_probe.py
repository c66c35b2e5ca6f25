#!/usr/bin/env python3
"""Probe the facets a Biocache instance offers for a query.

This script runs the same sync cycle an occurrence map runs: it loads the
facet groups, fetches facet counts for the query, optionally applies the
given filters one at a time, and prints the committed query, the selected
facets and the grouped facet list.

Usage
-----
::

    export BIOCACHE_BASE_URL="https://biocache-ws.ala.org.au"
    python scripts/facet_probe.py --query "q=taxa:Acacia" --fq "state:Victoria"

Options::

    --query QUERY        Base query (default: $BIOCACHE_BASE_QUERY or q=*:*)
    --fq FIELD:VALUE     Select this facet after the initial load (repeatable)
    --keep-singles       Show facet fields that offer a single option
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybiocache import (  # noqa: E402
    BiocacheConfigError,
    BiocacheError,
    Facet,
    OccurrenceMap,
    OccurrenceMapConfig,
    UpdateOutcome,
    format_facet_name,
)


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


def _facet_from_arg(value: str) -> Facet:
    field, sep, facet_value = value.partition(":")
    if not sep or not field or not facet_value:
        raise argparse.ArgumentTypeError(f"expected FIELD:VALUE, got {value!r}")
    return Facet(label=f"{format_facet_name(field)}: {facet_value}", fq=value)


def _report(occurrence_map: OccurrenceMap) -> dict[str, Any]:
    content = occurrence_map.render_content()
    return {
        "query": occurrence_map.get_query_string(),
        "selected_facets": [facet.model_dump() for facet in content.selected_facets],
        "grouped_facets": {
            title: [grouped.model_dump() for grouped in fields] for title, fields in content.grouped_facets.items()
        },
        "wms_layer": occurrence_map.overlay.spec.model_dump() if occurrence_map.overlay.spec else None,
    }


def _print_report(report: dict[str, Any]) -> None:
    out: list[str] = [_section("QUERY"), f"  {report['query']}"]

    out.append(_section("SELECTED FACETS"))
    if not report["selected_facets"]:
        out.append("  (none)")
    for facet in report["selected_facets"]:
        out.append(f"  {facet['label']:<40} fq={facet['fq']}")

    out.append(_section("FACETS"))
    for title, fields in report["grouped_facets"].items():
        out.append(f"  [{title}]")
        for grouped in fields:
            out.append(f"    {grouped['display_name']} ({grouped['field_name']})")
            for entry in grouped["field_result"]:
                out.append(f"      {entry['count']:>10}  {entry['label']}")
    print("\n".join(out))


class _CollectingMap:
    """Minimal map widget that just remembers the current layer."""

    def __init__(self, _container_id: str, _options: Any) -> None:
        self.layer: Any = None

    def start_loading(self) -> None:
        pass

    def finish_loading(self) -> None:
        pass

    def add_layer(self, layer: Any, _options: Any) -> None:
        self.layer = layer

    def remove_layer(self, _layer: Any) -> None:
        self.layer = None


async def main() -> int:
    parser = argparse.ArgumentParser(description="Print the grouped facets a Biocache query offers.")
    parser.add_argument("--query", default=os.environ.get("BIOCACHE_BASE_QUERY") or "q=*:*")
    parser.add_argument("--fq", action="append", default=[], type=_facet_from_arg, help="FIELD:VALUE to select")
    parser.add_argument("--keep-singles", action="store_true", help="Show fields with a single option")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = OccurrenceMapConfig.from_env(base_query=args.query, exclude_singles=not args.keep_singles)
    except BiocacheConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    errors: list[BiocacheError] = []
    async with OccurrenceMap(config, map_factory=_CollectingMap, on_error=errors.append) as occurrence_map:
        outcome = await occurrence_map.start()
        for facet in args.fq:
            if outcome != UpdateOutcome.COMMITTED:
                break
            outcome = await occurrence_map.select_facet(facet)
        report = _report(occurrence_map)

    if errors:
        print(f"Sync failed: {errors[-1]}", file=sys.stderr)

    if args.json_mode or args.output:
        payload = json.dumps(report, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    else:
        _print_report(report)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
