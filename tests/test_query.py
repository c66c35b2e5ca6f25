from __future__ import annotations

import pytest

from pybiocache.exceptions import BiocacheConfigError
from pybiocache.models.facet import Facet
from pybiocache.query import build_query, strip_filter_queries, validate_base_query


def _facets(*fqs: str) -> list[Facet]:
    return [Facet(label=fq, fq=fq) for fq in fqs]


def test_build_query_appends_filters_in_selection_order() -> None:
    query = build_query("q=*:*", _facets("country:Australia", "state:Victoria"))

    assert query == "q=*:*&fq=country:Australia&fq=state:Victoria"


def test_build_query_is_idempotent() -> None:
    selected = _facets("year:2020", "basis_of_record:HumanObservation")

    assert build_query("q=taxa:Acacia", selected) == build_query("q=taxa:Acacia", selected)


def test_build_query_without_facets_returns_base() -> None:
    assert build_query("q=*:*", []) == "q=*:*"


def test_build_query_does_not_deduplicate() -> None:
    assert build_query("q=*:*", _facets("a:1", "a:1")) == "q=*:*&fq=a:1&fq=a:1"


def test_strip_filter_queries_removes_every_fq() -> None:
    stripped = strip_filter_queries("q=*:*&fq=country:Australia&qc=data_hub_uid:dh1&fq=year:2020")

    assert stripped == "q=*:*&qc=data_hub_uid:dh1"
    assert "fq=" not in stripped


def test_strip_filter_queries_drops_trailing_separator() -> None:
    assert strip_filter_queries("q=*:*&fq=country:Australia&") == "q=*:*"
    assert strip_filter_queries("q=*:*") == "q=*:*"


@pytest.mark.parametrize("base_query", ["", "   ", "q=", "fq=country:Australia", None])
def test_validate_base_query_rejects_missing_q(base_query: str | None) -> None:
    with pytest.raises(BiocacheConfigError):
        validate_base_query(base_query)


def test_validate_base_query_accepts_q_anywhere() -> None:
    assert validate_base_query("fq=year:2020&q=*:*") == "fq=year:2020&q=*:*"
