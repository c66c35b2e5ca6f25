from __future__ import annotations

from pybiocache.models.facet import Facet
from pybiocache.models.search import ActiveFacet
from pybiocache.state.selection import add_facet, reconcile_selection, remove_facet


def test_reconcile_adds_active_facet_to_empty_selection() -> None:
    active = {"country": ActiveFacet(name="country", value="Australia")}

    selected = reconcile_selection([], active)

    assert len(selected) == 1
    assert selected[0].fq == "country:Australia"
    assert selected[0].label == "Country: Australia"


def test_reconcile_does_not_duplicate_existing_fq() -> None:
    existing = [Facet(label="Australia", fq="country:Australia")]
    active = {"country": ActiveFacet(name="country", value="Australia")}

    selected = reconcile_selection(existing, active)

    assert selected == existing
    assert selected[0].label == "Australia"


def test_reconcile_appends_after_existing_and_never_removes() -> None:
    existing = [Facet(label="Year: 2020", fq="year:2020")]
    active = {"basisOfRecord": ActiveFacet(name="basisOfRecord", value="HumanObservation")}

    selected = reconcile_selection(existing, active)

    assert [facet.fq for facet in selected] == ["year:2020", "basisOfRecord:HumanObservation"]
    assert selected[1].label == "Basis Of Record: HumanObservation"


def test_reconcile_falls_back_to_map_key_for_nameless_entry() -> None:
    selected = reconcile_selection([], {"state": ActiveFacet(value="Victoria")})

    assert selected[0].fq == "state:Victoria"


def test_reconcile_leaves_input_untouched() -> None:
    existing: list[Facet] = []

    reconcile_selection(existing, {"country": ActiveFacet(name="country", value="Fiji")})

    assert existing == []


def test_add_facet_keeps_selection_unique() -> None:
    facet = Facet(label="Country: Australia", fq="country:Australia")
    same_fq = Facet(label="different label", fq="country:Australia")

    selected = add_facet(add_facet([], facet), same_fq)

    assert len(selected) == 1
    assert selected[0].label == "Country: Australia"


def test_remove_facet_matches_by_fq_only() -> None:
    selected = [Facet(label="A", fq="a:1"), Facet(label="B", fq="b:2")]

    remaining = remove_facet(selected, Facet(label="whatever", fq="a:1"))

    assert [facet.fq for facet in remaining] == ["b:2"]
    assert remove_facet(selected, Facet(fq="c:3")) == selected
