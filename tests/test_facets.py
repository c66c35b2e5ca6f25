from __future__ import annotations

from pybiocache.facets import build_field_map, compose_facet_list, format_facet_name
from pybiocache.models.facet_groups import FacetGroup
from pybiocache.models.search import FacetCountResult


def _groups(*groups: tuple[str, list[str]]) -> list[FacetGroup]:
    return [
        FacetGroup.model_validate({"title": title, "facets": [{"field": field} for field in fields]})
        for title, fields in groups
    ]


def _counts(**fields: list[tuple[str, int]]) -> FacetCountResult:
    return FacetCountResult.model_validate(
        {
            "facetResults": [
                {
                    "fieldName": field,
                    "fieldResult": [{"label": label, "count": count} for label, count in entries],
                }
                for field, entries in fields.items()
            ]
        }
    )


def test_format_facet_name_splits_camel_case() -> None:
    assert format_facet_name("basisOfRecord") == "Basis Of Record"


def test_format_facet_name_missing_is_unknown() -> None:
    assert format_facet_name(None) == "Unknown"
    assert format_facet_name("") == "Unknown"


def test_format_facet_name_keeps_dots_and_capitalises_first_only() -> None:
    assert format_facet_name("data_resource.name") == "Data resource.name"


def test_format_facet_name_keeps_slashes_and_hyphens() -> None:
    assert format_facet_name("state/territory") == "State/territory"
    assert format_facet_name("cl-22") == "Cl-22"
    assert format_facet_name("a\\b") == "A\\b"


def test_format_facet_name_collapses_spaces() -> None:
    assert format_facet_name("occurrence__status  (x)") == "Occurrence status x "


def test_build_field_map_maps_every_field() -> None:
    field_map = build_field_map(_groups(("Geography", ["country", "state"]), ("Taxon", ["genus"])))

    assert field_map == {"country": "Geography", "state": "Geography", "genus": "Taxon"}


def test_build_field_map_last_group_wins_for_duplicate_field() -> None:
    field_map = build_field_map(_groups(("Location", ["country"]), ("Geography", ["country"])))

    assert field_map["country"] == "Geography"


def test_build_field_map_empty_schema() -> None:
    assert build_field_map([]) == {}


def test_compose_places_field_under_mapped_group() -> None:
    field_map = build_field_map(_groups(("Geography", ["country"])))
    counts = _counts(country=[("Australia", 30), ("New Zealand", 12)])

    grouped = compose_facet_list(field_map, counts, exclude_singles=True)

    assert list(grouped) == ["Geography"]
    (country,) = grouped["Geography"]
    assert country.field_name == "country"
    assert country.display_name == "Country"
    assert [entry.label for entry in country.field_result] == ["Australia", "New Zealand"]
    assert all(entry.count > 0 for entry in country.field_result)


def test_compose_drops_zero_counts_and_formats_labels() -> None:
    counts = _counts(basis_of_record=[("HumanObservation", 5), ("PreservedSpecimen", 3), ("FossilSpecimen", 0)])

    grouped = compose_facet_list({"basis_of_record": "Record"}, counts, exclude_singles=True)

    labels = [entry.label for entry in grouped["Record"][0].field_result]
    assert labels == ["Human Observation", "Preserved Specimen"]


def test_compose_excludes_single_entry_fields_when_configured() -> None:
    counts = _counts(country=[("Australia", 30), ("Fiji", 0)])

    assert compose_facet_list({"country": "Geography"}, counts, exclude_singles=True) == {}

    grouped = compose_facet_list({"country": "Geography"}, counts, exclude_singles=False)
    assert len(grouped["Geography"][0].field_result) == 1


def test_compose_unmapped_field_goes_to_unknown_group() -> None:
    counts = _counts(data_resource_uid=[("dr1", 3), ("dr2", 1)])

    grouped = compose_facet_list({}, counts, exclude_singles=True)

    assert grouped["Unknown"][0].field_name == "data_resource_uid"


def test_compose_keeps_field_order_within_group() -> None:
    counts = _counts(country=[("A", 1), ("B", 1)], state=[("C", 1), ("D", 1)])

    grouped = compose_facet_list({"country": "Geography", "state": "Geography"}, counts, exclude_singles=True)

    assert [field.field_name for field in grouped["Geography"]] == ["country", "state"]


def test_compose_builds_missing_fq_from_raw_label() -> None:
    counts = _counts(basis_of_record=[("HumanObservation", 3), ("PreservedSpecimen", 2)])

    grouped = compose_facet_list({}, counts, exclude_singles=True)

    (basis,) = grouped["Unknown"]
    human = basis.field_result[0]
    assert human.label == "Human Observation"
    assert human.fq == 'basis_of_record:"HumanObservation"'
    assert basis.selection(human).fq == 'basis_of_record:"HumanObservation"'


def test_compose_keeps_server_fq() -> None:
    counts = FacetCountResult.model_validate(
        {
            "facetResults": [
                {
                    "fieldName": "country",
                    "fieldResult": [
                        {"label": "Australia", "count": 3, "fq": 'country:"Australia"'},
                        {"label": "New Zealand", "count": 1, "fq": "country:NZ"},
                    ],
                }
            ]
        }
    )

    (country,) = compose_facet_list({}, counts, exclude_singles=True)["Unknown"]

    assert [entry.fq for entry in country.field_result] == ['country:"Australia"', "country:NZ"]


def test_build_field_map_skips_blank_fields_and_titles_fall_back_to_unknown() -> None:
    groups = _groups(("", ["country"]), ("Geography", [""]))

    field_map = build_field_map(groups)

    assert field_map == {"country": ""}
    counts = _counts(country=[("Australia", 3), ("Fiji", 1)])
    assert list(compose_facet_list(field_map, counts, exclude_singles=True)) == ["Unknown"]
