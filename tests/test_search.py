import json

from roadside.models.domain import Location
from roadside.services.search import filter_by_facets, filter_locations, list_states, parse_custom_fields


def _location(lid: str, name: str, category: str = "muffler-men", state: str = "Illinois", custom=None) -> Location:
    if custom is None:
        custom_fields = "{}"
    elif isinstance(custom, str):
        custom_fields = custom
    else:
        custom_fields = json.dumps(custom)
    return Location(
        id=lid,
        name=name,
        category=category,
        state=state,
        tagged_date="2024-06-15",
        custom_fields=custom_fields,
    )


def _sample() -> list[Location]:
    return [
        _location("L1", "Gemini Giant", state="Illinois", custom={"theme": "space"}),
        _location("L2", "Ball of Twine", category="worlds-largest", state="Kansas", custom={"material": "fiberglass"}),
        _location("L3", "Cadillac Ranch", category="unique-finds", state="Texas", custom="{bad"),
        _location("L4", "Catsup Bottle", category="worlds-largest", state="Illinois"),
    ]


def test_blank_query_returns_everything_in_order():
    locations = _sample()

    for query in ("", "   ", "\t\n", None):
        result = filter_locations(locations, query)
        assert [loc.id for loc in result] == ["L1", "L2", "L3", "L4"]


def test_state_match_is_case_insensitive():
    result = filter_locations(_sample(), "ILLINOIS")

    assert [loc.id for loc in result] == ["L1", "L4"]


def test_query_is_trimmed_before_matching():
    result = filter_locations(_sample(), "  twine  ")

    assert [loc.id for loc in result] == ["L2"]


def test_name_and_category_substrings_match():
    assert [loc.id for loc in filter_locations(_sample(), "giant")] == ["L1"]
    assert [loc.id for loc in filter_locations(_sample(), "largest")] == ["L2", "L4"]


def test_custom_field_key_or_value_matches():
    by_value = filter_locations(_sample(), "fiberglass")
    by_key = filter_locations(_sample(), "MATERIAL")

    assert [loc.id for loc in by_value] == ["L2"]
    assert [loc.id for loc in by_key] == ["L2"]


def test_malformed_custom_fields_never_raise():
    locations = _sample()

    assert filter_locations(locations, "bad") == []
    # still matches on structured fields
    assert [loc.id for loc in filter_locations(locations, "cadillac")] == ["L3"]


def test_non_object_custom_fields_are_ignored():
    locations = [
        _location("A", "Array", custom='["material"]'),
        _location("B", "Scalar", custom='"material"'),
        _location("C", "Null", custom="null"),
    ]

    assert filter_locations(locations, "material") == []


def test_custom_field_values_are_stringified():
    location = _location("N", "Numbers", custom={"height": 42, "open": True})

    assert filter_locations([location], "42") == [location]
    assert filter_locations([location], "true") == [location]


def test_parse_custom_fields_degrades_to_empty_mapping():
    assert parse_custom_fields(None) == {}
    assert parse_custom_fields("") == {}
    assert parse_custom_fields("{bad") == {}
    assert parse_custom_fields("[1, 2]") == {}
    assert parse_custom_fields('{"a": "b"}') == {"a": "b"}


def test_filter_by_facets_and_states():
    locations = _sample()

    assert [loc.id for loc in filter_by_facets(locations, category="worlds-largest")] == ["L2", "L4"]
    assert [loc.id for loc in filter_by_facets(locations, category="worlds-largest", state="Kansas")] == ["L2"]
    assert filter_by_facets(locations) == locations
    assert list_states(locations) == ["Illinois", "Kansas", "Texas"]
