from fast_rules.utils.path_resolver import (
    MISSING,
    expand_wildcards,
    flatten,
    has_path,
    replace_wildcards,
    resolve,
)


def test_flatten_nested_dicts():
    data = {
        "user": {"name": "Ana", "address": {"city": "Bratislava"}},
        "tags": ["a", "b"],
        "meta": {},
    }

    assert flatten(data) == {
        "user.name": "Ana",
        "user.address.city": "Bratislava",
        "tags": ["a", "b"],
        "meta": {},
    }


def test_flatten_empty_input():
    assert flatten({}) == {}
    assert flatten(None) == {}


def test_flatten_round_trips_through_resolve(sample_data):
    data = {
        "profile": sample_data,
        "items": [{"qty": 1}, {"qty": 2}],
        "settings": {"flags": {}},
        "note": None,
    }

    for path, value in flatten(data).items():
        assert resolve(data, path) == value


def test_resolve_dotted_and_bracket_paths():
    data = {"items": [{"qty": 3}, {"qty": 4}], "user": {"name": "Ana"}}

    assert resolve(data, "user.name") == "Ana"
    assert resolve(data, "items.1.qty") == 4
    assert resolve(data, "items[1].qty") == 4
    assert resolve(data, "items[0]") == {"qty": 3}


def test_resolve_prefers_literal_top_level_key():
    data = {"a.b": 1, "a": {"b": 2}}

    assert resolve(data, "a.b") == 1


def test_resolve_returns_missing_without_raising():
    data = {"items": [{"qty": 3}], "name": "Ana", "nothing": None}

    assert resolve(data, "items.5.qty") is MISSING
    assert resolve(data, "items.first.qty") is MISSING
    assert resolve(data, "name.first") is MISSING
    assert resolve(data, "nothing.deeper") is MISSING
    assert resolve(data, "unknown") is MISSING


def test_missing_differs_from_none():
    data = {"nickname": None}

    assert resolve(data, "nickname") is None
    assert has_path(data, "nickname") is True
    assert has_path(data, "avatar") is False
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_expand_single_wildcard():
    data = {"items": [{"qty": 0}, {"qty": 5}, {}]}

    assert expand_wildcards(data, "items.*.qty") == [
        ("items.0.qty", [0]),
        ("items.1.qty", [1]),
        ("items.2.qty", [2]),
    ]


def test_expand_nested_wildcards_binds_left_to_right():
    data = {"orders": [{"lines": ["a", "b"]}, {"lines": ["c"]}]}

    assert expand_wildcards(data, "orders.*.lines.*") == [
        ("orders.0.lines.0", [0, 0]),
        ("orders.0.lines.1", [0, 1]),
        ("orders.1.lines.0", [1, 0]),
    ]


def test_expand_wildcard_over_non_list_is_a_no_op():
    assert expand_wildcards({"items": "abc"}, "items.*.qty") == []
    assert expand_wildcards({"items": {"0": {}}}, "items.*.qty") == []
    assert expand_wildcards({}, "items.*.qty") == []
    assert expand_wildcards({"items": []}, "items.*.qty") == []


def test_expand_leading_wildcard_uses_root():
    assert expand_wildcards([{"a": 1}, {"a": 2}], "*.a") == [("0.a", [0]), ("1.a", [1])]


def test_replace_wildcards():
    assert replace_wildcards("*", [2]) == "2"
    assert replace_wildcards("items.*.lines.*", [1, 0]) == "items.1.lines.0"
    assert replace_wildcards("items.*.a", []) == "items.*.a"
    assert replace_wildcards(["items.*.a", "x"], [3]) == ["items.3.a", "x"]
    assert replace_wildcards(5, [1]) == 5


def test_expand_bracket_wildcards_keeps_bracket_form():
    data = {"items": [{"qty": 0}, {"qty": 5}], "orders": [{"lines": ["a", "b"]}]}

    assert expand_wildcards(data, "items[*].qty") == [("items[0].qty", [0]), ("items[1].qty", [1])]
    assert expand_wildcards(data, "orders[*].lines[*]") == [
        ("orders[0].lines[0]", [0, 0]),
        ("orders[0].lines[1]", [0, 1]),
    ]
    assert resolve(data, "items[1].qty") == 5
