from fast_rules.core.error_bag import ErrorBag


def test_empty_bag():
    errors = ErrorBag()

    assert not errors
    assert errors.count() == 0
    assert errors.first("name") is None
    assert errors.get("name") == []
    assert errors.has("name") is False
    assert errors.all() == {}


def test_messages_kept_in_recording_order():
    errors = ErrorBag()
    errors.add("name", "The name field is required.")
    errors.add("age", "The age must be an integer.")
    errors.add("name", "The name must be a string.")

    assert len(errors) == 3
    assert errors.first("name") == "The name field is required."
    assert errors.get("name") == ["The name field is required.", "The name must be a string."]
    assert list(errors.all()) == ["name", "age"]
    assert [attribute for attribute, _ in errors] == ["name", "age", "name"]


def test_returned_collections_are_copies():
    errors = ErrorBag()
    errors.add("name", "Required.")

    errors.get("name").append("Other.")
    errors.all()["name"].append("Other.")

    assert errors.get("name") == ["Required."]
