import pytest

from fast_rules import AsyncValidatorRule, Validator, ValidatorRule
from fast_rules.core.rule import Rule
from fast_rules.core.rule_registry import RuleRegistry, get_default_registry


def test_default_registry_has_builtin_rules():
    registry = get_default_registry()

    for name in ("required", "sometimes", "min", "max", "between", "email", "in", "same", "regex", "required_if"):
        assert registry.has(name), name
    assert registry.is_implicit("required") is True
    assert registry.is_implicit("required_with") is True
    assert registry.is_implicit("sometimes") is False
    assert registry.is_async("required") is False


def test_register_replaces_earlier_registration():
    registry = RuleRegistry()
    registry.register("flag", lambda value, parameter, attribute: False)
    registry.register("flag", lambda value, parameter, attribute: True)

    assert registry.names() == ["flag"]
    assert registry.get("flag").handler(None, None, None) is True


def test_async_membership_comes_from_registration():
    registry = RuleRegistry()
    registry.register_async("exists", lambda value, parameter, attribute, done: done())
    registry.register_async_implicit("exists_or_blank", lambda value, parameter, attribute, done: done())

    assert registry.is_async("exists") is True
    assert registry.is_implicit("exists") is False
    assert registry.is_async("exists_or_blank") is True
    assert registry.is_implicit("exists_or_blank") is True


def test_make_binds_a_fresh_rule_per_call():
    validator = Validator({}, {})
    registry = get_default_registry()

    first = registry.make("required", validator)
    second = registry.make("required", validator)

    assert isinstance(first, Rule)
    assert first is not second
    assert registry.make("unknown", validator) is None


def test_missed_rule_validator_is_renamed_and_resettable():
    registry = RuleRegistry()
    registry.register_missed_rule_validator(lambda value, parameter, attribute: True)

    descriptor = registry.get("anything")
    assert descriptor.name == "anything"
    assert registry.has("anything") is False

    registry.register_missed_rule_validator(None)
    assert registry.get("anything") is None


def test_register_rule_accepts_contract_objects():
    class Even(ValidatorRule):
        name = "even"

        def validate(self, value, parameter, attribute, rule):
            return int(value) % 2 == 0

    class Remote(AsyncValidatorRule):
        name = "remote"
        implicit = True

        async def validate(self, value, parameter, attribute, rule):
            return True

    registry = RuleRegistry()
    registry.register_rule(Even())
    registry.register_rule(Remote())

    assert registry.get("even").pass_rule is True
    assert registry.is_async("even") is False
    assert registry.is_async("remote") is True
    assert registry.is_implicit("remote") is True


def test_register_rule_rejects_other_objects():
    with pytest.raises(TypeError):
        RuleRegistry().register_rule(object())


def test_copy_is_independent():
    original = RuleRegistry()
    original.register("a", lambda value, parameter, attribute: True)

    copied = original.copy()
    copied.register("b", lambda value, parameter, attribute: True)

    assert original.names() == ["a"]
    assert copied.names() == ["a", "b"]


def test_validator_with_private_registry():
    registry = get_default_registry().copy()
    registry.register("lowercase", lambda value, parameter, attribute: value == value.lower())

    assert Validator({"tag": "abc"}, {"tag": "lowercase"}, registry=registry).passes() is True
    assert Validator({"tag": "ABC"}, {"tag": "lowercase"}, registry=registry).passes() is False
    # Not visible to validators on the default registry
    assert Validator({"tag": "ABC"}, {"tag": "lowercase"}).passes() is True
