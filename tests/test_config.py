import pytest
from pydantic import ValidationError

from fast_rules.config import (
    ValidatorConfig,
    build_config,
    configure,
    get_default_config,
)
from fast_rules.core.attributes import formatter
from fast_rules.exceptions import ConfigInvalidException


def test_defaults():
    config = get_default_config()

    assert config.lang == "en"
    assert config.stop_on_error is False
    assert config.attribute_formatter is formatter
    assert config.numeric_rules == ("integer", "numeric")


def test_config_is_frozen():
    config = ValidatorConfig()

    with pytest.raises(ValidationError):
        config.lang = "es"


def test_stop_on_error_accepts_attribute_lists():
    config = ValidatorConfig(stop_on_error=["name", "email"])

    assert config.stop_on_error == ("name", "email")
    assert config.should_stop_on("name") is True
    assert config.should_stop_on("age") is False
    assert ValidatorConfig(stop_on_error=None).should_stop_on("name") is False
    assert ValidatorConfig(stop_on_error="name").stop_on_error == ("name",)
    assert ValidatorConfig(stop_on_error=True).should_stop_on("anything") is True


def test_with_options_returns_a_new_config():
    config = ValidatorConfig()
    changed = config.with_options(lang="es")

    assert changed.lang == "es"
    assert config.lang == "en"


def test_invalid_options_raise_config_invalid():
    with pytest.raises(ConfigInvalidException) as exc_info:
        build_config(lang="")

    assert exc_info.value.error_type == "config_invalid"
    assert "lang" in exc_info.value.message
    assert isinstance(exc_info.value, ValueError)


def test_configure_replaces_default_and_keeps_other_options():
    configure(stop_on_error=True)
    configure(lang="es")

    config = get_default_config()
    assert config.lang == "es"
    assert config.stop_on_error is True
    assert config.attribute_formatter is formatter


def test_lang_from_environment(monkeypatch):
    import importlib

    import fast_rules.config as config_module

    monkeypatch.setenv("FAST_RULES_LANG", "es")
    try:
        importlib.reload(config_module)
        assert config_module.ValidatorConfig().lang == "es"
    finally:
        monkeypatch.delenv("FAST_RULES_LANG")
        importlib.reload(config_module)
