from __future__ import annotations

import logging

from fast_rules.utils.logging import get_log_file_path, setup_logging


def test_logging_uses_custom_file_name(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.delenv("LOG_FILE_NAME", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "log"))

    setup_logging(log_file_name="rules.log")

    path = get_log_file_path()
    assert path is not None
    assert path.name == "rules.log"
    assert path.parent.name == "log"
    assert path.parent.exists()
    assert [type(handler) for handler in logging.getLogger().handlers] == [logging.FileHandler]


def test_logging_level_from_environment(monkeypatch, restore_root_logging):
    monkeypatch.delenv("LOG_FILE_NAME", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")

    setup_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert get_log_file_path() is None
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_debug_env_adds_console_next_to_file(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_FILE_NAME", "from_env.log")
    monkeypatch.setenv("ENV", "debug")

    setup_logging()

    assert get_log_file_path() == tmp_path / "from_env.log"
    assert len(logging.getLogger().handlers) == 2


def test_repeated_setup_is_a_no_op(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.delenv("ENV", raising=False)

    setup_logging(log_file_name="same.log")
    handlers = list(logging.getLogger().handlers)
    setup_logging(log_file_name="same.log")

    assert logging.getLogger().handlers == handlers
