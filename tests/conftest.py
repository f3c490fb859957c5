"""
Pytest configuration and shared fixtures for fast-rules tests.
"""

import pytest
from faker import Faker

from fast_rules.config import reset_default_config
from fast_rules.core import localization
from fast_rules.core.rule_registry import reset_default_registry

fake = Faker()


@pytest.fixture
def sample_data():
    """Provide sample data for tests."""
    return {
        "name": fake.name(),
        "email": fake.email(),
        "company": fake.company(),
        "age": fake.random_int(min=18, max=90),
    }


@pytest.fixture(autouse=True)
def fresh_defaults():
    """Every test starts from the built-in registry, catalogs and config."""
    reset_default_registry()
    reset_default_config()
    localization.clear_cache()
    yield
    reset_default_registry()
    reset_default_config()
    localization.clear_cache()


# Configure pytest-asyncio
pytest_plugins = ['pytest_asyncio']


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by `setup_logging`."""
    import logging

    import fast_rules.utils.logging as logging_utils

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging_utils._logging_configured = False
    logging_utils._log_file_path = None
