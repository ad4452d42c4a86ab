"""Pytest configuration.

pythonpath in pyproject.toml puts src/ and the project root on sys.path, so
tests import ``solidity_style_linter`` and ``tests.unit.checker_test_utils``
without an install.
"""

import pytest

from solidity_style_linter.domain.config import ConfigurationLoader


@pytest.fixture(autouse=True)
def reset_configuration_loader():
    ConfigurationLoader.reset()
    yield
    ConfigurationLoader.reset()
