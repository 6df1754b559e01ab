"""Pytest configuration.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ and
the project root on sys.path so ``tests.rule_test_utils`` is importable.
"""

from unittest.mock import MagicMock

import pytest

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from layout_linter.use_cases.check_layout import CheckLayoutUseCase


@pytest.fixture
def telemetry() -> MagicMock:
    return MagicMock()


@pytest.fixture
def check_layout(telemetry: MagicMock) -> CheckLayoutUseCase:
    """CheckLayoutUseCase over a mocked filesystem with default configuration."""
    filesystem = MagicMock()
    filesystem.relative_path.side_effect = lambda path: path
    return CheckLayoutUseCase(
        filesystem=filesystem,
        astroid_gateway=AstroidGateway(),
        telemetry=telemetry,
        config_loader=ConfigurationLoader(),
    )
