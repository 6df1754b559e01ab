"""
Pylint plugin entry point.
"""

from pylint.lint import PyLinter

from layout_linter.infrastructure.di.container import LayoutContainer
from layout_linter.use_cases.checks.layout import LAYOUT_CHECKERS


def register(linter: PyLinter) -> None:
    """Register one checker per layout rule."""
    config_loader = LayoutContainer.get_instance().get_config_loader()
    for checker_type in LAYOUT_CHECKERS:
        linter.register_checker(checker_type(linter, config_loader))
