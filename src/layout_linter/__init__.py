"""Layout checks and fixes for Python source: blank lines, alignment, member order, collections."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def register(linter):  # type: ignore[no-untyped-def]
    """Pylint plugin hook; see :mod:`layout_linter.checker`."""
    from layout_linter.checker import register as register_checkers

    register_checkers(linter)


__all__ = ["__version__", "register"]
