"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import sys

from layout_linter.domain.config import ConfigurationError
from layout_linter.infrastructure.di.container import LayoutContainer
from layout_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    try:
        container = LayoutContainer()
    except ConfigurationError as exc:
        print(f"layout-linter: invalid configuration: {exc}", file=sys.stderr)
        sys.exit(2)

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        reporter=container.get_reporter(),
        astroid_gateway=container.get_astroid_gateway(),
        filesystem=container.get_filesystem_gateway(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
