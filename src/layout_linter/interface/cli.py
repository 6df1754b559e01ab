"""CLI entry points for layout-linter - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from layout_linter.domain.config import ConfigurationError, ConfigurationLoader
from layout_linter.domain.protocols import AstroidProtocol, FileSystemProtocol, TelemetryPort
from layout_linter.domain.rule_msgs import MESSAGES
from layout_linter.domain.rules.catalog import RuleCatalog
from layout_linter.interface.reporters import LayoutReporter
from layout_linter.use_cases.apply_fixes import DEFAULT_MAX_PASSES, ApplyFixesUseCase
from layout_linter.use_cases.check_layout import CheckLayoutUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    reporter: LayoutReporter
    astroid_gateway: AstroidProtocol
    filesystem: FileSystemProtocol


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> str:
        """Resolve target path: explicit path, else src/ if exists, else '.' (public API)."""
        if path and str(path) != ".":
            return str(path)
        src_dir = Path.cwd() / "src"
        if src_dir.is_dir():
            return "src"
        return "."

    @staticmethod
    def validate_rules(rules: Optional[List[str]]) -> Optional[List[str]]:
        """Reject unknown rule names before any file is read."""
        if not rules:
            return None
        unknown = [r for r in rules if r not in RuleCatalog.RULE_TYPES]
        if unknown:
            raise typer.BadParameter(
                f"unknown rule(s): {', '.join(unknown)}; choose from {', '.join(RuleCatalog.names())}"
            )
        return rules

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="layout-linter",
            help="layout-linter: check and repair blank lines, alignment, member order and collection layout.",
            add_completion=False,
        )

        def check_use_case() -> CheckLayoutUseCase:
            return CheckLayoutUseCase(
                filesystem=deps.filesystem,
                astroid_gateway=deps.astroid_gateway,
                telemetry=deps.telemetry,
                config_loader=deps.config_loader,
            )

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
        ) -> None:
            if verbose:
                logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
                logging.getLogger("layout_linter").setLevel(logging.DEBUG)

        @app.command()
        def check(
            path: Optional[Path] = typer.Argument(None, help="File or directory to check (default: src/ or .)"),  # noqa: B008
            rule: Optional[List[str]] = typer.Option(None, "--rule", "-r", help="Only run this rule (repeatable)"),  # noqa: B008
        ) -> None:
            """Report layout violations; exits 1 when any are found."""
            deps.telemetry.handshake()
            rules = CLIAppFactory.validate_rules(rule)
            target_path = CLIAppFactory.resolve_target_path(path)
            if not deps.filesystem.exists(target_path):
                raise typer.BadParameter(f"path does not exist: {target_path}")
            try:
                reports = check_use_case().execute(target_path, rules)
            except ConfigurationError as exc:
                deps.telemetry.error(f"Invalid configuration: {exc}")
                raise typer.Exit(code=2) from exc
            deps.reporter.report_check(reports)
            if any(r.diagnostics or r.error for r in reports):
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: src/ or .)"),  # noqa: B008
            rule: Optional[List[str]] = typer.Option(None, "--rule", "-r", help="Only apply this rule (repeatable)"),  # noqa: B008
            max_passes: int = typer.Option(
                DEFAULT_MAX_PASSES, "--max-passes", min=1, help="Maximum fix passes per file"),
            dry_run: bool = typer.Option(
                False, "--dry-run", help="Compute fixes without writing files"),
            backup: bool = typer.Option(
                False, "--backup", help="Write a .bak copy before changing a file"),
        ) -> None:
            """Apply layout fixes to a fixpoint; exits 1 when violations remain."""
            deps.telemetry.handshake()
            rules = CLIAppFactory.validate_rules(rule)
            target_path = CLIAppFactory.resolve_target_path(path)
            if not deps.filesystem.exists(target_path):
                raise typer.BadParameter(f"path does not exist: {target_path}")
            use_case = ApplyFixesUseCase(
                check_layout=check_use_case(),
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                max_passes=max_passes,
                create_backups=backup,
            )
            try:
                results = use_case.execute(target_path, rules, dry_run=dry_run)
            except ConfigurationError as exc:
                deps.telemetry.error(f"Invalid configuration: {exc}")
                raise typer.Exit(code=2) from exc
            deps.reporter.report_fixes(results, dry_run=dry_run)
            if any(r.remaining or r.error for r in results):
                raise typer.Exit(code=1)

        @app.command(name="rules")
        def list_rules() -> None:
            """List the rules, their message codes and whether they are enabled."""
            for name in RuleCatalog.names():
                state = "enabled" if deps.config_loader.is_enabled(name) else "disabled"
                typer.echo(f"{name} ({state})")
                for message in MESSAGES:
                    if message.rule == name:
                        typer.echo(f"  {message.code} {message.symbol}: {message.description}")

        return app
