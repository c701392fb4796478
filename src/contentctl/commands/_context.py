"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands through
``@click.pass_obj``.  Builds the repository lazily and owns result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from contentctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from contentctl.config.settings import ContentSettings
    from contentctl.infrastructure.repository import ContentRepository
    from contentctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The repository is created on first use so ``--help`` and ``--version``
    never touch the content store.
    """

    def __init__(self, settings: ContentSettings) -> None:
        self.settings = settings
        self._repository: ContentRepository | None = None

        from contentctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def repository(self) -> ContentRepository:
        """The content repository (created lazily on first access)."""
        if self._repository is None:
            from contentctl.infrastructure.repository import ContentRepository

            self._repository = ContentRepository.from_settings(self.settings)
        return self._repository

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout.  Warnings go to stderr in human mode so
          they never pollute piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
