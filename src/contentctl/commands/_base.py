"""Click classes shared by the contentctl commands.

Every command and group can carry a block of author-facing examples
(``contentctl query list posts --tag ebay``).  They are kept out of
``--help`` and printed by ``--examples`` instead, which exits before any
content is loaded.
"""

from __future__ import annotations

from typing import Any

import click

EXAMPLES_HEADER = "Examples for '{path}':\n"


class ExamplesMixin:
    """Registers an eager ``--examples`` flag when examples are supplied."""

    examples: str | None = None

    def _register_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        assert isinstance(self, click.Command)
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(EXAMPLES_HEADER.format(path=ctx.command_path))
        click.echo(self.examples)
        ctx.exit(0)


class ContentCommand(ExamplesMixin, click.Command):
    """A leaf command such as ``check``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._register_examples(examples)


class ContentGroup(ExamplesMixin, click.Group):
    """A command group such as ``query``; its subcommands are ContentCommands."""

    command_class = ContentCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._register_examples(examples)
