"""Interactive console backed by click prompts."""

import click

from cc_sdd.gateway.console.abc import Choice, Console


class InteractiveConsole(Console):
    """Prompts on the controlling terminal via click.prompt / click.confirm."""

    def choose(self, message: str, choices: tuple[Choice, ...], default_index: int) -> str:
        click.echo(message, err=True)
        for number, choice in enumerate(choices, start=1):
            click.echo(f"  {number}) {choice.label}", err=True)
            click.echo(click.style(f"     {choice.description}", dim=True), err=True)

        selected = click.prompt(
            "Select",
            type=click.IntRange(1, len(choices)),
            default=default_index + 1,
            err=True,
        )
        return choices[selected - 1].value

    def confirm(self, message: str, *, default: bool) -> bool:
        return click.confirm(message, default=default, err=True)
