"""User-facing output helpers.

All human-readable progress goes to stderr so stdout stays free for
anything a caller may want to pipe.
"""

import click


def user_output(message: str = "") -> None:
    """Print a message for the user on stderr."""
    click.echo(message, err=True)


def user_error(message: str) -> None:
    """Print an error message with the red ``Error:`` prefix."""
    user_output(click.style("Error: ", fg="red") + message)


def user_warning(message: str) -> None:
    """Print a warning message with the yellow warning prefix."""
    user_output(click.style("⚠️  ", fg="yellow") + message)


def user_success(message: str) -> None:
    """Print a success line with a green check mark."""
    user_output(click.style("✓ ", fg="green") + message)
