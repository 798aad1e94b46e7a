"""cc-sdd CLI entry point.

Scaffolds spec-driven development commands, shared settings and a project
memory document for an AI coding agent. See `cc-sdd --help` for details.
"""

from cc_sdd.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `cc-sdd` console script."""
    cli()
