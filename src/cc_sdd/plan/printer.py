"""Human-readable rendering of a plan, used by dry runs and run summaries."""

from rich.console import Console
from rich.table import Table

from cc_sdd.plan.operations import FileOperation
from cc_sdd.plan.policies import CategoryPolicy, CategorySummary

_ACTION_STYLES = {
    "create": "[green]create[/green]",
    "unchanged": "[dim]unchanged[/dim]",
    "overwrite": "[red]overwrite[/red]",
    "keep": "[yellow]keep[/yellow]",
    "ask": "[cyan]ask[/cyan]",
    "error": "[bold red]error[/bold red]",
}


def planned_action(op: FileOperation, policy: CategoryPolicy) -> str:
    """Describe what the executor would do with an operation under a policy."""
    if op.error is not None:
        return "error"
    if not op.existing:
        return "create"
    if op.identical:
        return "unchanged"
    if policy == "force":
        return "overwrite"
    if policy == "prompt":
        return "ask"
    return "keep"


def build_summary_table(summaries: tuple[CategorySummary, ...]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Total", justify="right")
    table.add_column("New", justify="right")
    table.add_column("Identical", justify="right")
    table.add_column("Conflicting", justify="right")
    table.add_column("Failed", justify="right")

    for summary in summaries:
        conflicting = str(summary.conflicting)
        if summary.conflicting:
            conflicting = f"[yellow]{conflicting}[/yellow]"
        table.add_row(
            summary.category,
            str(summary.total),
            str(summary.new),
            str(summary.identical),
            conflicting,
            f"[red]{summary.failed}[/red]" if summary.failed else "0",
        )
    return table


def build_artifact_table(
    operations: tuple[FileOperation, ...],
    policies: dict[str, CategoryPolicy],
) -> Table:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Target", no_wrap=True)
    table.add_column("Source", style="dim", no_wrap=True)
    table.add_column("Action", no_wrap=True)

    for op in operations:
        action = planned_action(op, policies.get(op.category, "skip"))
        table.add_row(op.category, op.rel_target, op.artifact.source, _ACTION_STYLES[action])
    return table


def print_summary(console: Console, summaries: tuple[CategorySummary, ...]) -> None:
    """Print the per-category counts."""
    console.print("[bold]Plan summary:[/bold]")
    console.print(build_summary_table(summaries))


def print_dry_run_report(
    console: Console,
    summaries: tuple[CategorySummary, ...],
    operations: tuple[FileOperation, ...],
    policies: dict[str, CategoryPolicy],
) -> None:
    """Print the full dry-run report: summaries and one row per artifact."""
    print_summary(console, summaries)
    console.print()
    console.print("[bold]Artifact details:[/bold]")
    console.print(build_artifact_table(operations, policies))
    console.print()
    console.print("[dim]Dry run: no files were written.[/dim]")
