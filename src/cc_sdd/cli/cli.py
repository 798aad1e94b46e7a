import logging
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console as RichConsole

from cc_sdd.agents.guide import format_completion_guide
from cc_sdd.agents.registry import (
    AGENT_ALIAS_FLAGS,
    AGENT_DEFINITIONS,
    DEFAULT_AGENT,
    list_agents,
)
from cc_sdd.cli.context import CliContext, create_context
from cc_sdd.config import (
    DEFAULT_KIRO_DIR,
    OVERWRITE_POLICIES,
    PROFILES,
    SUPPORTED_LANGUAGES,
    ParsedArgs,
    ResolvedConfig,
    load_user_config,
    merge_config_and_args,
)
from cc_sdd.errors import CcSddError
from cc_sdd.gateway.console.abc import Choice
from cc_sdd.manifest.paths import resolve_manifest_path
from cc_sdd.output import user_error, user_output, user_success, user_warning
from cc_sdd.pipeline import PreparedRun, apply_run, prepare_run, resolve_dry_run_policies
from cc_sdd.plan.printer import print_dry_run_report, print_summary
from cc_sdd.plan.render import render_template

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# ctx.meta key collecting agents selected through alias flags
_ALIAS_META_KEY = "cc_sdd.alias_agents"

# Value of a bare --backup (no directory given)
_DEFAULT_BACKUP = "__default__"


def _record_alias(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        ctx.meta.setdefault(_ALIAS_META_KEY, []).append(AGENT_ALIAS_FLAGS[param.opts[0]])


def agent_alias_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add one boolean flag per agent alias (e.g. --claude, --cursor)."""
    for flag in reversed(list(AGENT_ALIAS_FLAGS)):
        func = click.option(
            flag,
            is_flag=True,
            expose_value=False,
            callback=_record_alias,
            help=f"Alias for --agent {AGENT_ALIAS_FLAGS[flag]}",
        )(func)
    return func


def _select_agent(ctx: click.Context, agent: str | None) -> str | None:
    selected = set(ctx.meta.get(_ALIAS_META_KEY, []))
    if agent is not None:
        selected.add(agent)
    if len(selected) > 1:
        raise click.UsageError(
            "agent flag conflict between multiple agent selections: " + ", ".join(sorted(selected))
        )
    return selected.pop() if selected else None


def agent_choices(kiro_dir: str) -> tuple[Choice, ...]:
    """One choice per registered agent, with descriptions rendered for ``kiro_dir``."""
    variables = {"KIRO_DIR": kiro_dir}
    return tuple(
        Choice(
            value=agent,
            label=definition.label,
            description=render_template(definition.description, variables),
        )
        for agent, definition in AGENT_DEFINITIONS.items()
    )


def _prompt_for_agent(cli_ctx: CliContext, kiro_dir: str) -> str:
    """Ask which agent to set up; non-interactive runs get the default agent."""
    if not cli_ctx.terminal.is_stdin_interactive():
        return DEFAULT_AGENT

    return cli_ctx.console.choose(
        "Select the agent to set up:", agent_choices(kiro_dir), list_agents().index(DEFAULT_AGENT)
    )


def _report_outcome_and_exit(prepared: PreparedRun, config: ResolvedConfig, cli_ctx: CliContext) -> None:
    outcome = apply_run(
        prepared,
        config,
        console=cli_ctx.console,
        terminal=cli_ctx.terminal,
        cwd=cli_ctx.cwd,
        home=cli_ctx.home,
    )
    for warning in outcome.warnings:
        user_warning(warning)

    result = outcome.result
    user_success(f"Setup completed: written={result.written}, skipped={result.skipped}")
    if config.backup_dir is not None:
        user_output(f"Backups (if any): {config.backup_dir}")

    if not result.ok:
        for error in result.errors:
            user_error(str(error))
        raise SystemExit(1)

    user_output()
    for line in format_completion_guide(config.context.agent, kiro_dir=config.context.kiro_dir):
        user_output(line)


@click.command("cc-sdd", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="cc-sdd")
@click.option("--agent", type=click.Choice(list_agents()), help="Select agent")
@agent_alias_options
@click.option("--lang", type=click.Choice(SUPPORTED_LANGUAGES), help="Language (default: en)")
@click.option(
    "--global",
    "is_global",
    is_flag=True,
    help="Install commands globally (e.g. ~/.cursor/commands)",
)
@click.option("--kiro-dir", help="Kiro root dir (default: .kiro)")
@click.option(
    "--overwrite",
    type=click.Choice(OVERWRITE_POLICIES),
    help="prompt: ask for each file, skip: never overwrite, force: always overwrite",
)
@click.option(
    "--backup",
    is_flag=False,
    flag_value=_DEFAULT_BACKUP,
    default=None,
    help="Back up files before overwriting, optionally into the given dir",
)
@click.option("--profile", type=click.Choice(PROFILES), help="Template profile (default: full)")
@click.option("--manifest", help="Manifest JSON path for planning")
@click.option("--dry-run", is_flag=True, help="Print the plan only")
@click.option("--yes", "-y", is_flag=True, help="Skip prompts (prompt -> force)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    agent: str | None,
    lang: str | None,
    is_global: bool,
    kiro_dir: str | None,
    overwrite: str | None,
    backup: str | None,
    profile: str | None,
    manifest: str | None,
    dry_run: bool,
    yes: bool,
    debug: bool,
) -> None:
    """Set up spec-driven development commands and settings for an AI coding agent.

    In non-interactive environments, prompt mode falls back to skip.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()
    cli_ctx: CliContext = ctx.obj

    selected_agent = _select_agent(ctx, agent)

    try:
        user_config = load_user_config(cli_ctx.cwd)
        if selected_agent is None and user_config.agent is None:
            selected_agent = _prompt_for_agent(
                cli_ctx, kiro_dir or user_config.kiro_dir or DEFAULT_KIRO_DIR
            )

        args = ParsedArgs(
            agent=selected_agent,
            lang=lang,
            overwrite=overwrite,  # type: ignore[arg-type]
            yes=yes,
            dry_run=dry_run,
            backup=True if backup == _DEFAULT_BACKUP else backup,
            kiro_dir=kiro_dir,
            manifest=manifest,
            profile=profile,  # type: ignore[arg-type]
            is_global=is_global,
        )
        config = merge_config_and_args(
            args, user_config, cwd=cli_ctx.cwd, home=cli_ctx.home, now=cli_ctx.now
        )

        manifest_path = resolve_manifest_path(
            config.context.agent,
            profile=args.profile,
            manifest_arg=str(cli_ctx.cwd / args.manifest) if args.manifest else None,
            templates_root=cli_ctx.templates_root,
            is_global=config.context.is_global,
        )
        prepared = prepare_run(
            config, manifest_path, cwd=cli_ctx.cwd, templates_root=cli_ctx.templates_root
        )
    except CcSddError as e:
        user_error(str(e))
        raise SystemExit(1) from e

    console = RichConsole(stderr=True, width=200)
    if config.dry_run:
        policies = resolve_dry_run_policies(prepared, config, cli_ctx.terminal)
        for warning in policies.warnings:
            user_warning(warning)
        print_dry_run_report(console, prepared.summaries, prepared.operations, policies.policies)
        return

    print_summary(console, prepared.summaries)
    try:
        _report_outcome_and_exit(prepared, config, cli_ctx)
    except CcSddError as e:
        user_error(str(e))
        raise SystemExit(1) from e
