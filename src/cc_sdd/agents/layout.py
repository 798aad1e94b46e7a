"""Resolve the concrete directory layout for the selected agent."""

from dataclasses import dataclass, fields, replace
from pathlib import Path

from cc_sdd.agents.registry import get_agent_definition
from cc_sdd.errors import ConfigError


@dataclass(frozen=True)
class AgentLayout:
    """Layout used for one run, after user overrides and global install."""

    commands_dir: str
    agent_dir: str
    doc_file: str


LAYOUT_FIELDS = frozenset(f.name for f in fields(AgentLayout))


def _expand_home(path: str, home: Path) -> str:
    if path.startswith("~/"):
        return str(home / path[2:])
    return path


def resolve_agent_layout(
    agent: str,
    *,
    overrides: dict[str, str],
    is_global: bool,
    home: Path,
) -> AgentLayout:
    """Merge registry defaults with user overrides.

    Args:
        agent: Agent identifier
        overrides: Layout fields from user config (subset of LAYOUT_FIELDS)
        is_global: Install commands into the agent's user-level directory
        home: Home directory used to expand ``~/`` in global paths

    Returns:
        The resolved AgentLayout

    Raises:
        ConfigError: Unknown agent, unknown override field, or global install
            requested for an agent without a global commands directory
    """
    definition = get_agent_definition(agent)
    defaults = definition.layout

    unknown = sorted(set(overrides) - LAYOUT_FIELDS)
    if unknown:
        raise ConfigError(f"Unknown layout field(s) for agent '{agent}': {', '.join(unknown)}")

    layout = replace(
        AgentLayout(
            commands_dir=defaults.commands_dir,
            agent_dir=defaults.agent_dir,
            doc_file=defaults.doc_file,
        ),
        **overrides,
    )

    if is_global:
        if defaults.global_commands_dir is None:
            raise ConfigError(f"Agent '{definition.label}' does not support global installation.")
        layout = replace(layout, commands_dir=_expand_home(defaults.global_commands_dir, home))

    return layout
