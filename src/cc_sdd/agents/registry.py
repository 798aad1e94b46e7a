"""Registry of supported agents and their fixed directory layouts.

Each agent is a plain data record keyed by its identifier. The table is built
once at import time and never mutated.
"""

from dataclasses import dataclass, field
from types import MappingProxyType

from cc_sdd.errors import ConfigError


@dataclass(frozen=True)
class AgentLayoutDefaults:
    """Where an agent expects its installed artifacts."""

    commands_dir: str
    global_commands_dir: str | None
    agent_dir: str
    doc_file: str


@dataclass(frozen=True)
class AgentCommandHints:
    """How the agent invokes the installed commands, shown after setup."""

    spec: str
    steering: str
    steering_custom: str


@dataclass(frozen=True)
class AgentCompletionGuide:
    """Extra next-step instructions printed around the standard guide."""

    prepend_steps: tuple[str, ...] = ()
    append_steps: tuple[str, ...] = ()


@dataclass(frozen=True)
class AgentDefinition:
    """Static description of one supported agent."""

    label: str
    description: str
    alias_flags: tuple[str, ...]
    layout: AgentLayoutDefaults
    commands: AgentCommandHints
    recommended_models: tuple[str, ...] = ()
    completion_guide: AgentCompletionGuide = field(default_factory=AgentCompletionGuide)


_CODEX_COPY_INSTRUCTION = (
    "Move Codex Custom prompts to ~/.codex/prompts by running:\n"
    "    mkdir -p ~/.codex/prompts \\\n"
    "      && cp -Ri ./.codex/prompts/. ~/.codex/prompts/ \\\n"
    "      && rm -rf ./.codex/prompts"
)

_KIRO_COLON_HINTS = AgentCommandHints(
    spec="`/kiro:spec-init <what-to-build>`",
    steering="`/kiro:steering`",
    steering_custom="`/kiro:steering-custom <what-to-create-custom-steering-document>`",
)

_KIRO_DASH_HINTS = AgentCommandHints(
    spec="`/kiro-spec-init <what-to-build>`",
    steering="`/kiro-steering`",
    steering_custom="`/kiro-steering-custom <what-to-create-custom-steering-document>`",
)

_GPT_MODELS = ("gpt-5.1-codex medium/high", "gpt-5.1 medium/high")

AGENT_DEFINITIONS: MappingProxyType[str, AgentDefinition] = MappingProxyType(
    {
        "claude-code": AgentDefinition(
            label="Claude Code",
            description=(
                "Installs kiro prompts in `.claude/commands/kiro/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and a CLAUDE.md quickstart."
            ),
            alias_flags=("--claude-code", "--claude"),
            recommended_models=("Claude 4.5 Sonnet or newer",),
            layout=AgentLayoutDefaults(
                commands_dir=".claude/commands/kiro",
                global_commands_dir="~/.claude/commands",
                agent_dir=".claude",
                doc_file="CLAUDE.md",
            ),
            commands=_KIRO_COLON_HINTS,
        ),
        "claude-code-agent": AgentDefinition(
            label="Claude Code Agents",
            description=(
                "Installs kiro prompts in `.claude/commands/kiro/`, a Claude agent library in "
                "`.claude/agents/kiro/`, shared settings in `{{KIRO_DIR}}/settings/`, "
                "and a CLAUDE.md quickstart."
            ),
            alias_flags=("--claude-code-agent", "--claude-agent"),
            recommended_models=("Claude 4.5 Sonnet or newer",),
            layout=AgentLayoutDefaults(
                commands_dir=".claude/commands/kiro",
                global_commands_dir="~/.claude/commands",
                agent_dir=".claude",
                doc_file="CLAUDE.md",
            ),
            commands=AgentCommandHints(
                spec="`/kiro:spec-quick <what-to-build>`",
                steering=_KIRO_COLON_HINTS.steering,
                steering_custom=_KIRO_COLON_HINTS.steering_custom,
            ),
        ),
        "codex": AgentDefinition(
            label="Codex CLI",
            description=(
                "Installs kiro prompts in `.codex/prompts/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and an AGENTS.md quickstart."
            ),
            alias_flags=("--codex", "--codex-cli"),
            recommended_models=_GPT_MODELS,
            layout=AgentLayoutDefaults(
                commands_dir=".codex/prompts",
                global_commands_dir="~/.codex/prompts",
                agent_dir=".codex",
                doc_file="AGENTS.md",
            ),
            commands=AgentCommandHints(
                spec="`/prompts:kiro-spec-init <what-to-build>`",
                steering="`/prompts:kiro-steering`",
                steering_custom=(
                    "`/prompts:kiro-steering-custom <what-to-create-custom-steering-document>`"
                ),
            ),
            completion_guide=AgentCompletionGuide(prepend_steps=(_CODEX_COPY_INSTRUCTION,)),
        ),
        "cursor": AgentDefinition(
            label="Cursor IDE",
            description=(
                "Installs kiro prompts in `.cursor/commands/kiro/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and an AGENTS.md quickstart."
            ),
            alias_flags=("--cursor",),
            recommended_models=("Claude 4.5 Sonnet thinking mode or newer", *_GPT_MODELS),
            layout=AgentLayoutDefaults(
                commands_dir=".cursor/commands/kiro",
                global_commands_dir="~/.cursor/commands",
                agent_dir=".cursor",
                doc_file="AGENTS.md",
            ),
            commands=AgentCommandHints(
                spec="`/kiro/spec-init <what-to-build>`",
                steering="`/kiro/steering`",
                steering_custom="`/kiro/steering-custom <what-to-create-custom-steering-document>`",
            ),
        ),
        "github-copilot": AgentDefinition(
            label="GitHub Copilot",
            description=(
                "Installs kiro prompts in `.github/prompts/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and an AGENTS.md quickstart."
            ),
            alias_flags=("--copilot", "--github-copilot"),
            recommended_models=("Claude 4.5 Sonnet thinking mode or newer", *_GPT_MODELS),
            layout=AgentLayoutDefaults(
                commands_dir=".github/prompts",
                global_commands_dir=None,
                agent_dir=".github",
                doc_file="AGENTS.md",
            ),
            commands=_KIRO_DASH_HINTS,
        ),
        "gemini-cli": AgentDefinition(
            label="Gemini CLI",
            description=(
                "Installs kiro prompts in `.gemini/commands/kiro/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and a GEMINI.md quickstart."
            ),
            alias_flags=("--gemini-cli", "--gemini"),
            recommended_models=("Gemini 2.5 Pro or newer",),
            layout=AgentLayoutDefaults(
                commands_dir=".gemini/commands/kiro",
                global_commands_dir="~/.gemini/commands",
                agent_dir=".gemini",
                doc_file="GEMINI.md",
            ),
            commands=_KIRO_COLON_HINTS,
        ),
        "windsurf": AgentDefinition(
            label="Windsurf IDE",
            description=(
                "Installs kiro workflows in `.windsurf/workflows/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and an AGENTS.md quickstart."
            ),
            alias_flags=("--windsurf",),
            recommended_models=("Claude 4.5 Sonnet or newer", *_GPT_MODELS),
            layout=AgentLayoutDefaults(
                commands_dir=".windsurf/workflows",
                global_commands_dir=None,
                agent_dir=".windsurf",
                doc_file="AGENTS.md",
            ),
            commands=_KIRO_DASH_HINTS,
        ),
        "antigravity": AgentDefinition(
            label="Google Antigravity",
            description=(
                "Installs kiro workflows in `.agent/workflows/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and an AGENTS.md quickstart."
            ),
            alias_flags=("--antigravity", "--ag"),
            layout=AgentLayoutDefaults(
                commands_dir=".agent/workflows",
                global_commands_dir="~/.gemini/antigravity/global_workflows",
                agent_dir=".agent",
                doc_file="AGENTS.md",
            ),
            commands=_KIRO_DASH_HINTS,
        ),
        "qwen-code": AgentDefinition(
            label="Qwen Code",
            description=(
                "Installs kiro prompts in `.qwen/commands/kiro/`, shared settings in "
                "`{{KIRO_DIR}}/settings/`, and a QWEN.md quickstart."
            ),
            alias_flags=("--qwen-code", "--qwen"),
            layout=AgentLayoutDefaults(
                commands_dir=".qwen/commands/kiro",
                global_commands_dir="~/.qwen/commands",
                agent_dir=".qwen",
                doc_file="QWEN.md",
            ),
            commands=AgentCommandHints(
                spec=_KIRO_COLON_HINTS.spec,
                steering=_KIRO_COLON_HINTS.steering,
                steering_custom="`/kiro:steering-custom`",
            ),
        ),
    }
)

DEFAULT_AGENT = "claude-code"

# Alias flag (e.g. "--claude") -> agent id
AGENT_ALIAS_FLAGS: MappingProxyType[str, str] = MappingProxyType(
    {
        flag: agent
        for agent, definition in AGENT_DEFINITIONS.items()
        for flag in definition.alias_flags
    }
)


def list_agents() -> list[str]:
    """Return all agent identifiers in registry order."""
    return list(AGENT_DEFINITIONS)


def get_agent_definition(agent: str) -> AgentDefinition:
    """Look up an agent by identifier.

    Raises:
        ConfigError: If the agent is not registered
    """
    if agent not in AGENT_DEFINITIONS:
        known = ", ".join(AGENT_DEFINITIONS)
        raise ConfigError(f"Unknown agent: {agent} (expected one of: {known})")
    return AGENT_DEFINITIONS[agent]
