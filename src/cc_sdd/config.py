"""Configuration loading and argument merging.

The CLI layer hands over a ParsedArgs; an optional `.cc-sdd.toml` in the
working directory supplies project defaults. Both are merged into a
ResolvedConfig, whose ResolutionContext is immutable for the rest of the run.
"""

import tomllib
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal, cast

from cc_sdd.agents.layout import AgentLayout, resolve_agent_layout
from cc_sdd.agents.registry import get_agent_definition
from cc_sdd.errors import ConfigError

OverwritePolicy = Literal["prompt", "skip", "force"]
Profile = Literal["full", "minimal"]

OVERWRITE_POLICIES: tuple[OverwritePolicy, ...] = ("prompt", "skip", "force")
PROFILES: tuple[Profile, ...] = ("full", "minimal")
SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "ja",
    "en",
    "zh-TW",
    "zh",
    "es",
    "pt",
    "de",
    "fr",
    "ru",
    "it",
    "ko",
    "ar",
)

USER_CONFIG_FILENAME = ".cc-sdd.toml"
DEFAULT_LANG = "en"
DEFAULT_KIRO_DIR = ".kiro"
DEFAULT_BACKUP_ROOT = ".cc-sdd.backup"


@dataclass(frozen=True)
class UserConfig:
    """In-memory representation of `.cc-sdd.toml`.

    Example:
      agent = "cursor"
      lang = "ja"
      overwrite = "skip"
      kiro_dir = ".kiro"
      backup_dir = ".backups/cc-sdd"

      [agent_layouts.cursor]
      commands_dir = ".cursor/commands/sdd"
    """

    agent: str | None = None
    lang: str | None = None
    overwrite: OverwritePolicy | None = None
    kiro_dir: str | None = None
    backup_dir: str | None = None
    agent_layouts: dict[str, dict[str, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedArgs:
    """Arguments produced by the command-line layer.

    ``backup`` is None when backups are off, True for the default backup
    location, or an explicit directory.
    """

    agent: str | None = None
    lang: str | None = None
    overwrite: OverwritePolicy | None = None
    yes: bool = False
    dry_run: bool = False
    backup: bool | str | None = None
    kiro_dir: str | None = None
    manifest: str | None = None
    profile: Profile | None = None
    is_global: bool = False


@dataclass(frozen=True)
class ResolutionContext:
    """Values substituted into manifest placeholders for one run."""

    agent: str
    layout: AgentLayout
    lang: str
    kiro_dir: str
    is_global: bool

    def variables(self) -> dict[str, str]:
        """Placeholder name -> literal value (the closed token set)."""
        return {
            "AGENT_DIR": self.layout.agent_dir,
            "AGENT_COMMANDS_DIR": self.layout.commands_dir,
            "AGENT_DOC": self.layout.doc_file,
            "LANG_CODE": self.lang,
            "KIRO_DIR": self.kiro_dir,
            "INSTALL_SCOPE": "global" if self.is_global else "project",
        }


@dataclass(frozen=True)
class ResolvedConfig:
    """Everything a run needs after merging args, user config and defaults."""

    context: ResolutionContext
    overwrite: OverwritePolicy
    backup_dir: Path | None
    dry_run: bool


def _optional_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{USER_CONFIG_FILENAME}: '{key}' must be a string")
    return value


def _validate_overwrite(value: str | None, origin: str) -> OverwritePolicy | None:
    if value is None:
        return None
    if value not in OVERWRITE_POLICIES:
        raise ConfigError(f"{origin}: overwrite must be one of {', '.join(OVERWRITE_POLICIES)}")
    return cast(OverwritePolicy, value)


def load_user_config(config_dir: Path) -> UserConfig:
    """Load `.cc-sdd.toml` from the given directory if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or has wrongly typed values
    """
    cfg_path = config_dir / USER_CONFIG_FILENAME
    if not cfg_path.exists():
        return UserConfig()

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{cfg_path}: invalid TOML ({e})") from e

    layouts_raw = data.get("agent_layouts", {})
    if not isinstance(layouts_raw, dict):
        raise ConfigError(f"{USER_CONFIG_FILENAME}: [agent_layouts] must be a table")
    agent_layouts = {
        str(agent): {str(k): str(v) for k, v in layout.items()}
        for agent, layout in layouts_raw.items()
        if isinstance(layout, dict)
    }

    return UserConfig(
        agent=_optional_str(data, "agent"),
        lang=_optional_str(data, "lang"),
        overwrite=_validate_overwrite(_optional_str(data, "overwrite"), USER_CONFIG_FILENAME),
        kiro_dir=_optional_str(data, "kiro_dir"),
        backup_dir=_optional_str(data, "backup_dir"),
        agent_layouts=agent_layouts,
    )


def _resolve_backup_dir(
    backup: bool | str | None,
    configured: str | None,
    cwd: Path,
    now: datetime,
) -> Path | None:
    if backup is None or backup is False:
        return None
    if isinstance(backup, str):
        return cwd / backup
    if configured is not None:
        return cwd / configured
    stamp = now.strftime("%Y%m%dT%H%M%SZ")
    return cwd / DEFAULT_BACKUP_ROOT / stamp


def merge_config_and_args(
    args: ParsedArgs,
    user_config: UserConfig,
    *,
    cwd: Path,
    home: Path,
    now: datetime | None = None,
) -> ResolvedConfig:
    """Merge CLI args over user config over defaults.

    Merge rules:
    - agent, lang, kiro_dir, overwrite: args win, then user config, then defaults
    - yes: forces overwrite to "force"
    - backup: only enabled by args; the directory comes from the arg value,
      then user config, then a timestamped directory under .cc-sdd.backup/

    Raises:
        ConfigError: If no agent is selected or any value is invalid
    """
    agent = args.agent or user_config.agent
    if agent is None:
        raise ConfigError("No agent selected")
    get_agent_definition(agent)

    lang = args.lang or user_config.lang or DEFAULT_LANG
    if lang not in SUPPORTED_LANGUAGES:
        raise ConfigError(f"Unsupported language: {lang}")

    kiro_dir = args.kiro_dir or user_config.kiro_dir or DEFAULT_KIRO_DIR
    if not kiro_dir.strip():
        raise ConfigError("kiro dir must not be empty")

    overwrite: OverwritePolicy = args.overwrite or user_config.overwrite or "prompt"
    if args.yes:
        overwrite = "force"

    layout = resolve_agent_layout(
        agent,
        overrides=user_config.agent_layouts.get(agent, {}),
        is_global=args.is_global,
        home=home,
    )

    context = ResolutionContext(
        agent=agent,
        layout=layout,
        lang=lang,
        kiro_dir=kiro_dir,
        is_global=args.is_global,
    )

    backup_dir = _resolve_backup_dir(
        args.backup,
        user_config.backup_dir,
        cwd,
        now if now is not None else datetime.now(UTC),
    )

    return ResolvedConfig(
        context=context,
        overwrite=overwrite,
        backup_dir=backup_dir,
        dry_run=args.dry_run,
    )
