"""Repository configuration for smartcommit.

Settings are read from a config file in the repository root (the first of
.smartcommit.yaml, .smartcommit.yml, .smartcommit.json, .smartcommitter.json
that exists) or an explicit path, then overridden by command-line options.
"""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from smartcommit.config import LLMProvider
from smartcommit.git.diff import DiffSource
from smartcommit.styles import StyleProfile
from smartcommit.templates import DEFAULT_TEMPLATES_DIR

CONFIG_FILE_NAMES = [
    ".smartcommit.yaml",
    ".smartcommit.yml",
    ".smartcommit.json",
    ".smartcommitter.json",
]

DEFAULT_MAX_DIFF_SIZE = 10000


class ConfigFileError(Exception):
    """Raised when a repository config file cannot be read or is invalid."""

    pass


class HookSettings(BaseModel):
    """Behavior when running from the prepare-commit-msg hook."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    auto_stage: bool = Field(False, alias="autoStage")
    fallback_message: str = Field("chore: auto-commit", alias="fallbackMessage")


class CommitSettings(BaseModel):
    """Validated settings for one smartcommit run.

    Keys may be given in snake_case or in the camelCase used by
    .smartcommitter.json files (e.g. maxDiffSize, detectScope).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        use_enum_values=True,
        protected_namespaces=(),
        validate_default=True,
    )

    model: LLMProvider = LLMProvider.ANTHROPIC
    model_version: Optional[str] = Field(None, alias="modelVersion")
    style: StyleProfile = StyleProfile.PLAIN
    lang: str = "en"
    diff: DiffSource = DiffSource.STAGED
    batch: bool = False
    custom_prompt: Optional[str] = Field(None, alias="customPrompt")
    max_diff_size: int = Field(DEFAULT_MAX_DIFF_SIZE, alias="maxDiffSize", gt=0)
    apply: bool = False
    dry_run: bool = Field(False, alias="dryRun")
    detect_scope: bool = Field(False, alias="detectScope")
    scope: Optional[str] = None
    interactive: bool = False
    learn_history: bool = Field(False, alias="learnHistory")
    ensemble: bool = False
    ensemble_providers: Optional[list[str]] = Field(None, alias="ensembleProviders")
    template: Optional[str] = None
    templates_dir: str = Field(DEFAULT_TEMPLATES_DIR, alias="templatesDir")
    analyze: bool = False
    hooks: HookSettings = Field(default_factory=HookSettings)

    @field_validator("model", mode="before")
    @classmethod
    def accept_claude_alias(cls, v):
        """Accept "claude" as a name for the Anthropic provider."""
        if isinstance(v, str) and v.lower() == "claude":
            return LLMProvider.ANTHROPIC.value
        return v

    @field_validator("lang")
    @classmethod
    def lang_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("lang cannot be empty")
        return v.strip()


def find_config_file(repo_root: Path) -> Optional[Path]:
    """Find the repository config file, if any.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to the first existing config file, or None.
    """
    for name in CONFIG_FILE_NAMES:
        candidate = repo_root / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path) -> dict:
    """Load a YAML or JSON config file into a dictionary.

    Args:
        config_path: The config file path.

    Returns:
        The parsed dictionary; empty if the file does not exist.

    Raises:
        ConfigFileError: If the file cannot be read or parsed.
    """
    if not config_path.exists():
        return {}

    try:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix == ".json":
            data = json.loads(text) if text.strip() else {}
        else:
            data = yaml.safe_load(text) or {}
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Error loading config file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigFileError(f"Config file {config_path} must contain a mapping")

    return data


def merge_settings(file_config: dict, overrides: dict[str, Any]) -> dict:
    """Merge CLI overrides over file values; None overrides are ignored."""
    merged = dict(file_config)
    for key, value in overrides.items():
        if value is None:
            continue
        # A snake_case override replaces a camelCase key from the file
        alias = CommitSettings.model_fields[key].alias if key in CommitSettings.model_fields else None
        if alias and alias in merged:
            del merged[alias]
        merged[key] = value
    return merged


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as one "- field: message" line per error."""
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        lines.append(f"- {location}: {err['msg']}")
    return "\n".join(lines)


def load_settings(
    repo_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> CommitSettings:
    """Load and validate settings for a run.

    Args:
        repo_root: Repository root searched for a config file.
        config_path: Explicit config file; takes precedence over the search.
        overrides: CLI values (snake_case keys); None values are ignored.

    Returns:
        Validated CommitSettings.

    Raises:
        ConfigFileError: If the config file is unreadable or invalid.
        ValidationError: If the merged settings are invalid.
    """
    path = config_path
    if path is None and repo_root is not None:
        path = find_config_file(repo_root)

    file_config = load_config_file(path) if path else {}
    return CommitSettings.model_validate(merge_settings(file_config, overrides or {}))
