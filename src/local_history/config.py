"""Configuration management for local-history."""

import tomllib
from enum import Enum
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field

from .constants import (
    CONFIG_FILE,
    DEFAULT_DAYS_LIMIT,
    DEFAULT_EXCLUDE,
    DEFAULT_MAX_DISPLAY,
    HISTORY_DIR,
)


class SaveMode(str, Enum):
    """Where revisions are stored relative to the workspace."""

    INTERNAL = "internal"  # <workspace>/.history
    EXTERNAL = "external"  # <path>/.history/<workspace name>


class HistoryConfig(BaseModel):
    """Settings for revision capture and retention."""

    path: str = Field(
        default="", description="External storage root; empty keeps history in the workspace"
    )
    days_limit: int = Field(
        default=DEFAULT_DAYS_LIMIT, ge=0, description="Revision age limit in days (0 keeps all)"
    )
    max_display: int = Field(
        default=DEFAULT_MAX_DISPLAY, ge=0, description="Revisions listed per file (0 lists all)"
    )
    exclude: str = Field(default=DEFAULT_EXCLUDE, description="Glob of files never recorded")
    enabled: bool = True

    @property
    def save_mode(self) -> SaveMode:
        """Storage mode implied by the configured path."""
        return SaveMode.EXTERNAL if self.path else SaveMode.INTERNAL


class EditorConfig(BaseModel):
    """Configuration for the edit command."""

    exec: str | None = None  # Falls back to $VISUAL / $EDITOR


class LocalHistoryConfig(BaseModel):
    """Root configuration for local-history."""

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)


def resolve_history_root(workspace_root: Path, config: HistoryConfig) -> Path:
    """Get the shadow tree root for a workspace.

    Args:
        workspace_root: Workspace root directory
        config: History settings

    Returns:
        <workspace>/.history, or <path>/.history/<workspace name> when an
        external path is configured
    """
    if config.save_mode is SaveMode.EXTERNAL:
        return Path(config.path).expanduser() / HISTORY_DIR / workspace_root.name
    return workspace_root / HISTORY_DIR


def load_config(workspace_root: Path) -> LocalHistoryConfig:
    """Load config from <workspace>/.lhist.toml.

    Args:
        workspace_root: Workspace root directory

    Returns:
        Loaded configuration, or defaults if the file doesn't exist
    """
    config_path = workspace_root / CONFIG_FILE
    if not config_path.exists():
        return LocalHistoryConfig()
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return LocalHistoryConfig.model_validate(data)


def write_config_template(workspace_root: Path) -> Path:
    """Write default .lhist.toml template.

    Args:
        workspace_root: Workspace root directory

    Returns:
        Path to the written config file
    """
    config_path = workspace_root / CONFIG_FILE
    template = {
        "history": {
            # Empty path keeps revisions in <workspace>/.history
            "path": "",
            "days_limit": DEFAULT_DAYS_LIMIT,
            "max_display": DEFAULT_MAX_DISPLAY,
            "exclude": DEFAULT_EXCLUDE,
            "enabled": True,
        },
        "editor": {},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
