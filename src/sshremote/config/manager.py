# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/config/manager.py

"""
Connector settings loaded from layered YAML files.

Settings are optional: with no file anywhere the connector runs on the
defaults below. Files later in the search order override earlier ones.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Literal, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from sshremote.system.exceptions import ConfigError


# ---- Constants ----

SETTINGS_CFG: Final = "sshremote.yml"

HostKeyPolicy = Literal["auto-add", "warn", "reject"]


def _get_settings_search_paths() -> tuple[Path, ...]:
    """Get settings file search paths (ordered by priority: lowest to highest).

    Evaluated at call time so environment overrides set by tests apply.
    """
    return (
        Path("/etc/sshremote") / SETTINGS_CFG,  # System defaults
        Path.home() / ".config" / "sshremote" / SETTINGS_CFG,  # User config
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "sshremote" / SETTINGS_CFG,  # XDG override
        Path(os.getenv("SSHREMOTE_CONFIG_HOME", "")) / SETTINGS_CFG,  # Explicit override
    )


class ConnectorSettings(BaseModel):
    """Local, non-secret knobs for how the connector reaches remotes."""
    model_config = ConfigDict(extra="forbid")

    connect_timeout: float = Field(default=10.0, gt=0)
    # auto-add accepts any host key: host identity is not verified unless
    # the operator selects warn or reject
    host_key_policy: HostKeyPolicy = "auto-add"
    known_hosts: Optional[Path] = None
    local_log: Optional[Path] = None


def _load_merged_settings_data(candidates: tuple[Path, ...]) -> dict:
    merged_data = {}
    found = []

    for candidate in candidates:
        if candidate.exists() and candidate != Path("") / SETTINGS_CFG:  # Skip empty env vars
            try:
                with candidate.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ValueError("top level must be a mapping")
                merged_data.update(data)
                found.append(str(candidate))
                logger.debug(f"Loaded settings from {candidate}")
            except (OSError, yaml.YAMLError, ValueError) as e:
                logger.warning(f"Failed to load settings from {candidate}: {e}")

    if found:
        logger.debug(f"Merged settings from: {', '.join(found)}")
    else:
        logger.debug("No settings file found, using defaults")
    return merged_data


def load_settings(candidates: Optional[tuple[Path, ...]] = None) -> ConnectorSettings:
    """Load connector settings from the standard locations.

    Raises:
        ConfigError: a settings file holds unknown keys or invalid values
    """
    if candidates is None:
        candidates = _get_settings_search_paths()
    data = _load_merged_settings_data(candidates)
    try:
        return ConnectorSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid sshremote settings: {e}")
