# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from .models import ForemanConfig

log = logging.getLogger("foreman_host")


def _merge_secrets(config: dict, secrets: dict) -> dict:
    """
    Return a copy of *config* with *secrets* laid over it. Nested mappings
    merge key by key; blank secret values (None, "") never replace a
    configured value.
    """
    merged = dict(config)
    for key, value in secrets.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_secrets(current, value)
        elif value not in (None, ""):
            merged[key] = value
    return merged


def _find_secrets_file(config_path: Path) -> Path | None:
    """
    Locate secrets.yaml using this priority:

    1. FOREMAN_HOST_SECRETS_FILE environment variable (explicit override)
    2. secrets.yaml in the same directory as the config
    """
    env = os.environ.get("FOREMAN_HOST_SECRETS_FILE")
    if env:
        p = Path(env)
        if p.is_file():
            return p
        log.warning("FOREMAN_HOST_SECRETS_FILE=%s does not exist, skipping", env)
        return None

    p = config_path.parent / "secrets.yaml"
    if p.is_file():
        return p

    return None


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    data = yaml.safe_load(expanded) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    return data


def load_config(path: str | Path) -> ForemanConfig:
    """
    Load and validate a foreman-host YAML config.

    Credentials can be kept out of the main file in two ways:

    **secrets.yaml**
        Same structure as the config. Found through
        ``FOREMAN_HOST_SECRETS_FILE`` or next to the config file, and
        merged over it before Pydantic validation.

    **environment variables**
        ``${ENV_VAR}`` placeholders are resolved with
        ``os.path.expandvars`` at load time.
    """
    path = Path(path)
    data = _load_yaml(path)

    secrets_path = _find_secrets_file(path)
    if secrets_path:
        log.debug("Merging secrets from %s", secrets_path)
        data = _merge_secrets(data, _load_yaml(secrets_path))
    else:
        log.debug("No secrets.yaml found, using %s as is", path)

    return ForemanConfig.model_validate(data)
