"""
WorkItem configuration loading.

Loads the Azure DevOps target configuration from YAML with environment
variable expansion.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from bugtracker.workitem.errors import ConfigurationError
from bugtracker.workitem.types import DetermineTargetProjectVia


DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class WorkItemConfig:
    """
    Where and how work items are created.

    Attributes:
        organization: Azure DevOps organization name
        project: Fallback project when no other source resolves one
        determine_target_project_via: Which sources may pick the project
        personal_access_token: PAT used to authenticate the create request
        timeout_s: Request timeout handed to the HTTP transport
    """
    organization: str
    project: str | None = None
    determine_target_project_via: DetermineTargetProjectVia = DetermineTargetProjectVia.ALL
    personal_access_token: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S


def expand_env_vars(value: Any) -> Any:
    """
    Recursively expand ${VAR} environment variables in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with env vars expanded
    """
    if isinstance(value, str):
        # Match ${VAR} or $VAR patterns
        pattern = r'\$\{([^}]+)\}|\$([A-Z_][A-Z0-9_]*)'

        def replace(match):
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, "")

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]

    return value


def _string_value(data: dict, key: str) -> str:
    """Read a scalar setting as a stripped string; YAML may hand back ints or bools."""
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    raise ConfigurationError(f"Invalid {key}: expected a single value, got {type(value).__name__}")


def config_from_dict(data: dict) -> WorkItemConfig:
    """
    Build a WorkItemConfig from a plain dict.

    Accepts the keys of the ``azure_devops`` YAML section. Empty strings
    count as unset; numeric values (``project: 12345``) are read as text.

    Raises:
        ConfigurationError: If organization is missing, a value is not a
            scalar, or the selector is unknown
    """
    organization = _string_value(data, "organization")
    if not organization:
        raise ConfigurationError("Azure DevOps organization is not configured")

    project = _string_value(data, "project") or None

    via_value = _string_value(data, "determine_target_project_via") or DetermineTargetProjectVia.ALL
    try:
        via = DetermineTargetProjectVia.parse(via_value)
    except ValueError:
        allowed = ", ".join(v.value for v in DetermineTargetProjectVia)
        raise ConfigurationError(
            f"Unknown determine_target_project_via '{via_value}' (expected one of: {allowed})"
        ) from None

    try:
        timeout_s = float(data.get("timeout_s") or DEFAULT_TIMEOUT_S)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid timeout_s: {data.get('timeout_s')!r}") from None

    return WorkItemConfig(
        organization=organization,
        project=project,
        determine_target_project_via=via,
        personal_access_token=_string_value(data, "personal_access_token"),
        timeout_s=timeout_s,
    )


def _config_from_environment() -> dict:
    return {
        "organization": os.environ.get("AZURE_DEVOPS_ORGANIZATION", ""),
        "project": os.environ.get("AZURE_DEVOPS_PROJECT"),
        "determine_target_project_via": os.environ.get("AZURE_DEVOPS_DETERMINE_VIA", "all"),
        "personal_access_token": os.environ.get("AZURE_DEVOPS_PAT", ""),
        "timeout_s": os.environ.get("AZURE_DEVOPS_TIMEOUT_S"),
    }


def load_work_item_config(config_path: str | Path | None = None) -> WorkItemConfig:
    """
    Load work item configuration from YAML file.

    Looks for config in this order:
    1. Explicitly provided path
    2. config/bugtracker.yaml relative to project root
    3. AZURE_DEVOPS_* environment variables

    Environment variables in the format ${VAR} are expanded.

    Args:
        config_path: Optional path to config file

    Returns:
        Validated WorkItemConfig

    Raises:
        ConfigurationError: If the config is incomplete or invalid
    """
    if config_path is None:
        # bugtracker/workitem/config.py -> project root is ../../..
        project_root = Path(__file__).parent.parent.parent
        config_path = project_root / "config" / "bugtracker.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return config_from_dict(_config_from_environment())

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    data = expand_env_vars(data)

    section = data.get("azure_devops")
    if not isinstance(section, dict):
        raise ConfigurationError(f"{config_path}: missing 'azure_devops' section")

    return config_from_dict(section)
