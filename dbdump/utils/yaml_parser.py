"""YAML parsing utilities for dbdump settings files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml

from dbdump.exceptions import ConfigurationError

# ${VAR_NAME} or ${VAR_NAME:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def substitute_env_vars(data: Any) -> Any:
    """Recursively substitute environment variables in data structure.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.

    Args:
        data: Data structure (dict, list, str, etc.)

    Returns:
        Data with environment variables substituted

    Raises:
        ConfigurationError: If a variable is unset and has no default

    Examples:
        >>> os.environ['DB_HOST'] = 'localhost'
        >>> substitute_env_vars('postgresql://${DB_HOST}:5432/mydb')
        'postgresql://localhost:5432/mydb'
        >>> substitute_env_vars('${MISSING:-sqlite:///dev.db}')
        'sqlite:///dev.db'
    """
    if isinstance(data, dict):
        return {k: substitute_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [substitute_env_vars(item) for item in data]
    elif isinstance(data, str):

        def replace_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.environ.get(var_name)
            if value is not None:
                return value
            if default_value is None:
                raise ConfigurationError(
                    f"Environment variable '{var_name}' not found and no default provided"
                )
            return default_value

        return _ENV_VAR_PATTERN.sub(replace_var, data)
    else:
        return data


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML settings file with environment variable substitution.

    An empty file yields an empty dictionary.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary with YAML contents and environment variables substituted

    Raises:
        ConfigurationError: If the file cannot be read or parsed, is not a
            mapping, or references a missing environment variable
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except FileNotFoundError:
        raise ConfigurationError(f"File not found: {path}") from None
    except OSError as e:
        raise ConfigurationError(f"Failed to load {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return substitute_env_vars(data)

