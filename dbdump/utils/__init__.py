"""dbdump utilities package.

This package contains utility functions for YAML settings files and
logging.
"""

from dbdump.utils.log import configure_logging, quiet_logging
from dbdump.utils.yaml_parser import load_yaml, substitute_env_vars

__all__ = [
    "configure_logging",
    "load_yaml",
    "quiet_logging",
    "substitute_env_vars",
]
