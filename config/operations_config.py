"""
Operation override loader.

Reads per-deployment operation flags from operations.yaml, e.g.

    operations:
      post_shake:
        requires_auth: true
      get_ready:
        enabled: false

Whether a name is a real operation is checked later, when the registry is built.
"""

from pathlib import Path
from typing import TypedDict

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "operations.yaml"
OVERRIDE_FLAGS = frozenset({"enabled", "requires_auth"})


class OperationOverrideDict(TypedDict, total=False):
    enabled: bool
    requires_auth: bool


class OperationsConfigError(ValueError):
    """operations.yaml is readable but does not have the expected shape"""


def _validate_override(name: str, flags) -> OperationOverrideDict:
    if not isinstance(flags, dict):
        raise OperationsConfigError(f"Override for '{name}' must be a mapping of flags, got {flags!r}")
    unknown = set(flags) - OVERRIDE_FLAGS
    if unknown:
        raise OperationsConfigError(f"Override for '{name}' has unknown flag(s): {', '.join(sorted(unknown))}")
    for flag, value in flags.items():
        # yaml turns "yes"/"no" into bools but leaves "ture" as a string
        if not isinstance(value, bool):
            raise OperationsConfigError(f"Override '{name}.{flag}' must be true or false, got {value!r}")
    return OperationOverrideDict(**flags)


def load_operations_config(config_path: str | None = None) -> dict[str, OperationOverrideDict]:
    """
    Load and validate operation overrides.

    Args:
        config_path: Path to an operations YAML file; defaults to config/operations.yaml

    Returns:
        Operation name -> validated flags; empty when the file has no overrides

    Raises:
        FileNotFoundError: the file does not exist
        OperationsConfigError: the file content has the wrong shape
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Operations configuration file not found: {path}")

    document = yaml.safe_load(path.read_text()) or {}
    if not isinstance(document, dict):
        raise OperationsConfigError(f"{path}: expected a mapping at the top level")

    operations = document.get("operations") or {}
    if not isinstance(operations, dict):
        raise OperationsConfigError(f"{path}: 'operations' must map operation names to flags")

    return {name: _validate_override(name, flags) for name, flags in operations.items()}
