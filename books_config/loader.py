"""
Configuration Loader (``books_config.loader``).

Responsibility
--------------
Loads a workspace YAML file and parses its ``reporting:`` and ``tax:``
sections into the typed module configs.

Architecture position
---------------------
**Config layer** -- sits above ``books_kernel`` and ``books_modules``.
The kernel MUST NEVER import from ``books_config``.

Invariants enforced
-------------------
* YAML is read with ``yaml.safe_load`` only.
* Absent sections fall back to the config dataclass defaults.
* ``compute_checksum`` is deterministic for identical content.

Failure modes
-------------
* Missing or unreadable file  -> ``ConfigLoadError``.
* Malformed YAML or a non-mapping document  -> ``ConfigLoadError``.
* Unknown or invalid keys  -> ``TypeError`` / ``ValueError`` from the
  config dataclass constructors.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from books_kernel.exceptions import ConfigLoadError
from books_kernel.logging_config import get_logger
from books_modules.reporting.config import ReportingConfig
from books_modules.tax.config import TaxConfig

logger = get_logger("config.loader")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "workspace.yaml"


@dataclass(frozen=True)
class WorkspaceConfig:
    """Reporting and tax settings of one workspace."""

    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    tax: TaxConfig = field(default_factory=TaxConfig)
    source: str | None = None
    checksum: str | None = None


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Postconditions:
        - Returns a ``dict`` (empty if the YAML is empty).
    Raises:
        ConfigLoadError: missing file, invalid YAML, or a top level that
            is not a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigLoadError(str(path), exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(str(path), f"invalid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigLoadError(str(path), f"section {name!r} must be a mapping")
    return dict(section)


def parse_workspace_config(
    data: dict[str, Any],
    path: Path,
) -> WorkspaceConfig:
    """Build a WorkspaceConfig from an already loaded YAML document."""
    reporting = _section(data, "reporting", path)
    tax = _section(data, "tax", path)
    return WorkspaceConfig(
        reporting=ReportingConfig.from_dict(reporting),
        tax=TaxConfig.from_dict(tax),
        source=str(path),
        checksum=compute_checksum(data),
    )


def load_workspace_config(path: Path | str | None = None) -> WorkspaceConfig:
    """
    Load workspace settings from ``path`` (the bundled defaults if None).

    Raises:
        ConfigLoadError: the file cannot be read or parsed.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data = load_yaml_file(config_path)
    config = parse_workspace_config(data, config_path)
    logger.info(
        "workspace_config_loaded",
        extra={
            "source": config.source,
            "checksum": config.checksum,
            "entity_name": config.reporting.entity_name,
        },
    )
    return config
