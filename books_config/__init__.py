"""
books_config -- workspace configuration loading.

Reads the YAML workspace settings (``reporting:`` and ``tax:`` sections)
into ``ReportingConfig`` and ``TaxConfig``.  The kernel MUST NEVER import
from this package.
"""

from books_config.loader import (
    DEFAULT_CONFIG_PATH,
    WorkspaceConfig,
    compute_checksum,
    load_workspace_config,
    load_yaml_file,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "WorkspaceConfig",
    "compute_checksum",
    "load_workspace_config",
    "load_yaml_file",
]
