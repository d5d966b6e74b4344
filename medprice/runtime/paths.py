"""Centralized path management for medprice.

All file locations used by imports are derived from a single project root,
taken from ``MEDPRICE_HOME`` when set and the working directory otherwise.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    env_root = os.environ.get("MEDPRICE_HOME", "").strip()
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def extraction_rules(self) -> Path:
        """Project-level extraction tunables TOML file."""
        return self.config / "extraction.toml"

    # --- Data paths ---
    @property
    def data(self) -> Path:
        """Local data directory (data/)."""
        return self.root / "data"

    @property
    def medication_store(self) -> Path:
        """JSON file backing the local medication catalog."""
        return self.data / "medications.json"

    @property
    def default_price_list(self) -> Path:
        """Price-list PDF looked up when no path is given."""
        return self.root / "price_list.pdf"


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Drop the cached singleton so the next call re-reads MEDPRICE_HOME."""
    global _paths
    _paths = None
