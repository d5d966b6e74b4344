"""Runtime loader for price-list extraction tunables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from medprice.pricelist.settings import ExtractionSettings, build_extraction_settings
from medprice.runtime.paths import get_paths


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_extraction_settings(config_paths: tuple[str, ...] | None = None) -> ExtractionSettings:
    """Load extraction tunables from runtime-configured files into an in-memory value."""
    if config_paths is None:
        config_files = [get_paths().extraction_rules]
    else:
        config_files = [Path(path) for path in config_paths]

    configs = tuple(_load_toml(path) for path in config_files)
    return build_extraction_settings(configs)
