from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file location.
CONFIG_FILE = "pgen.yaml"


def config_path(root: Path) -> Path:
    """Path to the defaults file <root>/pgen.yaml."""
    return (root / CONFIG_FILE).resolve()
