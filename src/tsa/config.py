"""YAML config loader — reads a settings file into AppSettings."""

from pathlib import Path

import yaml

from tsa.schemas.config import AppSettings


def load_config(path: str | Path | None = None) -> AppSettings:
    """Load and validate a settings file.

    With no path, returns the defaults. Raises ``FileNotFoundError`` if the
    path doesn't exist and ``pydantic.ValidationError`` if the YAML content
    is invalid.
    """
    if path is None:
        return AppSettings()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    # An empty file (or one that is all comments) loads as None.
    if raw is None:
        return AppSettings()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    return AppSettings(**raw)
