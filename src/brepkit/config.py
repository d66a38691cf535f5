"""Builder configuration with YAML file support.

Settings are read, in priority order, from:
    1. An explicit path passed to :func:`load_config`
    2. The file named by the ``BREPKIT_CONFIG`` environment variable
    3. Built-in defaults

Example file::

    curve_samples: 32
    tolerance: 1.0e-6
    offset: 0.5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from brepkit.geom import epsilon

__all__ = [
    "BREPKIT_CONFIG",
    "BuilderConfig",
    "load_config",
    "get_default_config",
    "clear_cache",
]

# Environment variable naming a YAML configuration file
BREPKIT_CONFIG = "BREPKIT_CONFIG"


@dataclass(frozen=True)
class BuilderConfig:
    """Tunable settings for shell assembly.

    Attributes:
        curve_samples: Points sampled per curved edge when tessellating a
            loop for surface synthesis.
        tolerance: Distance under which boundary points count as coincident,
            a boundary counts as collinear, or a synthesized surface as
            having no width or height.
        min_width: Minimum width of a synthesized surface, or None.
        min_height: Minimum height of a synthesized surface, or None.
        offset: Total padding added across each synthesized surface.
    """

    curve_samples: int = 16
    tolerance: float = epsilon
    min_width: Optional[float] = None
    min_height: Optional[float] = None
    offset: float = 0.0

    def __post_init__(self):
        if isinstance(self.curve_samples, bool) or not isinstance(self.curve_samples, int):
            raise ValueError(f"curve_samples must be an integer, got {self.curve_samples!r}")
        if self.curve_samples < 2:
            raise ValueError("curve_samples must be >= 2")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")
        values = {}
        for key, value in data.items():
            if key in ("tolerance", "offset") or (key in ("min_width", "min_height") and value is not None):
                try:
                    value = float(value)
                except (TypeError, ValueError) as exc:
                    raise ValueError(f"{key} must be a number, got {value!r}") from exc
            values[key] = value
        return cls(**values)


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid configuration in {path}: expected a mapping at root")
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> BuilderConfig:
    """Load a :class:`BuilderConfig`.

    Args:
        path: Optional explicit YAML file (overrides the environment).

    Raises:
        FileNotFoundError: If an explicit or environment path does not exist.
        ValueError: If the file has an invalid format or values.
    """
    if path is None:
        env_path = os.environ.get(BREPKIT_CONFIG)
        if not env_path:
            return BuilderConfig()
        path = env_path

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return BuilderConfig.from_dict(_load_yaml(config_path))


@lru_cache(maxsize=None)
def get_default_config() -> BuilderConfig:
    """Return the process-wide default configuration (cached)."""
    return load_config()


def clear_cache() -> None:
    """Forget the cached default configuration.

    Call this after changing ``BREPKIT_CONFIG`` or the file it names.
    """
    get_default_config.cache_clear()
