"""Project configuration (paths, consist defaults, logging)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

# TrainConfig defaults (applied when a file leaves a field out)
DEFAULT_CONSIST_NAME: str = "Loose consist"
DEFAULT_SERIAL: int = 1
DEFAULT_DURABILITY: float = 1.0
DEFAULT_VELOCITY_TOLERANCE: float = 0.001  # m/s hysteresis band on MaxVelocity

# TOML vehicle entries without a `type` are plain wagons.
DEFAULT_VEHICLE_TYPE: str = "wagon"

# File extensions (compared lower-cased)
EXT_STF: str = ".con"
EXT_TOML: str = ".toml"
SUPPORTED_EXTENSIONS: tuple[str, ...] = (EXT_STF, EXT_TOML)


def project_root() -> Path:
    """Return repository root assuming this file lives in `<root>/consist_formats/core/config.py`."""
    return Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Paths:
    root: Path
    config: Path
    outputs: Path


def get_paths(root: Path | None = None) -> Paths:
    r = project_root() if root is None else Path(root).resolve()
    return Paths(
        root=r,
        config=r / "config",
        outputs=r / "outputs",
    )


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
