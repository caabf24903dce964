"""Tabular views of a loaded consist.

Design goals:
- One row per vehicle, in consist order (`position` starts at 0).
- Tables are validated against `models.schemas` contracts before leaving here;
  the vehicle table must also keep contiguous positions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from consist_formats.io import ConsistRecord
from consist_formats.models.consist import Consist
from consist_formats.models.schemas import VEHICLES
from consist_formats.models.validate import validate_vehicles_df


def _n_loads(loads: list[Any] | None) -> int | None:
    return None if loads is None else len(loads)


def vehicles_frame(consist: Consist) -> pd.DataFrame:
    """Return the consist's vehicles as a validated DataFrame."""
    rows = [
        {
            "position": i,
            "uid": v.uid,
            "folder": v.folder,
            "name": v.name,
            "is_engine": v.is_engine,
            "is_eot": v.is_eot,
            "flip": v.flip,
            "n_loads": _n_loads(v.loads),
        }
        for i, v in enumerate(consist.vehicles)
    ]
    df = pd.DataFrame(rows, columns=list(VEHICLES.required_columns + VEHICLES.optional_columns))
    return validate_vehicles_df(df)


def consist_summary_record(
    consist: Consist,
    path: str | Path,
    *,
    sha256: str | None = None,
) -> ConsistRecord:
    cfg = consist.train_config
    return ConsistRecord(
        path=str(path),
        name=consist.name,
        encoding=consist.encoding or "",
        n_vehicles=len(cfg.vehicles),
        serial=cfg.serial,
        n_engines=sum(1 for v in cfg.vehicles if v.is_engine),
        max_velocity_mps=None if cfg.max_velocity is None else float(cfg.max_velocity.limit),
        durability=float(cfg.durability),
        tcs_parameters_file_name=cfg.tcs_parameters_file_name or None,
        sha256=sha256,
    )
