"""Lightweight I/O helpers.

This module centralises:
- text reads used by the TOML reader (`read_text`)
- YAML config loading for the inspection script
- consist summary CSV upserts and file hashing (`--checkpoint`)

pandas is imported inside the table helpers only, so loading a consist does
not pull it in.

The STF tokenizer lives in `consist_formats.io.stf`.
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from consist_formats.models.schemas import CONSIST_SUMMARY

if TYPE_CHECKING:
    import pandas as pd


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8-sig")


def write_csv(df: pd.DataFrame, path: Path) -> None:
    ensure_parent_dir(path)
    df.to_csv(path, index=False)


def sha256_file(path: Path) -> str:
    """Return SHA256 hex digest for a file."""
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file (empty file -> {})."""
    return yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}


@dataclass(frozen=True)
class ConsistRecord:
    """Row-level metadata for the consist summary CSV."""

    path: str
    name: str
    encoding: str
    n_vehicles: int
    serial: int | None = None
    n_engines: int | None = None
    max_velocity_mps: float | None = None
    durability: float | None = None
    tcs_parameters_file_name: str | None = None
    sha256: str | None = None


def upsert_consist_summary(records: list[ConsistRecord], summary_csv: Path) -> pd.DataFrame:
    """Upsert consist records into a summary CSV keyed by `path`."""
    import pandas as pd

    from consist_formats.models.validate import validate_df

    ensure_parent_dir(summary_csv)
    new_df = pd.DataFrame([asdict(r) for r in records], columns=list(ConsistRecord.__dataclass_fields__))
    new_df["path"] = new_df["path"].astype(str)

    if summary_csv.exists():
        old = pd.read_csv(summary_csv, dtype={"path": "string"})
        old["path"] = old["path"].astype(str)
        old = old[~old["path"].isin(set(new_df["path"].tolist()))]
        df = pd.concat([old, new_df], ignore_index=True)
    else:
        df = new_df

    df = df.sort_values(["path"], kind="mergesort").reset_index(drop=True)
    df = validate_df(df, CONSIST_SUMMARY)
    df.to_csv(summary_csv, index=False)
    return df
