"""Load consist files and report what they contain.

Run from repo root:
  python scripts/inspect_consist.py data/consists/freight.con
  python scripts/inspect_consist.py --config config/inspect_config.yaml --write-tables

Outputs (with --write-tables):
- outputs/vehicles/<stem>_vehicles.csv
- outputs/consist_summary.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path so `import consist_formats...` works when executing this file directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from consist_formats.core.cli_utils import LoadStats, create_base_parser, log_level
from consist_formats.core.config import configure_logging, get_paths
from consist_formats.core.data_loaders import load_consist
from consist_formats.core.exceptions import ConsistError
from consist_formats.data_processing.consist_tables import consist_summary_record, vehicles_frame
from consist_formats.io import load_yaml_config, sha256_file, upsert_consist_summary, write_csv

LOGGER = logging.getLogger("inspect_consist")

DEFAULT_CONFIG_FILE = "inspect_config.yaml"
SUMMARY_CSV_FILE = "consist_summary.csv"
VEHICLES_DIR = "vehicles"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = create_base_parser("Load .con/.toml consist files and summarise their vehicles.")
    parser.add_argument("paths", nargs="*", type=Path, help="Consist files to load.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML inventory listing consist files (default: config/{DEFAULT_CONFIG_FILE} when no paths are given).",
    )
    parser.add_argument(
        "--write-tables",
        action="store_true",
        help="Write per-consist vehicle tables and upsert the consist summary CSV.",
    )
    return parser.parse_args(argv)


def _resolve_inputs(args: argparse.Namespace, root: Path) -> tuple[list[Path], dict]:
    cfg: dict = {}
    config_path = args.config
    if config_path is None and not args.paths:
        config_path = get_paths(root).config / DEFAULT_CONFIG_FILE
    if config_path is not None:
        cfg = load_yaml_config(config_path)
    paths = list(args.paths) + [root / p for p in cfg.get("consists", [])]
    return paths, cfg


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(log_level(args.log_level))

    paths_cfg = get_paths()
    root = paths_cfg.root
    paths, cfg = _resolve_inputs(args, root)
    outputs = cfg.get("outputs", {})
    summary_csv = root / str(outputs.get("summary_csv", paths_cfg.outputs / SUMMARY_CSV_FILE))
    vehicles_dir = root / str(outputs.get("vehicles_dir", paths_cfg.outputs / VEHICLES_DIR))

    if not paths:
        LOGGER.warning("No consist files given")
        return 0

    stats = LoadStats()
    records = []
    for path in paths:
        try:
            consist = load_consist(path)
        except (ConsistError, OSError) as e:
            LOGGER.error("Failed to load %s: %s", path, e)
            stats.add_failed(str(path), e)
            continue
        stats.add_loaded(str(path), len(consist.vehicles))

        train = consist.train_config
        LOGGER.info(
            "%s: serial=%d durability=%.3f max_velocity=%s tcs=%r",
            consist.name,
            train.serial,
            train.durability,
            "unset" if train.max_velocity is None else f"{train.max_velocity.limit:.3f} m/s",
            train.tcs_parameters_file_name,
        )
        vehicles = vehicles_frame(consist)
        LOGGER.debug("Vehicles:\n%s", vehicles.to_string(index=False))

        digest = sha256_file(path) if args.checkpoint else None
        if digest is not None:
            LOGGER.info("Checkpoint %s sha256=%s", path.name, digest)
        records.append(consist_summary_record(consist, path, sha256=digest))

        if args.write_tables:
            out = vehicles_dir / f"{path.stem}_vehicles.csv"
            write_csv(vehicles, out)
            LOGGER.info("Wrote %s", out)

    if args.write_tables and records:
        upsert_consist_summary(records, summary_csv)
        LOGGER.info("Updated %s", summary_csv)

    summary = stats.get_summary()
    LOGGER.info(
        "Done. Loaded: %d, failed: %d, vehicles: %d",
        summary["loaded"],
        summary["failed"],
        summary["n_vehicles"],
    )
    return 1 if stats.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
