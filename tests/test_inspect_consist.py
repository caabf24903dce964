import importlib.util
from pathlib import Path

import pandas as pd

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "inspect_consist.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("inspect_consist", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_main_loads_given_files(data_dir):
    mod = _load_script()
    assert mod.main([str(data_dir / "freight.con"), str(data_dir / "freight.toml"), "--checkpoint"]) == 0


def test_main_reports_failures(tmp_path):
    bad = tmp_path / "bad.toml"
    bad.write_text('[[consist]]\npath = "nosep"\n', encoding="utf-8")
    mod = _load_script()
    assert mod.main([str(bad)]) == 1


def test_main_writes_tables_from_config(tmp_path, data_dir):
    config = tmp_path / "inventory.yaml"
    config.write_text(
        "consists:\n"
        f"  - {data_dir / 'freight.con'}\n"
        "outputs:\n"
        f"  summary_csv: {tmp_path / 'summary.csv'}\n"
        f"  vehicles_dir: {tmp_path / 'vehicles'}\n",
        encoding="utf-8",
    )
    mod = _load_script()
    assert mod.main(["--config", str(config), "--write-tables"]) == 0

    vehicles = pd.read_csv(tmp_path / "vehicles" / "freight_vehicles.csv")
    assert len(vehicles) == 4
    summary = pd.read_csv(tmp_path / "summary.csv")
    assert summary["name"].tolist() == ["Freight Mixed"]


def test_main_records_undecodable_toml_as_failure(tmp_path):
    bad = tmp_path / "binary.toml"
    bad.write_bytes(b"\xff\xfe\xfa")
    mod = _load_script()
    assert mod.main([str(bad)]) == 1
