import subprocess
import sys
from pathlib import Path

import pytest

from consist_formats.core.data_loaders import load_consist
from consist_formats.core.exceptions import (
    ConsistError,
    ConsistParseError,
    MalformedFieldError,
    STFError,
    UnsupportedFormatError,
)
from consist_formats.models.consist import LoadState

TRAIN_CON = """Train (
    TrainCfg ( "Short"
        MaxVelocity ( 22.352 0.001 )
        Engine ( UiD ( 0 ) EngineData ( dash9 GE ) )
        Wagon ( UiD ( 1 ) WagonData ( Boxcar1 BoxcarsDir ) )
    )
)
"""


def test_load_con_file(write_con):
    consist = load_consist(write_con(TRAIN_CON))
    assert consist.name == "Short"
    assert consist.encoding == "stf"
    assert consist.train_config.max_velocity.limit == pytest.approx(22.352)
    assert [v.is_engine for v in consist.vehicles] == [True, False]


def test_extension_is_case_insensitive(write_con, write_toml):
    assert load_consist(write_con(TRAIN_CON, name="UPPER.CON")).name == "Short"
    assert load_consist(write_toml('name = "T"\n', name="x.TOML")).name == "T"


def test_con_without_header_loads(write_con):
    assert load_consist(write_con(TRAIN_CON, header=False)).name == "Short"


def test_top_level_tokens_other_than_train_are_skipped(write_con):
    consist = load_consist(write_con('Include ( "x" )\n' + TRAIN_CON))
    assert consist.name == "Short"


def test_con_without_train_block(write_con):
    with pytest.raises(ConsistParseError, match="Train"):
        load_consist(write_con("Other ( )\n"))


def test_truncated_con_is_fatal(write_con):
    with pytest.raises(STFError, match="end of file"):
        load_consist(write_con(TRAIN_CON.rstrip().rstrip(")")))


def test_load_toml_file(write_toml):
    consist = load_consist(
        write_toml(
            """
name = "Freight"
max_speed = { value = 60, unit = "mph" }
[[consist]]
path = "GE/dash9"
type = "engine"
"""
        )
    )
    assert consist.name == "Freight"
    assert consist.encoding == "toml"
    assert consist.train_config.max_velocity.limit == pytest.approx(26.8224)
    assert consist.vehicles[0].is_engine


def test_toml_malformed_path_aborts_load(write_toml):
    with pytest.raises(MalformedFieldError):
        load_consist(write_toml('[[consist]]\npath = "NoSeparator"\n'))


def test_unsupported_extension_raises(tmp_path):
    path = tmp_path / "consist.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(UnsupportedFormatError):
        load_consist(path)


def test_errors_share_a_base_class(tmp_path):
    with pytest.raises(ConsistError):
        load_consist(tmp_path / "consist.txt")


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_consist(tmp_path / "missing.con")


def test_sample_files_describe_the_same_train(data_dir):
    con = load_consist(data_dir / "freight.con")
    toml = load_consist(data_dir / "freight.toml")

    assert con.name == toml.name == "Freight Mixed"
    assert con.train_config.serial == toml.train_config.serial == 3
    assert con.train_config.max_velocity.limit == pytest.approx(toml.train_config.max_velocity.limit)
    assert con.train_config.tcs_parameters_file_name == "tcs/freight.ini"

    # the EOT device has no TOML counterpart
    assert [(v.folder, v.name, v.is_engine, v.flip) for v in con.vehicles[:3]] == [
        (v.folder, v.name, v.is_engine, v.flip) for v in toml.vehicles
    ]
    assert con.vehicles[3].is_eot
    assert con.vehicles[1].loads[0].state is LoadState.Full
    assert con.vehicles[2].loads[0].state is LoadState.Empty


def test_toml_that_is_not_utf8_raises_parse_error(tmp_path):
    path = tmp_path / "binary.toml"
    path.write_bytes(b'name = "\xff\xfe\xfa"\n')
    with pytest.raises(ConsistParseError, match="UTF-8"):
        load_consist(path)


def test_loading_does_not_import_pandas(data_dir):
    root = Path(__file__).resolve().parents[1]
    code = (
        "import sys\n"
        "from consist_formats import load_consist\n"
        f"load_consist({str(data_dir / 'freight.con')!r})\n"
        f"load_consist({str(data_dir / 'freight.toml')!r})\n"
        "assert 'pandas' not in sys.modules, 'pandas imported on load path'\n"
    )
    result = subprocess.run([sys.executable, "-c", code], cwd=root, capture_output=True, text=True)
    assert result.returncode == 0, result.stderr
