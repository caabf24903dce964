import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

STF_HEADER = "SIMISA@@@@@@@@@@JINX0D0t______\n\n"


@pytest.fixture
def write_con(tmp_path):
    """Write STF text (header prepended) to a .con file and return its path."""

    def _write(body: str, name: str = "test.con", header: bool = True) -> Path:
        path = tmp_path / name
        path.write_text((STF_HEADER if header else "") + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_toml(tmp_path):
    def _write(body: str, name: str = "test.toml") -> Path:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "data" / "consists"
