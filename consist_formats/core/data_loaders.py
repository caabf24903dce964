from __future__ import annotations

import logging
from pathlib import Path

from consist_formats.core.config import EXT_STF, EXT_TOML, SUPPORTED_EXTENSIONS
from consist_formats.core.exceptions import ConsistParseError, UnsupportedFormatError
from consist_formats.formats.simis import SimisConsistReader
from consist_formats.formats.toml_format import TomlConsistReader
from consist_formats.io import read_text
from consist_formats.io.stf import STFReader
from consist_formats.models.consist import Consist, TrainConfig

LOGGER = logging.getLogger(__name__)

ENCODING_STF = "stf"
ENCODING_TOML = "toml"


def _load_stf(path: Path) -> TrainConfig:
    train_config: TrainConfig | None = None
    with STFReader.open(path) as stf:
        for token in stf.iter_file():
            if token == "train":
                train_config = TrainConfig.from_reader(SimisConsistReader(stf))
            else:
                stf.skip_unknown(token)
    if train_config is None:
        raise ConsistParseError(f"{path}: no 'Train' block found")
    return train_config


def _load_toml(path: Path) -> TrainConfig:
    try:
        text = read_text(path)
    except UnicodeDecodeError as exc:
        raise ConsistParseError(f"{path}: TOML consist is not valid UTF-8: {exc}") from exc
    return TrainConfig.from_reader(TomlConsistReader(text, source=str(path)))


def load_consist(path: str | Path) -> Consist:
    """Load a `.con` or `.toml` consist file (extension matched case-insensitively)."""
    path = Path(path)
    ext = path.suffix.lower()

    if ext == EXT_STF:
        encoding = ENCODING_STF
        train_config = _load_stf(path)
    elif ext == EXT_TOML:
        encoding = ENCODING_TOML
        train_config = _load_toml(path)
    else:
        raise UnsupportedFormatError(
            f"{path}: unsupported consist extension {path.suffix!r} (expected one of {SUPPORTED_EXTENSIONS})"
        )

    consist = Consist(
        name=train_config.name,
        train_config=train_config,
        source_path=str(path),
        encoding=encoding,
    )
    LOGGER.info(
        "Loaded consist %r from %s (%s): %d vehicles",
        consist.name,
        path.name,
        encoding,
        len(consist.vehicles),
    )
    return consist
