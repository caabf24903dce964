"""Common CLI utilities for consist scripts."""

from __future__ import annotations

import argparse
import logging
from typing import Any

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def create_base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--checkpoint",
        action="store_true",
        help="Log a checkpoint summary including input file hashes.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (DEBUG also reports skipped STF tokens).",
    )
    return parser


def log_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class LoadStats:
    """Simple container for collecting statistics across consist loads."""

    def __init__(self) -> None:
        self.loaded: list[str] = []
        self.failed: dict[str, str] = {}
        self.n_vehicles: int = 0

    def add_loaded(self, path: str, n_vehicles: int) -> None:
        self.loaded.append(path)
        self.n_vehicles += n_vehicles

    def add_failed(self, path: str, error: BaseException) -> None:
        self.failed[path] = str(error)

    def get_summary(self) -> dict[str, Any]:
        return {
            "loaded": len(self.loaded),
            "failed": len(self.failed),
            "n_vehicles": self.n_vehicles,
        }
