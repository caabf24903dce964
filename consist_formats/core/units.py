"""Speed unit helpers. Internal speeds are always meters/second."""

from __future__ import annotations

import re

from consist_formats.core.exceptions import STFError

UNIT_MPS = "m/s"
UNIT_KMH = "km/h"
UNIT_MPH = "mph"

KMH_PER_MPS: float = 3.6
MPH_PER_MPS: float = 2.2369362920544  # 1 mph = 0.44704 m/s

# STF files spell units in several ways; map them onto the canonical tags.
_SPEED_ALIASES: dict[str, str] = {
    "m/s": UNIT_MPS,
    "mps": UNIT_MPS,
    "km/h": UNIT_KMH,
    "kph": UNIT_KMH,
    "kmh": UNIT_KMH,
    "kmph": UNIT_KMH,
    "mph": UNIT_MPH,
}

_NUMBER_RE = re.compile(r"^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)(.*)$")


def to_meters_per_second(value: float, unit: str) -> float:
    """Convert `value` expressed in `unit` to m/s.

    Unknown unit tags are treated as m/s already.
    """
    if unit == UNIT_MPS:
        return value
    if unit == UNIT_KMH:
        return value / KMH_PER_MPS
    if unit == UNIT_MPH:
        return value / MPH_PER_MPS
    return value


def normalise_speed_unit(suffix: str) -> str:
    """Return the canonical tag for an STF speed suffix (unknown suffixes pass through)."""
    key = suffix.strip().lower()
    return _SPEED_ALIASES.get(key, key)


def split_unit_literal(text: str) -> tuple[float, str | None]:
    """Split `60mph` -> (60.0, "mph"); `22.35` -> (22.35, None)."""
    m = _NUMBER_RE.match(text.strip())
    if m is None:
        raise STFError(f"expected a number, got {text!r}")
    number, suffix = m.groups()
    return float(number), (suffix or None)
