"""Mach-number kinematics and unit conversions.

Pure functions shared by every other part of the simulation:

- Flight regime classification (subsonic / sonic / supersonic)
- Mach cone half-angle, sin(θ) = 1/M
- Conversion between Mach number and sea-level real-world speeds

The Mach angle is only defined for supersonic flow. For M <= 1 it returns
``nan`` rather than raising, so callers must branch on the regime before
using it in arithmetic:

    >>> from shockwave.core.kinematics import flight_regime, mach_angle_degrees
    >>> flight_regime(2.0)
    'supersonic'
    >>> round(mach_angle_degrees(2.0), 6)
    30.0
"""

from __future__ import annotations

from typing import Literal, NamedTuple

import numpy as np

FlightRegime = Literal["subsonic", "sonic", "supersonic"]
SpeedUnit = Literal["mph", "kmh", "ms"]

# Speed of sound at sea level
SPEED_OF_SOUND: dict[str, int] = {
    "mph": 767,
    "kmh": 1235,
    "ms": 343,
}

# Typical cruise Mach numbers, used as UI shortcuts
AIRCRAFT_PRESETS: dict[str, float] = {
    "Subsonic Jet": 0.85,
    "Sound Barrier": 1.0,
    "Supersonic": 1.5,
    "Concorde": 2.04,
    "SR-71": 2.8,
}


class RealWorldSpeed(NamedTuple):
    """A Mach number expressed in sea-level speed units (rounded)."""

    mph: int
    kmh: int
    ms: int


def flight_regime(mach: float) -> FlightRegime:
    """Classify a Mach number.

    The sonic boundary is an exact equality test. Callers wanting a
    tolerance around M = 1 must round before calling.

    Args:
        mach: Mach number (>= 0)

    Returns:
        "subsonic" for M < 1, "sonic" for M == 1, "supersonic" otherwise
    """
    if mach < 1:
        return "subsonic"
    if mach == 1:
        return "sonic"
    return "supersonic"


def is_supersonic(mach: float) -> bool:
    """True when the source outruns its own wavefronts (M > 1)."""
    return mach > 1


def mach_angle(mach: float) -> float:
    """Mach cone half-angle in radians.

    Args:
        mach: Mach number

    Returns:
        arcsin(1/M) for M > 1, ``nan`` for M <= 1
    """
    if mach <= 1:
        return float("nan")
    return float(np.arcsin(1.0 / mach))


def mach_angle_degrees(mach: float) -> float:
    """Mach cone half-angle in degrees (``nan`` for M <= 1)."""
    return float(np.degrees(mach_angle(mach)))


def _round_half_up(value: float) -> int:
    # round() would send 1150.5 to the even neighbour
    return int(np.floor(value + 0.5))


def mach_to_speed(mach: float) -> RealWorldSpeed:
    """Convert a Mach number to sea-level speeds.

    Args:
        mach: Mach number

    Returns:
        RealWorldSpeed with mph, km/h and m/s rounded to the nearest integer
    """
    return RealWorldSpeed(
        mph=_round_half_up(mach * SPEED_OF_SOUND["mph"]),
        kmh=_round_half_up(mach * SPEED_OF_SOUND["kmh"]),
        ms=_round_half_up(mach * SPEED_OF_SOUND["ms"]),
    )


def speed_to_mach(speed: float, unit: SpeedUnit = "mph") -> float:
    """Convert a sea-level speed to a Mach number.

    Args:
        speed: Speed value
        unit: One of "mph", "kmh", "ms" (default "mph")

    Returns:
        Mach number

    Raises:
        ValueError: If the unit is not recognised
    """
    if unit not in SPEED_OF_SOUND:
        raise ValueError(
            f"Unknown speed unit '{unit}'. Valid units: {list(SPEED_OF_SOUND.keys())}"
        )
    return speed / SPEED_OF_SOUND[unit]


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(x2 - x1, y2 - y1))
