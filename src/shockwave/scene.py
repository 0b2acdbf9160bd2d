"""Renderer-facing geometry and effect envelopes.

Nothing here draws. These helpers turn simulation state and
:class:`~shockwave.core.simulation.TickEvents` into numbers a canvas
renderer can use directly: Mach cone lines, per-segment ring colours,
pulse opacity and decaying flash intensities.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from shockwave.core.doppler import doppler_ring_factors
from shockwave.core.kinematics import is_supersonic, mach_angle
from shockwave.core.simulation import TickEvents
from shockwave.core.state import SimulationMode

# Ring colours (RGB, 0-255)
NEUTRAL_RGB = np.array([100.0, 200.0, 255.0])
BLUE_RGB = np.array([50.0, 150.0, 255.0])
RED_RGB = np.array([255.0, 80.0, 80.0])

CONE_LINE_LENGTH = 800.0
FADE_RADIUS = 400.0

# Flash decay per frame and the level below which a flash snaps to zero
BARRIER_DECAY = 0.9
BOOM_DECAY = 0.85
OBSERVER_DECAY = 0.8
FLASH_FLOOR = 0.01


def mach_cone_edges(
    source_x: float,
    source_y: float,
    mach: float,
    mode: SimulationMode,
    length: float = CONE_LINE_LENGTH,
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """End points of the two Mach cone lines drawn from the source.

    The cone trails behind a moving source (opens to the left) and opens
    downstream (to the right) in wind mode.

    Args:
        source_x, source_y: Cone apex
        mach: Mach number
        mode: Reference frame
        length: Line length

    Returns:
        ((x_upper, y_upper), (x_lower, y_lower)), or None below M > 1
    """
    if not is_supersonic(mach):
        return None

    theta = mach_angle(mach)
    direction = -1.0 if mode is SimulationMode.MOVING_SOURCE else 1.0
    x = source_x + direction * length * np.cos(theta)
    dy = length * np.sin(theta)
    return (float(x), float(source_y - dy)), (float(x), float(source_y + dy))


def pulse_alpha(radius: float, fade_radius: float = FADE_RADIUS) -> float:
    """Opacity (0-255) of a wavefront, fading linearly as it grows."""
    alpha = 255.0 * (1.0 - radius / fade_radius)
    return float(np.clip(alpha, 0.0, 255.0))


def doppler_ring_colors(
    mach: float, mode: SimulationMode, segments: int = 60
) -> NDArray[np.floating]:
    """RGB colour for each segment of a wavefront ring.

    The compressed side shades toward blue and the stretched side toward
    red. The effect grows with Mach number and saturates at M = 2.

    Args:
        mach: Mach number
        mode: Reference frame
        segments: Number of ring segments

    Returns:
        Array of shape (segments, 3) with values in [0, 255]
    """
    factors = doppler_ring_factors(mode, segments)
    intensity = min(mach / 2.0, 1.0)

    weights = np.abs(factors)[:, np.newaxis] * intensity
    targets = np.where((factors > 0)[:, np.newaxis], BLUE_RGB, RED_RGB)
    return NEUTRAL_RGB + (targets - NEUTRAL_RGB) * weights


@dataclass
class FlashState:
    """Decaying flash intensities driven by tick events.

    Each value jumps to 1.0 when its event fires and is multiplied by its
    decay factor every frame, snapping to 0 once it drops below 0.01.

    Example:
        >>> flash = FlashState()
        >>> flash.trigger(events)  # doctest: +SKIP
        >>> flash.decay()
    """

    barrier: float = 0.0
    boom: float = 0.0
    observer: float = 0.0

    def trigger(self, events: TickEvents) -> None:
        """Start flashes for the events of one tick."""
        if events.barrier_crossed:
            self.barrier = 1.0
        if events.sonic_boom:
            self.boom = 1.0
        if events.crossings:
            self.observer = 1.0

    def decay(self) -> None:
        """Advance every envelope by one frame."""
        self.barrier = _decay(self.barrier, BARRIER_DECAY)
        self.boom = _decay(self.boom, BOOM_DECAY)
        self.observer = _decay(self.observer, OBSERVER_DECAY)

    @property
    def active(self) -> bool:
        return self.barrier > 0 or self.boom > 0 or self.observer > 0


def _decay(value: float, factor: float) -> float:
    value *= factor
    return 0.0 if value < FLASH_FLOOR else value
