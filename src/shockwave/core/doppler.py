"""Stylised Doppler model for rendering colour and sonification.

The shift multiplier depends on where the observer sits relative to the
direction of motion, which is always rightwards (+x):

    alignment = (observer - source)·x̂ / |observer - source|

    moving source:  shift = 1 / (1 - M * alignment * 0.5)
    wind:           shift = 1 + M * alignment * 0.3

Both formulas are damped approximations chosen to keep colours and tones
in a usable range; the result is always clamped to [0.3, 3.0].

Example:
    >>> from shockwave.core.doppler import doppler_shift, doppler_to_frequency
    >>> from shockwave.core.state import SimulationMode
    >>> shift = doppler_shift(0.5, 200, 50, 100, 50, SimulationMode.MOVING_SOURCE)
    >>> round(shift, 4)
    1.3333
    >>> round(doppler_to_frequency(400, shift), 1)
    533.3
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from .state import SimulationMode

# Below this Mach number the source is treated as at rest
MIN_MACH_FOR_SHIFT = 0.01
# Observer closer than this to the source gets no shift
MIN_SEPARATION = 1.0

MOVING_SOURCE_DAMPING = 0.5
WIND_DAMPING = 0.3

MIN_SHIFT = 0.3
MAX_SHIFT = 3.0

# Tone heard by the observer before shifting (Hz)
OBSERVER_BASE_FREQUENCY = 400.0
MIN_TONE_FREQUENCY = 100.0
MAX_TONE_FREQUENCY = 1200.0

# Emission ping range across the Mach control (Hz)
PULSE_FREQUENCY_AT_REST = 200.0
PULSE_FREQUENCY_SPAN = 600.0
PULSE_FREQUENCY_MACH_SPAN = 3.0


def doppler_shift(
    mach: float,
    observer_x: float,
    observer_y: float,
    source_x: float,
    source_y: float,
    mode: SimulationMode,
) -> float:
    """Frequency multiplier seen by the observer.

    Args:
        mach: Mach number of the source (or of the medium in wind mode)
        observer_x, observer_y: Observer position
        source_x, source_y: Emitting point (source or pulse centre)
        mode: Reference frame, selects the formula

    Returns:
        Shift multiplier in [0.3, 3.0]; >1 approaching (blue), <1 receding (red).
        Exactly 1.0 when the source is effectively at rest or coincides with
        the observer.
    """
    if mach < MIN_MACH_FOR_SHIFT:
        return 1.0

    dx = observer_x - source_x
    dy = observer_y - source_y
    separation = math.hypot(dx, dy)
    if separation < MIN_SEPARATION:
        return 1.0

    # Motion is always along +x, so the dot product is the x component
    alignment = dx / separation

    if mode is SimulationMode.MOVING_SOURCE:
        denominator = 1.0 - mach * alignment * MOVING_SOURCE_DAMPING
        shift = math.inf if denominator == 0 else 1.0 / denominator
    else:
        shift = 1.0 + mach * alignment * WIND_DAMPING

    return max(MIN_SHIFT, min(MAX_SHIFT, shift))


def doppler_to_frequency(
    base_frequency: float,
    shift: float,
    min_freq: float = MIN_TONE_FREQUENCY,
    max_freq: float = MAX_TONE_FREQUENCY,
) -> float:
    """Apply a shift multiplier to a tone and clamp it to an audible band.

    Args:
        base_frequency: Unshifted frequency in Hz
        shift: Multiplier from :func:`doppler_shift`
        min_freq: Lower clamp in Hz (default 100)
        max_freq: Upper clamp in Hz (default 1200)

    Returns:
        Shifted frequency in Hz
    """
    return max(min_freq, min(max_freq, base_frequency * shift))


def pulse_emission_frequency(mach: float) -> float:
    """Ping frequency for an emission: 200 Hz at M=0 rising to 800 Hz at M=3."""
    return PULSE_FREQUENCY_AT_REST + (mach / PULSE_FREQUENCY_MACH_SPAN) * PULSE_FREQUENCY_SPAN


def doppler_ring_factors(mode: SimulationMode, segments: int = 60) -> NDArray[np.floating]:
    """Per-segment compression factor around a wavefront ring.

    Segment ``i`` spans angles ``[2πi/n, 2π(i+1)/n)``; its factor is the
    cosine between the segment midpoint and the compressed ("blue") side,
    +1 fully compressed, -1 fully stretched. The compressed side faces the
    direction of travel (angle 0) for a moving source and upstream (angle π)
    in wind mode.

    Args:
        mode: Reference frame
        segments: Number of ring segments

    Returns:
        Array of shape (segments,) with values in [-1, 1]
    """
    if segments < 1:
        raise ValueError("segments must be >= 1")
    blue_angle = 0.0 if mode is SimulationMode.MOVING_SOURCE else np.pi
    midpoints = (np.arange(segments) + 0.5) * (2 * np.pi / segments)
    return np.cos(midpoints - blue_angle)
