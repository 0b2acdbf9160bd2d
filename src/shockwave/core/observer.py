"""Wavefront/observer crossing detection.

A wavefront crosses the observer on the tick its growing radius first
reaches the observer's distance from the pulse centre:

    radius_before < distance <= radius_after

The distance is measured from the pulse's *current* centre after the
advance, because in wind mode the centre drifts every tick.

Crossings feed three derived signals:

- the hit history, from which the observed wave frequency is estimated
- a per-crossing Doppler shift and tone frequency
- sonic booms, when several wavefronts (the cone surface) arrive in the
  same tick at supersonic speed
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .doppler import OBSERVER_BASE_FREQUENCY, doppler_shift, doppler_to_frequency
from .kinematics import distance
from .pulses import advance, retain_active

if TYPE_CHECKING:
    from .state import SimulationState

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MS = 2000.0
DEFAULT_BOOM_THRESHOLD = 3


@dataclass(frozen=True)
class Crossing:
    """A wavefront sweeping past the observer.

    Attributes:
        pulse_id: Pulse that crossed
        time_ms: Simulated time of the tick
        doppler_shift: Shift multiplier at the pulse centre
        tone_frequency: Observer tone after the shift (Hz)
    """

    pulse_id: int
    time_ms: float
    doppler_shift: float
    tone_frequency: float


def has_crossed(radius_before: float, radius_after: float, distance_to_observer: float) -> bool:
    """Whether a wavefront reached the observer during this tick.

    Half-open on the lower side: a front that already touched the observer
    last tick does not cross again.
    """
    return radius_before < distance_to_observer and radius_after >= distance_to_observer


def observed_frequency(
    hit_timestamps: Sequence[float], now: float, window_ms: float = DEFAULT_WINDOW_MS
) -> float:
    """Waves per second arriving at the observer.

    Args:
        hit_timestamps: Crossing times in ms
        now: Current time in ms
        window_ms: Trailing window length in ms (default 2000)

    Returns:
        Hits inside the window divided by the window length in seconds, or 0
        when fewer than two hits remain (one hit has no period)
    """
    recent = [t for t in hit_timestamps if now - t < window_ms]
    if len(recent) < 2:
        return 0.0
    return len(recent) / (window_ms / 1000.0)


def prune_hits(
    hit_timestamps: list[float], now: float, window_ms: float = DEFAULT_WINDOW_MS
) -> int:
    """Drop hits older than the trailing window, in place.

    Returns:
        Number of timestamps removed
    """
    kept = [t for t in hit_timestamps if now - t < window_ms]
    removed = len(hit_timestamps) - len(kept)
    hit_timestamps[:] = kept
    return removed


def is_sonic_boom(
    hits_this_tick: int, mach: float, threshold: int = DEFAULT_BOOM_THRESHOLD
) -> bool:
    """Whether simultaneous crossings amount to a sonic boom.

    Only the supersonic regime piles wavefronts onto the cone surface, so
    any number of hits below M > 1 is not a boom.
    """
    return hits_this_tick >= threshold and mach > 1


def sweep(state: SimulationState) -> tuple[list[Crossing], int]:
    """Advance every pulse one tick and collect observer crossings.

    For each pulse the pre-advance radius is recorded, the pulse is advanced,
    and the observer distance is recomputed from the updated centre. Each
    crossing appends ``state.time_ms`` to the hit history. Retired pulses
    are removed afterwards in a single filter pass.

    Args:
        state: Simulation state, mutated in place

    Returns:
        (crossings this tick, number of pulses retired)
    """
    config = state.config
    crossings: list[Crossing] = []

    for pulse in state.pulses:
        radius_before = pulse.radius
        advance(pulse, state.mach, state.mode, config.propagation_speed)
        to_observer = distance(pulse.x, pulse.y, state.observer_x, state.observer_y)

        if has_crossed(radius_before, pulse.radius, to_observer):
            state.wave_hit_timestamps.append(state.time_ms)
            shift = doppler_shift(
                state.mach,
                state.observer_x,
                state.observer_y,
                pulse.x,
                pulse.y,
                state.mode,
            )
            crossings.append(
                Crossing(
                    pulse_id=pulse.pulse_id,
                    time_ms=state.time_ms,
                    doppler_shift=shift,
                    tone_frequency=doppler_to_frequency(OBSERVER_BASE_FREQUENCY, shift),
                )
            )

    retired = retain_active(
        state.pulses, config.width, config.max_radius, config.retire_margin
    )
    if retired:
        logger.debug("Retired %d pulses, %d active", retired, len(state.pulses))
    return crossings, retired
