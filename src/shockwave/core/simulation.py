"""Tick-driven simulation driver.

The renderer/audio layer calls :func:`tick` once per animation frame and
the setters once per user interaction. Every side effect a frame can have
(pings, observer flashes, booms, the sound-barrier flash) comes back as a
:class:`TickEvents` value instead of being played or drawn here, so the
physics runs headless.

Tick sequence:
    1. Regime edge detection (also while paused)
    2. Clock advance
    3. Emission when the interval is reached
    4. Source advance and wrap (moving-source mode)
    5. Pulse advance, crossing detection and retirement
    6. Sonic boom check
    7. Hit history pruning

Example:
    >>> from shockwave.core import SimulationState, tick
    >>> state = SimulationState.create(mach=0.5)
    >>> emitted = sum(len(tick(state).emitted) for _ in range(100))
    >>> emitted
    5
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field

from .doppler import pulse_emission_frequency
from .kinematics import AIRCRAFT_PRESETS, FlightRegime, flight_regime
from .observer import Crossing, is_sonic_boom, observed_frequency, prune_hits, sweep
from .pulses import Pulse, advance_source, maybe_emit
from .state import SimulationMode, SimulationState

logger = logging.getLogger(__name__)

MACH_NUDGE = 0.1


@dataclass
class TickEvents:
    """Everything a renderer or audio adapter needs to react to one tick.

    Attributes:
        tick: Tick count after processing
        time_ms: Simulated time after processing
        emitted: Pulses emitted this tick
        crossings: Wavefronts that swept past the observer
        sonic_booms: Number of sub-steps that produced a boom
        barrier_crossed: Mach moved across M = 1 since the previous tick
        previous_regime: Regime on the previous tick
        regime: Regime on this tick
        retired: Pulses removed this tick
        source_wrapped: Moving source returned to its start (pulses cleared)
        observed_frequency: Waves per second at the observer
        pulse_tone_frequency: Ping frequency for emissions at the current Mach
        paused: Tick arrived while the simulation was paused
    """

    tick: int
    time_ms: float
    previous_regime: FlightRegime
    regime: FlightRegime
    barrier_crossed: bool = False
    emitted: list[Pulse] = field(default_factory=list)
    crossings: list[Crossing] = field(default_factory=list)
    sonic_booms: int = 0
    retired: int = 0
    source_wrapped: bool = False
    observed_frequency: float = 0.0
    pulse_tone_frequency: float = 0.0
    paused: bool = False

    @property
    def sonic_boom(self) -> bool:
        """True if any sub-step produced a boom."""
        return self.sonic_booms > 0

    @property
    def hit_count(self) -> int:
        """Number of observer crossings."""
        return len(self.crossings)

    @property
    def any(self) -> bool:
        """True if anything happened that a renderer could react to."""
        return bool(
            self.emitted
            or self.crossings
            or self.sonic_booms
            or self.barrier_crossed
            or self.source_wrapped
        )


@dataclass
class RunSummary:
    """Totals accumulated by :func:`run`."""

    ticks: int = 0
    emitted: int = 0
    crossings: int = 0
    sonic_booms: int = 0
    barrier_crossings: int = 0
    retired: int = 0
    source_wraps: int = 0
    peak_observed_frequency: float = 0.0

    def add(self, events: TickEvents) -> None:
        """Fold one tick's events into the totals."""
        self.ticks += 1
        self.emitted += len(events.emitted)
        self.crossings += events.hit_count
        self.sonic_booms += events.sonic_booms
        self.barrier_crossings += int(events.barrier_crossed)
        self.retired += events.retired
        self.source_wraps += int(events.source_wrapped)
        self.peak_observed_frequency = max(
            self.peak_observed_frequency, events.observed_frequency
        )


def barrier_crossed(previous: FlightRegime, current: FlightRegime) -> bool:
    """Whether the regime change between two ticks crosses the sound barrier.

    Leaving subsonic (to sonic or supersonic) and leaving supersonic (to
    sonic or subsonic) both count. Leaving sonic does not, so a slider
    resting on M = 1 produces a single edge.
    """
    return (previous == "subsonic" and current != "subsonic") or (
        previous == "supersonic" and current != "supersonic"
    )


def _track_regime(state: SimulationState) -> bool:
    state.previous_regime = state.regime
    state.regime = flight_regime(state.mach)
    crossed = barrier_crossed(state.previous_regime, state.regime)
    if crossed:
        logger.info(
            "Sound barrier crossed: %s -> %s (M=%.2f)",
            state.previous_regime,
            state.regime,
            state.mach,
        )
    return crossed


def _step(state: SimulationState, events: TickEvents, now: float | None) -> None:
    config = state.config

    state.time_ms = now if now is not None else state.time_ms + config.frame_ms
    state.tick_count += 1

    pulse = maybe_emit(state)
    if pulse is not None:
        events.emitted.append(pulse)

    if advance_source(state):
        events.source_wrapped = True

    crossings, retired = sweep(state)
    events.crossings.extend(crossings)
    events.retired += retired

    if is_sonic_boom(len(crossings), state.mach, config.boom_threshold):
        events.sonic_booms += 1
        logger.info(
            "Sonic boom: %d wavefronts at t=%.0f ms (M=%.2f)",
            len(crossings),
            state.time_ms,
            state.mach,
        )

    prune_hits(state.wave_hit_timestamps, state.time_ms, config.hit_window_ms)


def tick(state: SimulationState, dt_ticks: int = 1, now: float | None = None) -> TickEvents:
    """Advance the simulation and report what happened.

    Args:
        state: Simulation state, mutated in place
        dt_ticks: Number of unit steps to take (default 1); events of all
            steps are merged
        now: Externally supplied monotonic clock in ms. When omitted the
            clock advances by ``config.frame_ms`` per step. When given, every
            step of this call is stamped with it.

    Returns:
        TickEvents for the renderer/audio layer

    Raises:
        ValueError: If dt_ticks < 1 or the supplied clock runs backwards
    """
    if dt_ticks < 1:
        raise ValueError("dt_ticks must be >= 1")
    if now is not None and now < state.time_ms:
        raise ValueError(
            f"clock must be monotonic: now={now} is before last tick at {state.time_ms}"
        )

    crossed = _track_regime(state)
    events = TickEvents(
        tick=state.tick_count,
        time_ms=state.time_ms,
        previous_regime=state.previous_regime,
        regime=state.regime,
        barrier_crossed=crossed,
        paused=state.paused,
    )

    if not state.paused:
        for _ in range(dt_ticks):
            _step(state, events, now)

    events.tick = state.tick_count
    events.time_ms = state.time_ms
    events.observed_frequency = observed_frequency(
        state.wave_hit_timestamps, state.time_ms, state.config.hit_window_ms
    )
    events.pulse_tone_frequency = pulse_emission_frequency(state.mach)
    return events


def run(
    state: SimulationState,
    n_ticks: int,
    callback: Callable[[TickEvents], None] | None = None,
) -> RunSummary:
    """Run a fixed number of ticks.

    Args:
        state: Simulation state, mutated in place
        n_ticks: Number of ticks to run
        callback: Called after each tick with its events

    Returns:
        RunSummary with totals over the run
    """
    summary = RunSummary()
    for _ in range(n_ticks):
        events = tick(state)
        summary.add(events)
        if callback:
            callback(events)
    return summary


def reset(state: SimulationState) -> None:
    """Clear pulses and hit history and return the source to its start."""
    state.pulses.clear()
    state.source_x = state.source_start_x
    state.frame_counter = 0
    state.tick_count = 0
    state.wave_hit_timestamps.clear()
    logger.debug("Simulation reset")


def set_mach(state: SimulationState, value: float) -> float:
    """Set the Mach number, clamped to the configured range.

    Returns:
        The value actually applied

    Raises:
        ValueError: If value is not finite
    """
    if not math.isfinite(value):
        raise ValueError(f"mach must be finite, got {value}")
    config = state.config
    state.mach = max(config.mach_min, min(config.mach_max, float(value)))
    return state.mach


def nudge_mach(state: SimulationState, delta: float = MACH_NUDGE) -> float:
    """Step the Mach number up or down (keyboard arrows), clamped."""
    return set_mach(state, state.mach + delta)


def apply_preset(state: SimulationState, name: str) -> float:
    """Set the Mach number from a named aircraft preset.

    Raises:
        KeyError: If the preset name is unknown
    """
    if name not in AIRCRAFT_PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Valid presets: {list(AIRCRAFT_PRESETS.keys())}"
        )
    return set_mach(state, AIRCRAFT_PRESETS[name])


def set_mode(state: SimulationState, mode: SimulationMode | str) -> None:
    """Switch reference frame. Always resets the simulation."""
    state.mode = SimulationMode(mode)
    reset(state)
    logger.info("Mode set to %s", state.mode.value)


def toggle_mode(state: SimulationState) -> SimulationMode:
    """Flip between wind and moving-source mode."""
    if state.mode is SimulationMode.WIND:
        set_mode(state, SimulationMode.MOVING_SOURCE)
    else:
        set_mode(state, SimulationMode.WIND)
    return state.mode


def set_paused(state: SimulationState, paused: bool) -> None:
    state.paused = paused


def toggle_pause(state: SimulationState) -> bool:
    state.paused = not state.paused
    return state.paused


def set_emission_interval(state: SimulationState, ticks: int) -> None:
    """Set the number of ticks between emissions.

    Raises:
        ValueError: If ticks < 1
    """
    if ticks < 1:
        raise ValueError("emission interval must be >= 1 tick")
    state.emission_interval_ticks = int(ticks)


def set_observer_position(state: SimulationState, x: float, y: float) -> None:
    """Move the observer. No physical constraint applies."""
    state.observer_x = x
    state.observer_y = y


def clamp_observer(state: SimulationState, margin: float | None = None) -> None:
    """Keep a dragged observer inside the visible domain.

    Args:
        state: Simulation state
        margin: Inset from every edge (default ``config.observer_margin``)
    """
    config = state.config
    if margin is None:
        margin = config.observer_margin
    state.observer_x = max(margin, min(config.width - margin, state.observer_x))
    state.observer_y = max(margin, min(config.height - margin, state.observer_y))
