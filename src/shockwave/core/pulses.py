"""Wave pulse lifecycle: emission, growth, drift and retirement.

Each pulse is a circular wavefront emitted from the source position. Its
radius grows by the propagation speed every tick regardless of the Mach
number. In wind mode the medium also carries the wavefront downstream
(rightwards) at ``mach * propagation_speed`` per tick; in moving-source mode
the wavefront stays where it was emitted and the source moves instead.

Pulses are retired by a filter pass after all of them have been advanced,
so the collection is never mutated while it is being iterated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .state import SimulationMode

if TYPE_CHECKING:
    from .state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class Pulse:
    """A single circular wavefront.

    Args:
        pulse_id: Identifier, unique within a session
        x: Centre x (drifts with the medium in wind mode)
        y: Centre y
        radius: Current radius, grows monotonically
        birth_x: Source x at emission
        birth_tick: Tick count at emission
    """

    pulse_id: int
    x: float
    y: float
    radius: float = 0.0
    birth_x: float = 0.0
    birth_tick: int = 0

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError("radius must be non-negative")

    @property
    def leading_edge(self) -> float:
        """Rightmost x reached by the wavefront."""
        return self.x + self.radius

    @property
    def trailing_edge(self) -> float:
        """Leftmost x reached by the wavefront."""
        return self.x - self.radius


def emit(state: SimulationState) -> Pulse:
    """Emit a pulse at the current source position.

    The pulse starts with zero radius, is appended to ``state.pulses`` and
    the emission counter is reset.

    Args:
        state: Simulation state to emit into

    Returns:
        The new pulse
    """
    pulse = Pulse(
        pulse_id=state.next_pulse_id,
        x=state.source_x,
        y=state.source_y,
        radius=0.0,
        birth_x=state.source_x,
        birth_tick=state.tick_count,
    )
    state.next_pulse_id += 1
    state.pulses.append(pulse)
    state.frame_counter = 0
    logger.debug("Emitted pulse %d at (%.1f, %.1f)", pulse.pulse_id, pulse.x, pulse.y)
    return pulse


def maybe_emit(state: SimulationState) -> Pulse | None:
    """Count one tick toward the next emission and emit when due."""
    state.frame_counter += 1
    if state.frame_counter >= state.emission_interval_ticks:
        return emit(state)
    return None


def advance(
    pulse: Pulse, mach: float, mode: SimulationMode, propagation_speed: float
) -> None:
    """Advance a pulse by one tick.

    Args:
        pulse: Pulse to update in place
        mach: Current Mach number
        mode: Reference frame; only WIND drifts the pulse centre
        propagation_speed: Radius growth per tick
    """
    pulse.radius += propagation_speed
    if mode is SimulationMode.WIND:
        pulse.x += mach * propagation_speed


def should_retire(
    pulse: Pulse,
    domain_width: float,
    max_radius: float = 600.0,
    margin: float = 100.0,
) -> bool:
    """Whether a pulse has grown too large or drifted off the domain.

    Args:
        pulse: Pulse to test
        domain_width: Visible domain width
        max_radius: Radius above which the pulse is retired
        margin: How far past the right edge the trailing edge may drift

    Returns:
        True if the pulse should be removed
    """
    return pulse.radius > max_radius or pulse.trailing_edge > domain_width + margin


def retain_active(
    pulses: list[Pulse],
    domain_width: float,
    max_radius: float = 600.0,
    margin: float = 100.0,
) -> int:
    """Drop retired pulses from the collection in place.

    Args:
        pulses: Collection to compact
        domain_width: Visible domain width
        max_radius: See :func:`should_retire`
        margin: See :func:`should_retire`

    Returns:
        Number of pulses removed
    """
    kept = [p for p in pulses if not should_retire(p, domain_width, max_radius, margin)]
    retired = len(pulses) - len(kept)
    pulses[:] = kept
    return retired


def advance_source(state: SimulationState) -> bool:
    """Move the source one tick (moving-source mode only).

    When the source passes the right edge plus the wrap margin it returns to
    its start position and every active pulse is cleared.

    Returns:
        True if the source wrapped this tick
    """
    if state.mode is not SimulationMode.MOVING_SOURCE:
        return False

    config = state.config
    state.source_x += state.mach * config.propagation_speed
    if state.source_x > config.width + config.source_wrap_margin:
        cleared = len(state.pulses)
        state.source_x = state.source_start_x
        state.pulses.clear()
        logger.debug("Source wrapped to x=%.1f, cleared %d pulses", state.source_x, cleared)
        return True
    return False
