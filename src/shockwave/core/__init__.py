"""Core physics: kinematics, pulses, Doppler model and crossing detection."""

from shockwave.core.doppler import (
    doppler_ring_factors,
    doppler_shift,
    doppler_to_frequency,
    pulse_emission_frequency,
)
from shockwave.core.kinematics import (
    AIRCRAFT_PRESETS,
    SPEED_OF_SOUND,
    RealWorldSpeed,
    distance,
    flight_regime,
    is_supersonic,
    mach_angle,
    mach_angle_degrees,
    mach_to_speed,
    speed_to_mach,
)
from shockwave.core.observer import (
    Crossing,
    has_crossed,
    is_sonic_boom,
    observed_frequency,
    prune_hits,
    sweep,
)
from shockwave.core.pulses import (
    Pulse,
    advance,
    advance_source,
    emit,
    maybe_emit,
    retain_active,
    should_retire,
)
from shockwave.core.simulation import (
    RunSummary,
    TickEvents,
    apply_preset,
    barrier_crossed,
    clamp_observer,
    nudge_mach,
    reset,
    run,
    set_emission_interval,
    set_mach,
    set_mode,
    set_observer_position,
    set_paused,
    tick,
    toggle_mode,
    toggle_pause,
)
from shockwave.core.state import SimulationMode, SimulationState

__all__ = [
    # Kinematics
    "SPEED_OF_SOUND",
    "AIRCRAFT_PRESETS",
    "RealWorldSpeed",
    "flight_regime",
    "is_supersonic",
    "mach_angle",
    "mach_angle_degrees",
    "mach_to_speed",
    "speed_to_mach",
    "distance",
    # Pulses
    "Pulse",
    "emit",
    "maybe_emit",
    "advance",
    "advance_source",
    "should_retire",
    "retain_active",
    # Doppler
    "doppler_shift",
    "doppler_to_frequency",
    "pulse_emission_frequency",
    "doppler_ring_factors",
    # Observer
    "Crossing",
    "has_crossed",
    "observed_frequency",
    "prune_hits",
    "is_sonic_boom",
    "sweep",
    # Simulation
    "SimulationMode",
    "SimulationState",
    "TickEvents",
    "RunSummary",
    "tick",
    "run",
    "reset",
    "barrier_crossed",
    "set_mach",
    "nudge_mach",
    "apply_preset",
    "set_mode",
    "toggle_mode",
    "set_paused",
    "toggle_pause",
    "set_emission_interval",
    "set_observer_position",
    "clamp_observer",
]
