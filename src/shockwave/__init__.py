"""
Shockwave - Mach cone and Doppler effect simulation core.

Headless physics behind a real-time 2D visualization of wave pulses
emitted by a point source as its speed crosses the speed of sound.

Main exports:
- SimulationState: Explicit session state passed to every call
- tick: Advance one animation frame and return TickEvents
- doppler_shift: Stylised Doppler multiplier for colour and tone
- flight_regime, mach_angle: Mach kinematics
- FlashState, mach_cone_edges: Renderer helpers
- ToneSpec, tones_for_events: Sonification helpers
"""

from shockwave.audio import ToneSpec, mix, tones_for_events
from shockwave.config import DEFAULT_CONFIG, SimulationConfig
from shockwave.core import (
    AIRCRAFT_PRESETS,
    SPEED_OF_SOUND,
    Crossing,
    Pulse,
    RunSummary,
    SimulationMode,
    SimulationState,
    TickEvents,
    apply_preset,
    doppler_shift,
    doppler_to_frequency,
    flight_regime,
    has_crossed,
    is_sonic_boom,
    mach_angle,
    mach_angle_degrees,
    mach_to_speed,
    observed_frequency,
    pulse_emission_frequency,
    reset,
    run,
    set_mach,
    set_mode,
    set_observer_position,
    speed_to_mach,
    tick,
)
from shockwave.logging_config import setup_logging
from shockwave.scene import FlashState, doppler_ring_colors, mach_cone_edges, pulse_alpha

# Submodules for more specific imports
from . import audio, core, scene

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "SimulationConfig",
    "DEFAULT_CONFIG",
    "setup_logging",
    # Simulation
    "SimulationState",
    "SimulationMode",
    "Pulse",
    "Crossing",
    "TickEvents",
    "RunSummary",
    "tick",
    "run",
    "reset",
    "set_mach",
    "set_mode",
    "set_observer_position",
    "apply_preset",
    # Physics
    "SPEED_OF_SOUND",
    "AIRCRAFT_PRESETS",
    "flight_regime",
    "mach_angle",
    "mach_angle_degrees",
    "mach_to_speed",
    "speed_to_mach",
    "doppler_shift",
    "doppler_to_frequency",
    "pulse_emission_frequency",
    "has_crossed",
    "observed_frequency",
    "is_sonic_boom",
    # Rendering and audio
    "FlashState",
    "mach_cone_edges",
    "pulse_alpha",
    "doppler_ring_colors",
    "ToneSpec",
    "tones_for_events",
    "mix",
    # Submodules
    "audio",
    "core",
    "scene",
]
