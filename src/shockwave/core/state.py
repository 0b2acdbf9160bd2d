"""Explicit simulation state passed to every tick and setter.

Nothing in the core reads module-level mutable state: slider values, mode
toggles and the pulse collection all live on a :class:`SimulationState`
instance that the driver owns and mutates in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from shockwave.config import DEFAULT_CONFIG, SimulationConfig

from .kinematics import FlightRegime, flight_regime

if TYPE_CHECKING:
    from .pulses import Pulse


class SimulationMode(Enum):
    """Reference frame of the simulation.

    WIND: the source is fixed and the medium flows past it, carrying the
        wavefronts downstream.
    MOVING_SOURCE: the medium is at rest and the source translates through it.
    """

    WIND = "wind"
    MOVING_SOURCE = "moving_source"


@dataclass
class SimulationState:
    """Session-scoped parameters and the active pulse collection.

    Attributes:
        config: Fixed scene and timing parameters
        mach: Source speed over propagation speed, kept within the config range
        mode: Reference frame
        source_x, source_y: Current source position
        source_start_x: Position the source returns to on reset or wrap
        observer_x, observer_y: User-controlled listening point
        emission_interval_ticks: Ticks between successive emissions
        pulses: Active wavefronts, owned exclusively by this state
        frame_counter: Ticks since the last emission
        wave_hit_timestamps: Crossing times (ms) within the trailing window
        time_ms: Simulated clock of the last processed tick
        tick_count: Unpaused ticks processed since creation or reset
        paused: Freezes pulses, clock and hit history when set
        previous_regime, regime: Flight regime seen on the last two ticks
        next_pulse_id: Identifier handed to the next emitted pulse
    """

    config: SimulationConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    mach: float = 0.5
    mode: SimulationMode = SimulationMode.WIND
    source_x: float = 0.0
    source_y: float = 0.0
    source_start_x: float = 0.0
    observer_x: float = 0.0
    observer_y: float = 0.0
    emission_interval_ticks: int = 20
    pulses: list[Pulse] = field(default_factory=list)
    frame_counter: int = 0
    wave_hit_timestamps: list[float] = field(default_factory=list)
    time_ms: float = 0.0
    tick_count: int = 0
    paused: bool = False
    previous_regime: FlightRegime = "subsonic"
    regime: FlightRegime = "subsonic"
    next_pulse_id: int = 0

    def __post_init__(self):
        """Validate parameters."""
        if self.emission_interval_ticks < 1:
            raise ValueError("emission_interval_ticks must be >= 1")
        if not self.config.mach_min <= self.mach <= self.config.mach_max:
            raise ValueError(
                f"mach must be in [{self.config.mach_min}, {self.config.mach_max}]"
            )
        self.regime = flight_regime(self.mach)
        self.previous_regime = self.regime

    @classmethod
    def create(
        cls,
        config: SimulationConfig | None = None,
        mach: float = 0.5,
        mode: SimulationMode = SimulationMode.WIND,
        emission_interval_ticks: int = 20,
    ) -> SimulationState:
        """Create a state with source and observer laid out on the centre line.

        The source starts 17% of the way across the domain and the observer
        22% in from the right edge.

        Example:
            >>> state = SimulationState.create(mach=1.5)
            >>> state.regime
            'supersonic'
        """
        config = config or DEFAULT_CONFIG
        return cls(
            config=config,
            mach=mach,
            mode=mode,
            source_x=config.source_start_x,
            source_y=config.center_y,
            source_start_x=config.source_start_x,
            observer_x=config.observer_start_x,
            observer_y=config.center_y,
            emission_interval_ticks=emission_interval_ticks,
        )

    @property
    def pulse_count(self) -> int:
        """Number of active pulses."""
        return len(self.pulses)

    @property
    def regime_changed(self) -> bool:
        """True when the regime differs from the one seen on the previous tick."""
        return self.previous_regime != self.regime
