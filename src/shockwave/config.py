"""Scene and timing configuration for the shock wave simulation.

All distances are in scene units (pixels of the reference 900 × 500 canvas)
and all times in milliseconds. Propagation speed is in scene units per tick
and never depends on the Mach number: the source speed is expressed as a
multiple of it.

Example:
    >>> from shockwave.config import SimulationConfig
    >>> config = SimulationConfig(width=1200, height=600)
    >>> config.center_y
    300.0
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Fixed parameters of a simulation session.

    Args:
        width: Visible domain width
        height: Visible domain height
        propagation_speed: Wavefront radius growth per tick
        max_radius: Pulses larger than this are retired
        retire_margin: Distance past the right edge at which a drifting
            pulse is retired
        source_wrap_margin: Distance past the right edge at which a moving
            source wraps back to its start position
        frame_ms: Simulated clock advance per tick when no clock is supplied
        hit_window_ms: Trailing window for observed-frequency estimation
        boom_threshold: Crossings in one tick needed for a sonic boom
        observer_margin: Inset used when clamping a dragged observer
        source_start_fraction: Source start x as a fraction of width
        observer_offset_fraction: Observer start distance from the right
            edge as a fraction of width
        mach_min: Lower bound of the Mach control
        mach_max: Upper bound of the Mach control
    """

    width: float = 900.0
    height: float = 500.0
    propagation_speed: float = 2.0
    max_radius: float = 600.0
    retire_margin: float = 100.0
    source_wrap_margin: float = 50.0
    frame_ms: float = 1000.0 / 60.0
    hit_window_ms: float = 2000.0
    boom_threshold: int = 3
    observer_margin: float = 20.0
    source_start_fraction: float = 0.17
    observer_offset_fraction: float = 0.22
    mach_min: float = 0.0
    mach_max: float = 3.0

    def __post_init__(self):
        """Validate parameters."""
        if self.width <= 0:
            raise ValueError("width must be positive")
        if self.height <= 0:
            raise ValueError("height must be positive")
        if self.propagation_speed <= 0:
            raise ValueError("propagation_speed must be positive")
        if self.max_radius <= 0:
            raise ValueError("max_radius must be positive")
        if self.retire_margin < 0:
            raise ValueError("retire_margin must be non-negative")
        if self.source_wrap_margin < 0:
            raise ValueError("source_wrap_margin must be non-negative")
        if self.frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        if self.hit_window_ms <= 0:
            raise ValueError("hit_window_ms must be positive")
        if self.boom_threshold < 1:
            raise ValueError("boom_threshold must be >= 1")
        if self.observer_margin < 0:
            raise ValueError("observer_margin must be non-negative")
        if not 0 <= self.source_start_fraction <= 1:
            raise ValueError("source_start_fraction must be in [0, 1]")
        if not 0 <= self.observer_offset_fraction <= 1:
            raise ValueError("observer_offset_fraction must be in [0, 1]")
        if not 0 <= self.mach_min < self.mach_max:
            raise ValueError("mach range must satisfy 0 <= mach_min < mach_max")

    @property
    def source_start_x(self) -> float:
        """Initial (and wrap-around) x position of the source."""
        return self.width * self.source_start_fraction

    @property
    def center_y(self) -> float:
        """Vertical centre line on which source and observer start."""
        return self.height / 2

    @property
    def observer_start_x(self) -> float:
        """Initial x position of the observer."""
        return self.width - self.width * self.observer_offset_fraction


DEFAULT_CONFIG = SimulationConfig()
