"""Progress display for headless simulation runs.

Provides rich terminal UI for run progress tracking including:
- Progress bar with percentage
- Elapsed time and ETA
- Live event counters (active pulses, crossings, booms)
"""

import time
from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from shockwave.core.kinematics import flight_regime, mach_angle_degrees, mach_to_speed

if TYPE_CHECKING:
    from shockwave.core.simulation import RunSummary, TickEvents
    from shockwave.core.state import SimulationState


def format_time(seconds: float) -> str:
    """Format time duration for display.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1m 23s" or "2h 15m"
    """
    if seconds < 60:
        return f"{seconds:.0f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs:02d}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes:02d}m"


def format_regime(mach: float) -> str:
    """Regime label with the Mach angle where it is defined."""
    regime = flight_regime(mach)
    if regime == "supersonic":
        return f"{regime} (θ = {mach_angle_degrees(mach):.1f}°)"
    return regime


class SimulationProgress:
    """Real-time progress display for a simulation run.

    Example:
        >>> with SimulationProgress(console, state, num_ticks) as progress:
        ...     run(state, num_ticks, callback=progress.update)
    """

    def __init__(
        self,
        console: Console,
        state: "SimulationState",
        num_ticks: int,
        update_interval: float = 0.1,
    ):
        """Initialize progress display.

        Args:
            console: Rich console instance
            state: Simulation state being run
            num_ticks: Total number of ticks
            update_interval: Minimum time between redraws (seconds)
        """
        self.console = console
        self.state = state
        self.num_ticks = num_ticks
        self.update_interval = update_interval

        self.last_update = 0.0
        self.crossings = 0
        self.booms = 0

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            console=console,
        )

        self.task = self.progress.add_task("Simulating", total=num_ticks)
        self.progress.start()

    def update(self, events: "TickEvents"):
        """Record one tick's events and redraw, rate-limited.

        Args:
            events: Events returned by the tick just processed
        """
        self.crossings += events.hit_count
        self.booms += events.sonic_booms

        current_time = time.time()
        if current_time - self.last_update < self.update_interval:
            return

        self.progress.update(
            self.task,
            completed=events.tick,
            description=(
                f"M={self.state.mach:.2f} pulses={self.state.pulse_count} "
                f"hits={self.crossings} booms={self.booms}"
            ),
        )
        self.last_update = current_time

    def finish(self):
        """Finalize progress display."""
        self.progress.update(self.task, completed=self.num_ticks)
        self.progress.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()


def print_simulation_info(console: Console, state: "SimulationState", num_ticks: int):
    """Print run parameters before starting.

    Args:
        console: Rich console instance
        state: Simulation state about to be run
        num_ticks: Number of ticks to run
    """
    config = state.config

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    speed = mach_to_speed(state.mach)
    table.add_row("Mach", f"{state.mach:.2f} ({format_regime(state.mach)})")
    table.add_row("Speed", f"{speed.mph} mph / {speed.kmh} km/h / {speed.ms} m/s")
    table.add_row("Mode", state.mode.value.replace("_", " "))
    table.add_row("Domain", f"{config.width:g} × {config.height:g}")
    table.add_row("Source", f"({state.source_x:.0f}, {state.source_y:.0f})")
    table.add_row("Observer", f"({state.observer_x:.0f}, {state.observer_y:.0f})")
    table.add_row("Emission", f"every {state.emission_interval_ticks} ticks")
    total_ms = num_ticks * config.frame_ms
    table.add_row("Duration", f"{num_ticks} ticks ({total_ms / 1000:.1f} s simulated)")

    console.print(table)
    console.print()


def print_run_summary(console: Console, state: "SimulationState", summary: "RunSummary"):
    """Print totals after a run."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Result", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Pulses emitted", str(summary.emitted))
    table.add_row("Pulses active", str(state.pulse_count))
    table.add_row("Pulses retired", str(summary.retired))
    table.add_row("Observer crossings", str(summary.crossings))
    table.add_row("Sonic booms", str(summary.sonic_booms))
    table.add_row("Barrier crossings", str(summary.barrier_crossings))
    if summary.source_wraps:
        table.add_row("Source wraps", str(summary.source_wraps))
    table.add_row("Peak observed frequency", f"{summary.peak_observed_frequency:.1f} waves/s")
    table.add_row("Final regime", format_regime(state.mach))

    console.print(table)
