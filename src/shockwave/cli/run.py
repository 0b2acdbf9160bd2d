"""Command-line tool for running the shock wave simulation headless.

The shockwave-run CLI drives the same tick loop a renderer would, without
drawing anything, and reports what the observer experienced: crossings,
observed wave frequency, sonic booms and sound-barrier crossings.
"""

import logging
import sys
import time

import click
from rich.console import Console

from shockwave.config import SimulationConfig
from shockwave.core.kinematics import AIRCRAFT_PRESETS
from shockwave.core.simulation import (
    RunSummary,
    set_mach,
    set_observer_position,
    tick,
)
from shockwave.core.state import SimulationMode, SimulationState
from shockwave.logging_config import setup_logging

from .progress import SimulationProgress, format_time, print_run_summary, print_simulation_info

console = Console()


@click.command()
@click.option(
    "--mach",
    "-m",
    type=click.FloatRange(0.0, 3.0),
    default=0.5,
    show_default=True,
    help="Source speed as a multiple of the speed of sound",
)
@click.option(
    "--preset",
    type=click.Choice(list(AIRCRAFT_PRESETS.keys())),
    help="Aircraft preset (overrides --mach)",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in SimulationMode]),
    default=SimulationMode.WIND.value,
    show_default=True,
    help="Reference frame: medium flowing past a fixed source, or a moving source",
)
@click.option("--ticks", "-n", type=click.IntRange(min=1), default=600, show_default=True)
@click.option(
    "--emission-interval",
    "-e",
    type=click.IntRange(min=1),
    default=20,
    show_default=True,
    help="Ticks between pulse emissions",
)
@click.option(
    "--observer",
    type=(float, float),
    default=None,
    metavar="X Y",
    help="Observer position (default: right side of the domain)",
)
@click.option(
    "--ramp-to",
    type=click.FloatRange(0.0, 3.0),
    help="Ramp Mach linearly to this value over the run",
)
@click.option("--width", type=float, default=900.0, show_default=True, help="Domain width")
@click.option("--height", type=float, default=500.0, show_default=True, help="Domain height")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write log records here")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output with debug logging")
@click.option("--dry-run", is_flag=True, help="Show parameters without running")
@click.version_option(version="0.1.0", prog_name="shockwave-run")
def main(
    mach: float,
    preset: str | None,
    mode: str,
    ticks: int,
    emission_interval: int,
    observer: tuple[float, float] | None,
    ramp_to: float | None,
    width: float,
    height: float,
    log_file: str | None,
    verbose: bool,
    dry_run: bool,
):
    """Run the Mach cone simulation and summarise what the observer hears.

    Example:

    \b
        shockwave-run --preset Concorde --ticks 900
        shockwave-run --mach 0.5 --ramp-to 2.0 --mode moving_source
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file=log_file)
    sys.exit(
        _simulate(
            mach, preset, mode, ticks, emission_interval, observer, ramp_to,
            width, height, verbose, dry_run,
        )
    )


def _simulate(
    mach: float,
    preset: str | None,
    mode: str,
    ticks: int,
    emission_interval: int,
    observer: tuple[float, float] | None,
    ramp_to: float | None,
    width: float,
    height: float,
    verbose: bool,
    dry_run: bool,
) -> int:
    try:
        console.print("\n[bold]Shock Wave Simulation[/bold]", style="blue")
        console.print("─" * 60)

        try:
            config = SimulationConfig(width=width, height=height)
        except ValueError as e:
            console.print(f"\n[bold red]Invalid configuration:[/bold red] {e}")
            return 1

        # Start at the preset so the first tick does not report a regime change
        state = SimulationState.create(
            config=config,
            mach=AIRCRAFT_PRESETS[preset] if preset is not None else mach,
            mode=SimulationMode(mode),
            emission_interval_ticks=emission_interval,
        )
        if observer is not None:
            set_observer_position(state, *observer)

        print_simulation_info(console, state, ticks)
        if ramp_to is not None:
            console.print(f"Ramping Mach {state.mach:.2f} → {ramp_to:.2f}\n", style="dim")

        if dry_run:
            console.print("[yellow]Dry run - simulation not executed[/yellow]")
            return 0

        start_mach = state.mach
        summary = RunSummary()
        start_time = time.time()

        try:
            with SimulationProgress(console, state, ticks) as progress:
                for i in range(ticks):
                    if ramp_to is not None:
                        set_mach(state, start_mach + (ramp_to - start_mach) * (i + 1) / ticks)
                    events = tick(state)
                    summary.add(events)
                    progress.update(events)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            return 130

        runtime = time.time() - start_time

        console.print("─" * 60)
        console.print("✓ [bold green]Simulation complete![/bold green]")
        print_run_summary(console, state, summary)
        console.print(f"  Runtime: {format_time(runtime)}")
        return 0

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        return 1


if __name__ == "__main__":
    main()
