"""
Unit tests for the pulse lifecycle.

Tests verify:
- Emission at the source with zero radius and counter reset
- Emission scheduling by interval
- Radius growth independent of Mach, drift in wind mode only
- Retirement by radius and by drift past the right edge
- Moving-source advance and wrap-around clearing every pulse
"""

import pytest

from shockwave.core.pulses import (
    Pulse,
    advance,
    advance_source,
    emit,
    maybe_emit,
    retain_active,
    should_retire,
)
from shockwave.core.state import SimulationMode


class TestPulse:
    """Tests for the Pulse data class."""

    def test_edges(self):
        """Test leading and trailing edges."""
        pulse = Pulse(pulse_id=0, x=100.0, y=50.0, radius=30.0)
        assert pulse.leading_edge == 130.0
        assert pulse.trailing_edge == 70.0

    def test_negative_radius_rejected(self):
        """Test negative radius is rejected."""
        with pytest.raises(ValueError, match="radius"):
            Pulse(pulse_id=0, x=0.0, y=0.0, radius=-1.0)


class TestEmission:
    """Tests for emit and maybe_emit."""

    def test_emit_at_source(self, wind_state):
        """Test emitted pulse starts at the source."""
        wind_state.frame_counter = 7
        pulse = emit(wind_state)

        assert pulse.x == wind_state.source_x
        assert pulse.y == wind_state.source_y
        assert pulse.birth_x == wind_state.source_x
        assert pulse.radius == 0.0
        assert wind_state.pulses == [pulse]
        assert wind_state.frame_counter == 0

    def test_ids_are_unique(self, wind_state):
        """Test pulse ids increase."""
        ids = [emit(wind_state).pulse_id for _ in range(4)]
        assert ids == [0, 1, 2, 3]

    def test_maybe_emit_waits_for_interval(self, wind_state):
        """Test emission waits for the interval."""
        wind_state.emission_interval_ticks = 3

        assert maybe_emit(wind_state) is None
        assert maybe_emit(wind_state) is None
        assert maybe_emit(wind_state) is not None
        assert wind_state.frame_counter == 0
        assert len(wind_state.pulses) == 1

    def test_interval_of_one_emits_every_tick(self, wind_state):
        """Test interval of one emits every tick."""
        wind_state.emission_interval_ticks = 1
        emitted = [maybe_emit(wind_state) for _ in range(5)]
        assert all(p is not None for p in emitted)


class TestAdvance:
    """Tests for per-tick pulse updates."""

    def test_radius_grows_by_propagation_speed(self):
        """Test radius growth per tick."""
        pulse = Pulse(pulse_id=0, x=0.0, y=0.0)
        advance(pulse, mach=2.5, mode=SimulationMode.MOVING_SOURCE, propagation_speed=2.0)
        assert pulse.radius == 2.0

    @pytest.mark.parametrize("mach", [0.0, 0.5, 1.0, 3.0])
    def test_growth_independent_of_mach(self, mach):
        """Test growth does not depend on Mach."""
        pulse = Pulse(pulse_id=0, x=0.0, y=0.0)
        advance(pulse, mach, SimulationMode.WIND, propagation_speed=1.0)
        assert pulse.radius == 1.0

    def test_wind_mode_drifts_downstream(self):
        """Test wind carries pulses downstream."""
        pulse = Pulse(pulse_id=0, x=100.0, y=50.0)
        advance(pulse, mach=1.5, mode=SimulationMode.WIND, propagation_speed=2.0)
        assert pulse.x == pytest.approx(103.0)
        assert pulse.y == 50.0

    def test_moving_source_mode_is_stationary(self):
        """Test pulses stay put in moving-source mode."""
        pulse = Pulse(pulse_id=0, x=100.0, y=50.0)
        advance(pulse, mach=1.5, mode=SimulationMode.MOVING_SOURCE, propagation_speed=2.0)
        assert pulse.x == 100.0

    def test_radius_monotonic(self):
        """Test radius never shrinks."""
        pulse = Pulse(pulse_id=0, x=0.0, y=0.0)
        previous = pulse.radius
        for _ in range(20):
            advance(pulse, 1.2, SimulationMode.WIND, 2.0)
            assert pulse.radius > previous
            previous = pulse.radius


class TestRetirement:
    """Tests for should_retire and retain_active."""

    def test_small_pulse_kept(self):
        """Test small pulses are kept."""
        pulse = Pulse(pulse_id=0, x=100.0, y=250.0, radius=50.0)
        assert not should_retire(pulse, domain_width=900)

    def test_radius_bound(self):
        """Test retirement past the maximum radius."""
        at_bound = Pulse(pulse_id=0, x=100.0, y=250.0, radius=600.0)
        past_bound = Pulse(pulse_id=1, x=100.0, y=250.0, radius=600.5)
        assert not should_retire(at_bound, domain_width=900)
        assert should_retire(past_bound, domain_width=900)

    def test_drifted_off_right_edge(self):
        """Test retirement past the right edge."""
        # Trailing edge at 1001, past 900 + 100
        pulse = Pulse(pulse_id=0, x=1051.0, y=250.0, radius=50.0)
        assert should_retire(pulse, domain_width=900)

    def test_custom_bounds(self):
        """Test custom maximum radius."""
        pulse = Pulse(pulse_id=0, x=100.0, y=250.0, radius=150.0)
        assert should_retire(pulse, domain_width=900, max_radius=100.0)

    def test_retain_active_compacts_in_place(self):
        """Test retired pulses are removed in place."""
        pulses = [
            Pulse(pulse_id=0, x=100.0, y=0.0, radius=700.0),
            Pulse(pulse_id=1, x=100.0, y=0.0, radius=10.0),
            Pulse(pulse_id=2, x=2000.0, y=0.0, radius=10.0),
            Pulse(pulse_id=3, x=200.0, y=0.0, radius=20.0),
        ]
        original = pulses

        retired = retain_active(pulses, domain_width=900)

        assert retired == 2
        assert pulses is original
        assert [p.pulse_id for p in pulses] == [1, 3]


class TestSourceAdvance:
    """Tests for moving-source motion and wrap-around."""

    def test_wind_mode_source_fixed(self, wind_state):
        """Test source is fixed in wind mode."""
        start = wind_state.source_x
        assert advance_source(wind_state) is False
        assert wind_state.source_x == start

    def test_moving_source_advances(self, moving_state):
        """Test source moves at Mach times propagation speed."""
        start = moving_state.source_x
        advance_source(moving_state)
        assert moving_state.source_x == pytest.approx(
            start + moving_state.mach * moving_state.config.propagation_speed
        )

    def test_wrap_resets_source_and_clears_pulses(self, moving_state):
        """Test wrap-around resets the source and clears pulses."""
        emit(moving_state)
        emit(moving_state)
        moving_state.source_x = moving_state.config.width + moving_state.config.source_wrap_margin

        assert advance_source(moving_state) is True
        assert moving_state.source_x == moving_state.source_start_x
        assert moving_state.pulses == []
