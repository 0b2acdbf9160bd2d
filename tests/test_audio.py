"""
Unit tests for sonification.

Tests verify:
- ToneSpec validation and envelope endpoints
- Rendering length, dtype and waveform shape
- Event-to-tone mapping
- Mixing
"""

import numpy as np
import pytest

from shockwave.audio import (
    BOOM_FREQUENCY,
    END_GAIN,
    ToneSpec,
    mix,
    tones_for_events,
)
from shockwave.core.observer import Crossing
from shockwave.core.pulses import Pulse
from shockwave.core.simulation import TickEvents


class TestToneSpec:
    """Tests for ToneSpec."""

    def test_render_length_and_dtype(self):
        """Test rendered buffer length and dtype."""
        buffer = ToneSpec(frequency=440.0, duration=0.1, gain=0.15).render(sample_rate=8000)
        assert buffer.shape == (800,)
        assert buffer.dtype == np.float32

    def test_envelope_endpoints(self):
        """Test envelope starts at the gain and ends at the floor."""
        tone = ToneSpec(frequency=440.0, duration=0.1, gain=0.15)
        env = tone.envelope(np.array([0.0, 0.1]))
        np.testing.assert_allclose(env, [0.15, END_GAIN])

    def test_peak_bounded_by_gain(self):
        """Test rendered amplitude never exceeds the start gain."""
        buffer = ToneSpec(frequency=440.0, duration=0.1, gain=0.15).render()
        assert np.max(np.abs(buffer)) <= 0.15 + 1e-6

    def test_sawtooth_shape(self):
        """Test sawtooth rendering for the boom tone."""
        tone = ToneSpec(frequency=80.0, duration=0.3, gain=0.3, shape="sawtooth")
        buffer = tone.render(sample_rate=8000)
        assert buffer.shape == (2400,)
        # Sawtooth starts at -1 scaled by the start gain
        assert buffer[0] == pytest.approx(-0.3, abs=1e-6)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"frequency": 0.0, "duration": 0.1, "gain": 0.1},
            {"frequency": 440.0, "duration": 0.0, "gain": 0.1},
            {"frequency": 440.0, "duration": 0.1, "gain": 2.0},
            {"frequency": 440.0, "duration": 0.1, "gain": 0.1, "shape": "square"},
        ],
    )
    def test_validation(self, kwargs):
        """Test invalid tone parameters are rejected."""
        with pytest.raises(ValueError):
            ToneSpec(**kwargs)


class TestTonesForEvents:
    """Tests for tones_for_events."""

    def test_quiet_tick(self):
        """Test a tick without events produces no tones."""
        events = TickEvents(tick=1, time_ms=0.0, previous_regime="subsonic", regime="subsonic")
        assert tones_for_events(events) == []

    def test_ping_crossing_and_boom(self):
        """Test tone order and parameters for a busy tick."""
        events = TickEvents(
            tick=1,
            time_ms=0.0,
            previous_regime="supersonic",
            regime="supersonic",
            emitted=[Pulse(pulse_id=0, x=0.0, y=0.0)],
            crossings=[
                Crossing(pulse_id=1, time_ms=0.0, doppler_shift=1.5, tone_frequency=600.0)
            ],
            sonic_booms=1,
            pulse_tone_frequency=500.0,
        )

        ping, crossing, boom = tones_for_events(events)

        assert ping.frequency == 500.0
        assert ping.shape == "sine"
        assert crossing.frequency == 600.0
        assert crossing.duration == pytest.approx(0.08)
        assert boom.frequency == BOOM_FREQUENCY
        assert boom.shape == "sawtooth"


class TestMix:
    """Tests for mix."""

    def test_empty(self):
        """Test mixing nothing gives an empty buffer."""
        assert mix([]).shape == (0,)

    def test_length_of_longest(self):
        """Test mix length follows the longest tone and is clipped."""
        tones = [
            ToneSpec(frequency=440.0, duration=0.1, gain=0.15),
            ToneSpec(frequency=80.0, duration=0.3, gain=0.3, shape="sawtooth"),
        ]
        out = mix(tones, sample_rate=8000)
        assert out.shape == (2400,)
        assert np.all(np.abs(out) <= 1.0)
