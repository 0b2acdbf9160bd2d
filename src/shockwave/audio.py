"""Sonification of tick events.

Maps :class:`~shockwave.core.simulation.TickEvents` to short tones and
renders them to sample buffers. Playing the buffers is left to the host
application; nothing here touches an audio device.

Tones:
    - Emission ping: 200-800 Hz sine (rises with Mach), 0.1 s
    - Observer crossing: 400 Hz sine shifted by the Doppler multiplier and
      clamped to 100-1200 Hz, 0.08 s
    - Sonic boom: 80 Hz sawtooth, 0.3 s

Every tone uses an exponential gain ramp from its start gain down to 0.01.

Example:
    >>> from shockwave.audio import ToneSpec
    >>> ping = ToneSpec(frequency=440.0, duration=0.1, gain=0.15)
    >>> ping.render(sample_rate=8000).shape
    (800,)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from scipy import signal

from shockwave.core.simulation import TickEvents

ToneShape = Literal["sine", "sawtooth"]

DEFAULT_SAMPLE_RATE = 44100
END_GAIN = 0.01

PING_GAIN = 0.15
PING_DURATION = 0.1
CROSSING_GAIN = 0.12
CROSSING_DURATION = 0.08
BOOM_FREQUENCY = 80.0
BOOM_GAIN = 0.3
BOOM_DURATION = 0.3


@dataclass(frozen=True)
class ToneSpec:
    """A single enveloped tone.

    Args:
        frequency: Oscillator frequency in Hz
        duration: Length in seconds
        gain: Start gain, ramped exponentially down to 0.01
        shape: Oscillator waveform ("sine" or "sawtooth")
    """

    frequency: float
    duration: float
    gain: float
    shape: ToneShape = "sine"

    def __post_init__(self):
        """Validate parameters."""
        if self.frequency <= 0:
            raise ValueError("frequency must be positive")
        if self.duration <= 0:
            raise ValueError("duration must be positive")
        if not END_GAIN <= self.gain <= 1:
            raise ValueError(f"gain must be in [{END_GAIN}, 1]")
        if self.shape not in ("sine", "sawtooth"):
            raise ValueError(f"Unknown tone shape '{self.shape}'")

    def envelope(self, t: NDArray[np.floating]) -> NDArray[np.floating]:
        """Exponential gain ramp evaluated at times t (seconds)."""
        return self.gain * (END_GAIN / self.gain) ** (t / self.duration)

    def waveform(self, t: NDArray[np.floating]) -> NDArray[np.floating]:
        """Enveloped oscillator output at times t (seconds)."""
        phase = 2 * np.pi * self.frequency * t
        if self.shape == "sawtooth":
            carrier = signal.sawtooth(phase)
        else:
            carrier = np.sin(phase)
        return self.envelope(t) * carrier

    def render(self, sample_rate: int = DEFAULT_SAMPLE_RATE) -> NDArray[np.floating]:
        """Render the tone to a float32 buffer."""
        n_samples = int(round(self.duration * sample_rate))
        t = np.arange(n_samples) / sample_rate
        return self.waveform(t).astype(np.float32)


def tones_for_events(events: TickEvents) -> list[ToneSpec]:
    """Tones to play for one tick: pings, then crossings, then a boom."""
    tones = [
        ToneSpec(events.pulse_tone_frequency, PING_DURATION, PING_GAIN)
        for _ in events.emitted
    ]
    tones.extend(
        ToneSpec(crossing.tone_frequency, CROSSING_DURATION, CROSSING_GAIN)
        for crossing in events.crossings
    )
    if events.sonic_boom:
        tones.append(ToneSpec(BOOM_FREQUENCY, BOOM_DURATION, BOOM_GAIN, "sawtooth"))
    return tones


def mix(tones: list[ToneSpec], sample_rate: int = DEFAULT_SAMPLE_RATE) -> NDArray[np.floating]:
    """Overlay tones that start together into one buffer clipped to [-1, 1].

    Args:
        tones: Tones to mix
        sample_rate: Output sample rate in Hz

    Returns:
        float32 buffer as long as the longest tone (empty if no tones)
    """
    buffers = [tone.render(sample_rate) for tone in tones]
    if not buffers:
        return np.zeros(0, dtype=np.float32)

    out = np.zeros(max(len(b) for b in buffers), dtype=np.float32)
    for buffer in buffers:
        out[: len(buffer)] += buffer
    return np.clip(out, -1.0, 1.0)
