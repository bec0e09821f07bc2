"""PC speaker emulation on top of the band sound generator.

A :class:`SpeakerSynth` is a :class:`~diggerlib.sound.SoundDriver` that turns
the timer values programmed by a :class:`~diggerlib.sound.SoundEngine` into
16-bit samples.  Band 0 plays the music channel (timer 0) and band 1 the
effects channel (timer 2).  The engine's interrupt is run from inside the
sample stream, about 72.8 times per second of audio.
"""

from __future__ import annotations

from collections.abc import Iterator

from diggerlib.sound import SoundDriver
from diggerlib.soundgen import SoundGenerator

__all__ = ["SpeakerSynth", "PIT_FREQ", "INTERRUPT_RATE"]

PIT_FREQ = 0x1234DD
INTERRUPT_RATE = 72.8

_T0_BAND = 0
_T2_BAND = 1
_IDLE_T2 = 40
_MAX_DIVISOR = 0x4000


class SpeakerSynth(SoundDriver):
    """Sound driver that renders the speaker's two timers as samples."""

    def __init__(self, samprate: int) -> None:
        self.samprate = int(samprate)
        self.generator = SoundGenerator(self.samprate, 2)
        self.interrupt_interval = max(1, round(self.samprate / INTERRUPT_RATE))
        self.paused = False
        self._engine = None
        self._t0rate = 0

    def bind(self, engine) -> None:
        """Attach the engine whose interrupt and speaker state drive this synth.

        The engine's driver is set to this synth as well.
        """
        self._engine = engine
        if getattr(engine, "driver", None) is not self:
            engine.driver = self

    def get_sample(self) -> int:
        """Produce the next sample, running the engine's interrupt when due."""
        if (self.generator.step + 1) % self.interrupt_interval == 0 and self._engine is not None:
            self._engine.sound_int()
        return self.generator.get_sample()

    def samples(self, count: int) -> Iterator[int]:
        """Yield the next ``count`` samples."""
        for _ in range(count):
            yield self.get_sample()

    def setup(self) -> None:
        """Run one interrupt and start producing sound."""
        if self._engine is not None:
            self._engine.sound_int()
        self.paused = False

    def kill(self) -> None:
        """Silence the effects channel and pause output."""
        if self._engine is not None:
            self._engine.set_sound_t2()
        self.timer2(_IDLE_T2, False)
        self.paused = True

    def sound_off(self) -> None:
        self.generator.set_mute(_T0_BAND, True)
        self.generator.set_mute(_T2_BAND, True)

    def set_speaker_t2(self) -> None:
        mode = self._engine.spkrmode if self._engine is not None else 0
        if mode == 0:
            self.generator.set_mute(_T0_BAND, True)
            self.generator.set_mute(_T2_BAND, False)
        elif mode == 1:
            self.generator.set_mute(_T0_BAND, False)
            self.generator.set_mute(_T2_BAND, True)
        else:
            self.generator.set_mute(_T0_BAND, True)
            self.generator.set_mute(_T2_BAND, True)

    def timer2(self, t2: int, mode: bool) -> None:
        gen = self.generator
        if not _IDLE_T2 < t2 < _MAX_DIVISOR:
            gen.set_band(_T2_BAND, 0.0, 0.0)
            return
        rphase = gen.get_phase(_T2_BAND)
        if not mode:
            gen.set_band(_T2_BAND, float(PIT_FREQ // t2), 1.0)
        else:
            if self._t0rate == 0:
                raise RuntimeError("timer 0 must be programmed before modulation")
            frq = float(PIT_FREQ // t2) - float(PIT_FREQ // self._t0rate)
            gen.set_band_mod(_T2_BAND, frq, 1.0, 0.0)
            if gen.set_mute(_T2_BAND, False):
                rphase = 0.0
        gen.set_phase(_T2_BAND, rphase)

    def timer0(self, t0: int) -> None:
        gen = self.generator
        if _IDLE_T2 < t0 < _MAX_DIVISOR:
            pulsewidth = self._engine.pulsewidth if self._engine is not None else 1
            rphase = gen.get_phase(_T0_BAND)
            gen.set_band(_T0_BAND, float(PIT_FREQ // t0), (pulsewidth - 1) / 49.0)
            gen.set_phase(_T0_BAND, rphase)
        else:
            gen.set_band(_T0_BAND, 0.0, 0.0)
        self._t0rate = t0