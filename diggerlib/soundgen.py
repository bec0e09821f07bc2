"""Square-wave sound generator with independently phased bands.

Each band either generates a square wave that is summed into the output
or modulates the summed output by switching between two gain levels.
Positions are tracked as whole seconds plus a fractional remainder so
that long runs do not lose precision.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from enum import Enum

__all__ = ["SoundGenerator", "BandType", "INT16_MAX"]

INT16_MAX = 32767
_U64 = (1 << 64) - 1


class BandType(Enum):
    """How a band contributes to the output."""

    GEN = "gen"
    MOD = "mod"


@dataclass
class _DivResult:
    ires: int = 0
    nres: int = 0
    irem: int = 0
    frem: float = 0.0


@dataclass
class _Band:
    kind: BandType = BandType.GEN
    freq: float = 0.0
    amp: float = 0.0
    phase: float = 0.0
    period: float = 0.0
    last_spos: int = 0
    lut: list = field(default_factory=lambda: [0, 0])
    phi_off: float = 0.0
    disabled: bool = True
    muted: bool = False


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _precise_div(x: int, y: int) -> _DivResult:
    ires = x // y
    nres = ires * y
    irem = x - nres
    return _DivResult(ires, nres, irem, irem / y)


def _precise_divf(xp: _DivResult, y: float) -> _DivResult:
    ires = int(math.trunc(xp.ires / y))
    nres = ires * y
    res = xp.ires - nres
    return _DivResult(ires=ires, nres=int(math.trunc(nres)),
                      frem=math.fmod(res + xp.frem, y))


def _check_freq(freq: float) -> None:
    if math.copysign(1.0, freq) < 0:
        raise ValueError(f"frequency must not be negative: {freq!r}")


class SoundGenerator:
    """Thread-safe generator of 16-bit samples from a set of bands."""

    def __init__(self, srate: int, nbands: int) -> None:
        if srate < 1:
            raise ValueError(f"sample rate must be positive: {srate!r}")
        if nbands < 1:
            raise ValueError(f"need at least one band: {nbands!r}")
        self.srate = int(srate)
        self.nbands = int(nbands)
        self._step = 0
        self._last_ipos = 0
        self._last_npos = 0
        self._bands = [_Band() for _ in range(self.nbands)]
        self._lock = threading.Lock()

    @property
    def step(self) -> int:
        """Number of samples produced so far."""
        with self._lock:
            return self._step

    def set_band(self, band: int, freq: float, amp: float) -> None:
        """Make a band generate a square wave of the given frequency and amplitude."""
        _check_freq(freq)
        with self._lock:
            sbp = self._bands[band]
            sbp.kind = BandType.GEN
            sbp.freq = freq
            sbp.amp = amp
            if freq > 0.0 and amp > 0.0:
                sbp.period = 1.0 / freq
                sbp.lut = [int(amp * INT16_MAX), int(-amp * INT16_MAX)]
                sbp.disabled = False
            else:
                sbp.disabled = True

    def set_band_mod(self, band: int, freq: float, a0: float, a1: float) -> None:
        """Make a band modulate the output between gains a0 and a1."""
        _check_freq(freq)
        with self._lock:
            sbp = self._bands[band]
            sbp.kind = BandType.MOD
            sbp.freq = freq
            sbp.amp = a1 - a0
            if freq > 0.0:
                sbp.period = 1.0 / freq
                sbp.lut = [int(a0 * INT16_MAX), int(a1 * INT16_MAX)]
                sbp.disabled = False
            else:
                sbp.disabled = True

    def set_mute(self, band: int, muted: bool) -> bool:
        """Mute or unmute a band; return whether it was muted before."""
        with self._lock:
            sbp = self._bands[band]
            previous = sbp.muted
            sbp.muted = bool(muted)
            return previous

    def _phase_locked(self, band: int) -> float:
        sbp = self._bands[band]
        if sbp.disabled:
            return 0.0
        pos = _precise_div((self._step - self._last_npos) & _U64, self.srate)
        pos.ires = (pos.ires + self._last_ipos - sbp.last_spos) & _U64
        cpos = _precise_divf(pos, sbp.period)
        return math.fmod(sbp.phase + cpos.frem * sbp.freq, 1.0)

    def get_phase(self, band: int) -> float:
        """Current phase of a band in [0, 1); 0.0 for a disabled band."""
        with self._lock:
            return self._phase_locked(band)

    def _add_phase(self, band: int, delta: float) -> None:
        if not 0.0 <= delta < 1.0:
            raise ValueError(f"phase increment out of range: {delta!r}")
        sbp = self._bands[band]
        sbp.phase = math.fmod(sbp.phase + delta, 1.0)
        sbp.phi_off = sbp.phase / sbp.freq if sbp.freq else 0.0

    def set_phase(self, band: int, phase: float) -> None:
        """Shift a band so that its current phase becomes the given value."""
        if not 0.0 <= phase < 1.0:
            raise ValueError(f"phase must be in [0, 1): {phase!r}")
        with self._lock:
            current = self._phase_locked(band)
            if current == phase:
                return
            if current < phase:
                self._add_phase(band, phase - current)
            else:
                self._add_phase(band, 1.0 - current + phase)

    def get_sample(self) -> int:
        """Produce the next sample and advance by one step."""
        with self._lock:
            osample = 0
            omod = INT16_MAX
            pos = _precise_div((self._step - self._last_npos) & _U64, self.srate)
            self._last_npos += pos.nres
            pos.ires += self._last_ipos
            for sbp in self._bands:
                if sbp.disabled or sbp.muted:
                    continue
                tpos = _DivResult(
                    ires=(pos.ires - sbp.last_spos) & _U64,
                    nres=pos.nres,
                    irem=pos.irem,
                    frem=pos.frem + sbp.phi_off,
                )
                cpos = _precise_divf(tpos, sbp.period)
                if cpos.nres > 0:
                    sbp.last_spos += cpos.nres
                j = 0 if cpos.frem * 2 < sbp.period else 1
                if sbp.kind is BandType.GEN:
                    osample += sbp.lut[j]
                else:
                    omod = _tdiv(omod * sbp.lut[j], INT16_MAX)
            osample = _tdiv(osample, self.nbands)
            if omod != INT16_MAX:
                osample = _tdiv(osample * omod, INT16_MAX)
            self._step += 1
            self._last_ipos = pos.ires
            return osample