"""Sound effects and music sequencing driven by a periodic interrupt.

The engine keeps the state of every effect and tune. On each call of
:meth:`SoundEngine.sound_int` it works out the two timer values a PC
speaker would be programmed with and hands them to a :class:`SoundDriver`.
"""

from __future__ import annotations

__all__ = ["SoundDriver", "SoundEngine", "FIREBALLS"]

DIGGERS = 2
FIREBALLS = DIGGERS

_SILENT_T0 = 0x7D00
_IDLE_T2 = 40
_END_OF_TUNE = 0x7D64

_NEW_LEVEL_JINGLE = (0x8E8, 0x712, 0x5F2, 0x7F0, 0x6AC, 0x54C,
                     0x712, 0x5F2, 0x4B8, 0x474, 0x474)

_EMERALD_FREQS = (0x8E8, 0x7F0, 0x712, 0x6AC, 0x5F2, 0x54C, 0x4B8, 0x474)

_BONUS_JINGLE = (
    0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2,
    0xd59, 4, 0xbe4, 4, 0xa98, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2,
    0x11d1, 4, 0xd59, 2, 0xa98, 2, 0xbe4, 4, 0xe24, 4, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2,
    0x11d1, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2, 0xd59, 4, 0xbe4, 4,
    0xa98, 4, 0xd59, 2, 0xa98, 2, 0x8e8, 10, 0xa00, 2, 0xa98, 2, 0xbe4, 2, 0xd59, 4,
    0xa98, 4, 0xd59, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4,
    0x11d1, 2, 0x11d1, 2, 0xd59, 4, 0xbe4, 4, 0xa98, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4,
    0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0xd59, 2, 0xa98, 2, 0xbe4, 4, 0xe24, 4, 0x11d1, 4,
    0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2, 0x11d1, 4, 0x11d1, 2, 0x11d1, 2,
    0xd59, 4, 0xbe4, 4, 0xa98, 4, 0xd59, 2, 0xa98, 2, 0x8e8, 10, 0xa00, 2, 0xa98, 2,
    0xbe4, 2, 0xd59, 4, 0xa98, 4, 0xd59, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4, 0xa98, 2,
    0xa98, 2, 0xa98, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4, 0x7f0, 4, 0xa98, 4, 0x7f0, 4,
    0xa98, 4, 0x7f0, 4, 0xa98, 4, 0xbe4, 4, 0xd59, 4, 0xe24, 4, 0xfdf, 4, 0xa98, 2,
    0xa98, 2, 0xa98, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4,
    0x7f0, 4, 0xa98, 4, 0x7f0, 4, 0xa98, 4, 0x7f0, 4, 0x8e8, 4, 0x970, 4, 0x8e8, 4,
    0x970, 4, 0x8e8, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4,
    0xa98, 2, 0xa98, 2, 0xa98, 4, 0x7f0, 4, 0xa98, 4, 0x7f0, 4, 0xa98, 4, 0x7f0, 4,
    0xa98, 4, 0xbe4, 4, 0xd59, 4, 0xe24, 4, 0xfdf, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4,
    0xa98, 2, 0xa98, 2, 0xa98, 4, 0xa98, 2, 0xa98, 2, 0xa98, 4, 0x7f0, 4, 0xa98, 4,
    0x7f0, 4, 0xa98, 4, 0x7f0, 4, 0x8e8, 4, 0x970, 4, 0x8e8, 4, 0x970, 4, 0x8e8, 4,
    0x7d64,
)

_BACKGROUND_JINGLE = (
    0xfdf, 2, 0x11d1, 2, 0xfdf, 2, 0x1530, 2, 0x1ab2, 2, 0x1530, 2, 0x1fbf, 4, 0xfdf, 2,
    0x11d1, 2, 0xfdf, 2, 0x1530, 2, 0x1ab2, 2, 0x1530, 2, 0x1fbf, 4, 0xfdf, 2, 0xe24, 2,
    0xd59, 2, 0xe24, 2, 0xd59, 2, 0xfdf, 2, 0xe24, 2, 0xfdf, 2, 0xe24, 2, 0x11d1, 2,
    0xfdf, 2, 0x11d1, 2, 0xfdf, 2, 0x1400, 2, 0xfdf, 4, 0xfdf, 2, 0x11d1, 2, 0xfdf, 2,
    0x1530, 2, 0x1ab2, 2, 0x1530, 2, 0x1fbf, 4, 0xfdf, 2, 0x11d1, 2, 0xfdf, 2, 0x1530, 2,
    0x1ab2, 2, 0x1530, 2, 0x1fbf, 4, 0xfdf, 2, 0xe24, 2, 0xd59, 2, 0xe24, 2, 0xd59, 2,
    0xfdf, 2, 0xe24, 2, 0xfdf, 2, 0xe24, 2, 0x11d1, 2, 0xfdf, 2, 0x11d1, 2, 0xfdf, 2,
    0xe24, 2, 0xd59, 4, 0xa98, 2, 0xbe4, 2, 0xa98, 2, 0xd59, 2, 0x11d1, 2, 0xd59, 2,
    0x1530, 4, 0xa98, 2, 0xbe4, 2, 0xa98, 2, 0xd59, 2, 0x11d1, 2, 0xd59, 2, 0x1530, 4,
    0xa98, 2, 0x970, 2, 0x8e8, 2, 0x970, 2, 0x8e8, 2, 0xa98, 2, 0x970, 2, 0xa98, 2,
    0x970, 2, 0xbe4, 2, 0xa98, 2, 0xbe4, 2, 0xa98, 2, 0xd59, 2, 0xa98, 4, 0xa98, 2,
    0xbe4, 2, 0xa98, 2, 0xd59, 2, 0x11d1, 2, 0xd59, 2, 0x1530, 4, 0xa98, 2, 0xbe4, 2,
    0xa98, 2, 0xd59, 2, 0x11d1, 2, 0xd59, 2, 0x1530, 4, 0xa98, 2, 0x970, 2, 0x8e8, 2,
    0x970, 2, 0x8e8, 2, 0xa98, 2, 0x970, 2, 0xa98, 2, 0x970, 2, 0xbe4, 2, 0xa98, 2,
    0xbe4, 2, 0xa98, 2, 0xd59, 2, 0xa98, 4, 0x7f0, 2, 0x8e8, 2, 0xa98, 2, 0xd59, 2,
    0x11d1, 2, 0xd59, 2, 0x1530, 4, 0xa98, 2, 0xbe4, 2, 0xa98, 2, 0xd59, 2, 0x11d1, 2,
    0xd59, 2, 0x1530, 4, 0xa98, 2, 0x970, 2, 0x8e8, 2, 0x970, 2, 0x8e8, 2, 0xa98, 2,
    0x970, 2, 0xa98, 2, 0x970, 2, 0xbe4, 2, 0xa98, 2, 0xbe4, 2, 0xd59, 2, 0xbe4, 2,
    0xa98, 4, 0x7d64,
)

_DIRGE = (
    0x7d00, 2, 0x11d1, 6, 0x11d1, 4, 0x11d1, 2, 0x11d1, 6, 0xefb, 4, 0xfdf, 2,
    0xfdf, 4, 0x11d1, 2, 0x11d1, 4, 0x12e0, 2, 0x11d1, 12, 0x7d00, 16, 0x7d00, 16,
    0x7d00, 16, 0x7d00, 16, 0x7d00, 16, 0x7d00, 16, 0x7d00, 16, 0x7d00, 16, 0x7d00, 16,
    0x7d00, 16, 0x7d00, 16, 0x7d00, 16, 0x7d64,
)

_TUNES = (_BONUS_JINGLE, _BACKGROUND_JINGLE, _DIRGE)

# maxvol, attack, sustain, decay, release, duration factor
_TUNE_ENVELOPES = (
    (50, 20, 20, 10, 4, 3.0),
    (50, 50, 8, 15, 1, 6.0),
    (50, 50, 25, 5, 1, 10.0),
)


def _to_int8(value: int) -> int:
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


class SoundDriver:
    """Output device for the engine; the base class produces no sound."""

    def setup(self) -> None:
        """Prepare the device for playing."""

    def kill(self) -> None:
        """Silence the device for good."""

    def sound_off(self) -> None:
        """Silence both channels."""

    def set_speaker_t2(self) -> None:
        """Apply the engine's current speaker mode."""

    def timer0(self, t0: int) -> None:
        """Program the music channel divisor."""

    def timer2(self, t2: int, mode: bool) -> None:
        """Program the effects channel divisor."""


class SoundEngine:
    """Sequencer for effects, music and the level-complete jingle."""

    def __init__(self, driver: SoundDriver | None = None) -> None:
        self.driver = driver if driver is not None else SoundDriver()
        self.soundflag = True
        self.musicflag = True
        self.volume = 0
        self.spkrmode = 0
        self.pulsewidth = 1
        self.sounddiedone = True
        self.wave_device_available = True

        self._wavetype = 0
        self._musvol = 0
        self._t2val = 0
        self._t0val = 0
        self._timerclock = 0
        self._sndflag = False
        self._paused = False
        self._soundt0flag = False
        self._randvs = 0

        self._levdone = False
        self._nljpointer = 0
        self._nljnoteduration = 0

        self._fall_flag = False
        self._fall_f = False
        self._fall_value = 0
        self._fall_n = 0

        self._break_flag = False
        self._break_duration = 0
        self._break_value = 0

        self._wobble_flag = False
        self._wobble_n = 0

        self._fire_flag = [False] * FIREBALLS
        self._fire_value = [0] * FIREBALLS
        self._fire_n = [0] * FIREBALLS
        self._fire_w = 0

        self._explode_flag = [False] * FIREBALLS
        self._explode_value = [0] * FIREBALLS
        self._explode_duration = [0] * FIREBALLS
        self._explode_w = 0

        self._bonus_flag = False
        self._bonus_n = 0

        self._em_flag = False

        self._emerald_flag = False
        self._emerald_duration = 0
        self._emerald_freq = 0
        self._emerald_n = 0

        self._gold_flag = False
        self._gold_f = False
        self._gold_value1 = 0
        self._gold_value2 = 0
        self._gold_duration = 0

        self._eatm_flag = False
        self._eatm_value = 0
        self._eatm_duration = 0
        self._eatm_n = 0

        self._ddie_flag = False
        self._ddie_n = 0
        self._ddie_value = 0

        self._oneup_flag = False
        self._oneup_duration = 0

        self._music_playing = False
        self._musicp = 0
        self._tuneno = 0
        self._noteduration = 0
        self._notevalue = 0
        self._music_maxvol = 0
        self._music_attack = 0
        self._music_sustain = 0
        self._music_decay = 0
        self._music_notewidth = 0
        self._music_release = 0
        self._music_stage = 0
        self._music_n = 0
        self._music_dfac = 0

    @property
    def level_done_playing(self) -> bool:
        """True while the level-complete jingle is being played."""
        return self._levdone

    @property
    def paused(self) -> bool:
        return self._paused

    def _randnos(self, n: int) -> int:
        self._randvs = _to_int32(self._randvs * 0x15A4E35 + 1)
        return (self._randvs & 0x7FFFFFFF) % n

    def _sett2val(self, t2v: int, mode: bool) -> None:
        if self._sndflag:
            self.driver.timer2(t2v & 0xFFFF, mode)

    def _sett0(self, mode: bool) -> None:
        if not self._sndflag:
            return
        if not mode:
            self.driver.timer2(self._t2val & 0xFFFF, mode)
        if self._t0val < 1000 and self._wavetype in (1, 2):
            self._t0val = 1000
        self._musvol = min(max(self._musvol, 1), 50)
        self.pulsewidth = self._musvol * self.volume
        self.driver.timer0(self._t0val & 0xFFFF)
        self.set_sound_mode()

    def sound_int(self) -> None:
        """Advance all sounds by one tick and reprogram the driver."""
        self._timerclock = _to_int8(self._timerclock + 1)
        if self.soundflag and not self._sndflag:
            self._sndflag = self.musicflag = True
        if not self.soundflag and self._sndflag:
            self._sndflag = False
            self.driver.timer2(_IDLE_T2, False)
            self.set_sound_t2()
            self.driver.sound_off()
        if self._sndflag and not self._paused:
            self._t0val = _SILENT_T0
            self._t2val = _IDLE_T2
            if self.musicflag:
                self._music_update()
            self._emerald_update()
            self._wobble_update()
            self._ddie_update()
            self._break_update()
            self._gold_update()
            self._em_update()
            self._explode_update()
            self._fire_update()
            self._eatm_update()
            self._fall_update()
            self._oneup_update()
            self._bonus_update()
            if self._t0val == _SILENT_T0 or self._t2val != _IDLE_T2:
                self.set_sound_t2()
            else:
                self.set_sound_mode()
                self._sett0(False)
            self._sett2val(self._t2val, False)
        if self._levdone:
            self._level_done_update()

    def stop(self) -> None:
        """Stop every effect and the music."""
        self.fall_off()
        self.wobble_off()
        for n in range(FIREBALLS):
            self.fire_off(n)
        self.music_off()
        self.bonus_off()
        for n in range(FIREBALLS):
            self._explode_flag[n] = False
        self._break_flag = False
        self._em_flag = False
        self._emerald_flag = False
        self._gold_flag = False
        self._eatm_flag = False
        self._ddie_flag = False
        self._oneup_flag = False

    def start_level_done(self) -> bool:
        """Stop all sounds and start the level-complete jingle.

        Returns whether the jingle is playing; later ticks of
        :meth:`sound_int` play it until :attr:`level_done_playing` clears.
        """
        self.stop()
        if not self._sndflag:
            return False
        self._nljpointer = 0
        self._nljnoteduration = 20
        self._levdone = self._paused = True
        if not self.wave_device_available:
            self._level_done_off()
            return False
        return True

    def _level_done_off(self) -> None:
        self._levdone = self._paused = False

    def _level_done_update(self) -> None:
        if not self._sndflag:
            self._levdone = False
            return
        if self._nljpointer < len(_NEW_LEVEL_JINGLE):
            self._t2val = _NEW_LEVEL_JINGLE[self._nljpointer]
        self._t0val = self._t2val + 35
        self._musvol = 50
        self.set_sound_mode()
        self._sett0(True)
        self._sett2val(self._t2val, True)
        if self._nljnoteduration > 0:
            self._nljnoteduration -= 1
        else:
            self._nljnoteduration = 20
            self._nljpointer += 1
            if self._nljpointer > 10:
                self._level_done_off()

    def fall(self) -> None:
        self._fall_value = 1000
        self._fall_flag = True

    def fall_off(self) -> None:
        self._fall_flag = False
        self._fall_n = 0

    def _fall_update(self) -> None:
        if not self._fall_flag:
            return
        if self._fall_n < 1:
            self._fall_n += 1
            if self._fall_f:
                self._t2val = self._fall_value
        else:
            self._fall_n = 0
            if self._fall_f:
                self._fall_value += 50
                self._fall_f = False
            else:
                self._fall_f = True

    def break_(self) -> None:
        self._break_duration = 3
        if self._break_value < 15000:
            self._break_value = 15000
        self._break_flag = True

    def _break_update(self) -> None:
        if not self._break_flag:
            return
        if self._break_duration != 0:
            self._break_duration -= 1
            self._t2val = self._break_value
        else:
            self._break_flag = False

    def wobble(self) -> None:
        self._wobble_flag = True

    def wobble_off(self) -> None:
        self._wobble_flag = False
        self._wobble_n = 0

    def _wobble_update(self) -> None:
        if not self._wobble_flag:
            return
        self._wobble_n += 1
        if self._wobble_n > 63:
            self._wobble_n = 0
        if self._wobble_n == 0:
            self._t2val = 0x7D0
        elif self._wobble_n in (16, 48):
            self._t2val = 0x9C4
        elif self._wobble_n == 32:
            self._t2val = 0xBB8

    def fire(self, n: int) -> None:
        self._fire_value[n] = 500
        self._fire_flag[n] = True

    def fire_off(self, n: int) -> None:
        self._fire_flag[n] = False
        self._fire_n[n] = 0

    def _fire_update(self) -> None:
        active = [False] * FIREBALLS
        for n in range(FIREBALLS):
            if not self._fire_flag[n]:
                continue
            if self._fire_n[n] == 1:
                self._fire_n[n] = 0
                self._fire_value[n] += self._fire_value[n] // 55
                active[n] = True
                if self._fire_value[n] > 30000:
                    self.fire_off(n)
            else:
                self._fire_n[n] += 1
        if any(active):
            while True:
                n = self._fire_w
                self._fire_w = (self._fire_w + 1) % FIREBALLS
                if active[n]:
                    break
            value = self._fire_value[n]
            self._t2val = value + self._randnos(value >> 3)

    def explode(self, n: int) -> None:
        self._explode_value[n] = 1500
        self._explode_duration[n] = 10
        self._explode_flag[n] = True
        self.fire_off(n)

    def _explode_update(self) -> None:
        active = [False] * FIREBALLS
        for n in range(FIREBALLS):
            if not self._explode_flag[n]:
                continue
            if self._explode_duration[n] != 0:
                self._explode_value[n] -= self._explode_value[n] >> 3
                self._explode_duration[n] -= 1
                active[n] = True
            else:
                self._explode_flag[n] = False
        if any(active):
            while True:
                n = self._explode_w
                self._explode_w = (self._explode_w + 1) % FIREBALLS
                if active[n]:
                    break
            self._t2val = self._explode_value[n]

    def bonus(self) -> None:
        self._bonus_flag = True

    def bonus_off(self) -> None:
        self._bonus_flag = False
        self._bonus_n = 0

    def _bonus_update(self) -> None:
        if not self._bonus_flag:
            return
        self._bonus_n += 1
        if self._bonus_n > 15:
            self._bonus_n = 0
        if 0 <= self._bonus_n < 6:
            self._t2val = 0x4CE
        if 8 <= self._bonus_n < 14:
            self._t2val = 0x5E9

    def em(self) -> None:
        self._em_flag = True

    def _em_update(self) -> None:
        if self._em_flag:
            self._t2val = 1000
            self._em_flag = False

    def emerald(self, n: int) -> None:
        self._emerald_freq = _EMERALD_FREQS[n]
        self._emerald_duration = 7
        self._emerald_n = 0
        self._emerald_flag = True

    def _emerald_update(self) -> None:
        if not self._emerald_flag:
            return
        if self._emerald_duration != 0:
            if self._emerald_n in (0, 1):
                self._t2val = self._emerald_freq
            self._emerald_n += 1
            if self._emerald_n > 7:
                self._emerald_n = 0
                self._emerald_duration -= 1
        else:
            self._emerald_flag = False

    def gold(self) -> None:
        self._gold_value1 = 500
        self._gold_value2 = 4000
        self._gold_duration = 30
        self._gold_f = False
        self._gold_flag = True

    def _gold_update(self) -> None:
        if not self._gold_flag:
            return
        if self._gold_duration != 0:
            self._gold_duration -= 1
        else:
            self._gold_flag = False
        if self._gold_f:
            self._gold_f = False
            self._t2val = self._gold_value1
        else:
            self._gold_f = True
            self._t2val = self._gold_value2
        self._gold_value1 += self._gold_value1 >> 4
        self._gold_value2 -= self._gold_value2 >> 4

    def eat_monster(self) -> None:
        self._eatm_duration = 20
        self._eatm_n = 3
        self._eatm_value = 2000
        self._eatm_flag = True

    def _eatm_update(self) -> None:
        if not self._eatm_flag:
            return
        if self._eatm_n == 0:
            self._eatm_flag = False
            return
        if self._eatm_duration != 0:
            if self._eatm_duration % 4 == 1:
                self._t2val = self._eatm_value
            if self._eatm_duration % 4 == 3:
                self._t2val = self._eatm_value - (self._eatm_value >> 4)
            self._eatm_duration -= 1
            self._eatm_value -= self._eatm_value >> 4
        else:
            self._eatm_duration = 20
            self._eatm_n -= 1
            self._eatm_value = 2000

    def digger_die(self) -> None:
        self._ddie_n = 0
        self._ddie_value = 20000
        self._ddie_flag = True

    def _ddie_update(self) -> None:
        if not self._ddie_flag:
            return
        self._ddie_n += 1
        if self._ddie_n == 1:
            self.music_off()
        if 1 <= self._ddie_n <= 10:
            self._ddie_value = 20000 - self._ddie_n * 1000
        if self._ddie_n > 10:
            self._ddie_value += 500
        if self._ddie_value > 30000:
            self._ddie_flag = False
        self._t2val = self._ddie_value

    def one_up(self) -> None:
        self._oneup_duration = 96
        self._oneup_flag = True

    def _oneup_update(self) -> None:
        if not self._oneup_flag:
            return
        if (self._oneup_duration // 3) % 2 != 0:
            self._t2val = (self._oneup_duration << 2) + 600
        self._oneup_duration -= 1
        if self._oneup_duration < 1:
            self._oneup_flag = False

    def music(self, tune: int, dfac: float = 1.0) -> None:
        """Start tune 0 (bonus), 1 (background) or 2 (dirge)."""
        if tune not in (0, 1, 2):
            raise ValueError(f"unknown tune: {tune!r}")
        self._tuneno = tune
        self._musicp = 0
        self._noteduration = 0
        if not self._sndflag:
            return
        (self._music_maxvol, self._music_attack, self._music_sustain,
         self._music_decay, self._music_release, factor) = _TUNE_ENVELOPES[tune]
        self._music_dfac = int(factor * dfac)
        self._music_playing = True
        if tune == 2:
            self._ddie_flag = False
            if not self.wave_device_available:
                return
            self.sounddiedone = False

    def music_off(self) -> None:
        self._music_playing = False
        self._musicp = 0

    def _music_update(self) -> None:
        if not self._music_playing:
            return
        if self._noteduration != 0:
            self._noteduration -= 1
        else:
            self._music_stage = self._music_n = 0
            notes = _TUNES[self._tuneno]
            self._noteduration = notes[self._musicp + 1] * self._music_dfac
            if self._tuneno == 1:
                self._music_notewidth = self._music_dfac * 2
            else:
                self._music_notewidth = self._noteduration - self._music_dfac
            self._notevalue = notes[self._musicp]
            if self._tuneno == 2 and self._musicp > 0 and self._notevalue == _SILENT_T0:
                self.sounddiedone = True
            self._musicp += 2
            if notes[self._musicp] == _END_OF_TUNE:
                self._musicp = 0
        self._music_n += 1
        self._wavetype = 1
        self._t0val = self._notevalue
        if self._music_n >= self._music_notewidth:
            self._music_stage = 2
        if self._music_stage == 0:
            if self._musvol + self._music_attack >= self._music_maxvol:
                self._music_stage = 1
                self._musvol = self._music_maxvol
            else:
                self._musvol += self._music_attack
        elif self._music_stage == 1:
            if self._musvol - self._music_decay <= self._music_sustain:
                self._musvol = self._music_sustain
            else:
                self._musvol -= self._music_decay
        elif self._music_stage == 2:
            if self._musvol - self._music_release <= 1:
                self._musvol = 1
            else:
                self._musvol -= self._music_release
        if self._musvol == 1:
            self._t0val = _SILENT_T0

    def pause(self) -> None:
        self._paused = True

    def pause_off(self) -> None:
        self._paused = False

    def set_sound_t2(self) -> None:
        """Switch the speaker back to effects-only mode."""
        if self._soundt0flag:
            self.spkrmode = 0
            self._soundt0flag = False
            self.driver.set_speaker_t2()

    def set_sound_mode(self) -> None:
        """Switch the speaker to the current wave type."""
        self.spkrmode = self._wavetype
        if not self._soundt0flag and self._sndflag:
            self._soundt0flag = True
            self.driver.set_speaker_t2()

    def init_sound(self) -> None:
        """Reset the engine and program the driver's initial state."""
        self.driver.timer2(_IDLE_T2, False)
        self.driver.set_speaker_t2()
        self.driver.timer0(0)
        self._wavetype = 2
        self._t0val = 12000
        self._musvol = 8
        self._t2val = _IDLE_T2
        self._soundt0flag = True
        self._sndflag = True
        self.spkrmode = 0
        self.set_sound_t2()
        self.stop()
        self.driver.setup()
        self.driver.timer0(0x4000)
        self._randvs = 0