import pytest

from diggerlib.sound import SoundDriver, SoundEngine


class RecordingDriver(SoundDriver):
    def __init__(self):
        self.calls = []

    def setup(self):
        self.calls.append(("setup",))

    def kill(self):
        self.calls.append(("kill",))

    def sound_off(self):
        self.calls.append(("sound_off",))

    def set_speaker_t2(self):
        self.calls.append(("set_speaker_t2",))

    def timer0(self, t0):
        self.calls.append(("timer0", t0))

    def timer2(self, t2, mode):
        self.calls.append(("timer2", t2, mode))


@pytest.fixture
def engine():
    eng = SoundEngine(RecordingDriver())
    eng.init_sound()
    eng.driver.calls.clear()
    return eng


def last_timer2(eng):
    return [c for c in eng.driver.calls if c[0] == "timer2"][-1]


def run(eng, n):
    for _ in range(n):
        eng.sound_int()


def test_init_sound_programs_driver():
    eng = SoundEngine(RecordingDriver())
    eng.init_sound()
    calls = eng.driver.calls
    assert calls[0] == ("timer2", 40, False)
    assert calls[-1] == ("timer0", 0x4000)
    assert ("setup",) in calls
    assert eng.spkrmode == 0


def test_idle_tick_programs_idle_timer2(engine):
    engine.sound_int()
    assert engine.driver.calls == [("timer2", 40, False)]


def test_em_sets_timer2(engine):
    engine.em()
    engine.sound_int()
    assert last_timer2(engine) == ("timer2", 1000, False)
    engine.sound_int()
    assert last_timer2(engine) == ("timer2", 40, False)


def test_emerald_first_note(engine):
    engine.emerald(0)
    engine.sound_int()
    assert last_timer2(engine) == ("timer2", 0x8E8, False)


def test_emerald_index_out_of_range(engine):
    with pytest.raises(IndexError):
        engine.emerald(8)


def test_soundflag_off_silences(engine):
    engine.soundflag = False
    engine.sound_int()
    assert ("timer2", 40, False) in engine.driver.calls
    assert ("sound_off",) in engine.driver.calls


def test_pause_stops_programming(engine):
    engine.em()
    engine.pause()
    engine.sound_int()
    assert engine.driver.calls == []
    engine.pause_off()
    engine.sound_int()
    assert last_timer2(engine) == ("timer2", 1000, False)


def test_music_programs_first_note(engine):
    engine.music(0, 1.0)
    engine.sound_int()
    assert ("timer0", 0x11D1) in engine.driver.calls
    assert engine.spkrmode == 1


def test_music_off_stops_timer0(engine):
    engine.music(1, 1.0)
    run(engine, 5)
    engine.music_off()
    engine.driver.calls.clear()
    run(engine, 5)
    assert not any(c[0] == "timer0" for c in engine.driver.calls)


def test_unknown_tune_rejected(engine):
    with pytest.raises(ValueError):
        engine.music(3, 1.0)


def test_dirge_sets_and_clears_died_flag(engine):
    engine.music(2, 1.0)
    assert engine.sounddiedone is False
    run(engine, 1000)
    assert engine.sounddiedone is True


def test_fire_pitch_in_range(engine):
    engine.fire(0)
    run(engine, 2)
    t2 = last_timer2(engine)[1]
    assert 500 <= t2 < 600


def test_fire_is_deterministic():
    a = SoundEngine(RecordingDriver())
    b = SoundEngine(RecordingDriver())
    for eng in (a, b):
        eng.init_sound()
        eng.fire(0)
        eng.fire(1)
        run(eng, 50)
    assert a.driver.calls == b.driver.calls


def test_digger_die_ends(engine):
    engine.digger_die()
    engine.sound_int()
    assert last_timer2(engine)[1] < 20000
    run(engine, 100)
    assert last_timer2(engine) == ("timer2", 40, False)


def test_one_up_ends(engine):
    engine.one_up()
    run(engine, 120)
    assert last_timer2(engine) == ("timer2", 40, False)


def test_wobble_note(engine):
    engine.wobble()
    run(engine, 16)
    assert last_timer2(engine) == ("timer2", 0x9C4, False)


def test_bonus_first_note(engine):
    engine.bonus()
    engine.sound_int()
    assert last_timer2(engine) == ("timer2", 0x4CE, False)


def test_stop_clears_effects(engine):
    engine.em()
    engine.gold()
    engine.wobble()
    engine.stop()
    engine.sound_int()
    assert engine.driver.calls == [("timer2", 40, False)]


def test_level_done_jingle_plays_and_ends(engine):
    assert engine.start_level_done() is True
    assert engine.level_done_playing
    engine.sound_int()
    assert ("timer2", 0x8E8, True) in engine.driver.calls
    run(engine, 300)
    assert not engine.level_done_playing
    assert not engine.paused


def test_level_done_without_device():
    eng = SoundEngine(RecordingDriver())
    eng.init_sound()
    eng.wave_device_available = False
    assert eng.start_level_done() is False
    assert not eng.level_done_playing


def test_base_driver_accepts_all_calls():
    eng = SoundEngine()
    eng.init_sound()
    eng.music(0, 1.0)
    eng.fire(1)
    run(eng, 10)
    assert eng.spkrmode in (0, 1)