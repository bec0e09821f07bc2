import pytest

from diggerlib.soundgen import INT16_MAX, SoundGenerator


def _run(gen, n):
    return [gen.get_sample() for _ in range(n)]


def test_silent_when_no_band_enabled():
    gen = SoundGenerator(8000, 2)
    assert _run(gen, 50) == [0] * 50
    assert gen.step == 50


def test_first_sample_is_positive_peak():
    gen = SoundGenerator(8000, 1)
    gen.set_band(0, 1000.0, 1.0)
    assert gen.get_sample() == INT16_MAX


def test_amplitude_scales_output():
    gen = SoundGenerator(8000, 1)
    gen.set_band(0, 500.0, 0.5)
    samples = _run(gen, 400)
    assert max(samples) == -min(samples)
    assert 0 < max(samples) < INT16_MAX


def test_output_is_averaged_over_bands():
    one = SoundGenerator(8000, 1)
    two = SoundGenerator(8000, 2)
    one.set_band(0, 700.0, 1.0)
    two.set_band(0, 700.0, 1.0)
    for a, b in zip(_run(one, 200), _run(two, 200)):
        assert b == int(a / 2)


def test_mute_returns_previous_state_and_silences():
    gen = SoundGenerator(8000, 1)
    gen.set_band(0, 1000.0, 1.0)
    assert gen.set_mute(0, True) is False
    assert _run(gen, 20) == [0] * 20
    assert gen.set_mute(0, False) is True
    assert any(s != 0 for s in _run(gen, 20))


def test_zero_frequency_disables_band():
    gen = SoundGenerator(8000, 1)
    gen.set_band(0, 1000.0, 1.0)
    gen.set_band(0, 0.0, 1.0)
    assert _run(gen, 10) == [0] * 10
    assert gen.get_phase(0) == 0.0


def test_unity_modulation_leaves_output_unchanged():
    plain = SoundGenerator(8000, 2)
    modded = SoundGenerator(8000, 2)
    plain.set_band(0, 600.0, 1.0)
    modded.set_band(0, 600.0, 1.0)
    modded.set_band_mod(1, 50.0, 1.0, 1.0)
    assert _run(plain, 300) == _run(modded, 300)


def test_zero_gain_modulation_silences_first_half_period():
    gen = SoundGenerator(8000, 2)
    gen.set_band(0, 1000.0, 1.0)
    gen.set_band_mod(1, 10.0, 0.0, 1.0)
    assert _run(gen, 100) == [0] * 100


def test_phase_is_zero_for_disabled_band():
    gen = SoundGenerator(44100, 2)
    assert gen.get_phase(1) == 0.0


def test_phase_stays_in_unit_interval():
    gen = SoundGenerator(44100, 1)
    gen.set_band(0, 1607.0, 1.0)
    for _ in range(50):
        _run(gen, 97)
        phase = gen.get_phase(0)
        assert 0.0 <= phase < 1.0


def test_set_phase_then_get_phase():
    gen = SoundGenerator(44100, 1)
    gen.set_band(0, 1607.0, 1.0)
    _run(gen, 123)
    gen.set_phase(0, 0.25)
    assert gen.get_phase(0) == pytest.approx(0.25, abs=1e-9)
    gen.set_phase(0, 0.1)
    assert gen.get_phase(0) == pytest.approx(0.1, abs=1e-9)


def test_phase_preserved_across_frequency_change():
    gen = SoundGenerator(44100, 1)
    gen.set_band(0, 1607.0, 1.0)
    _run(gen, 1000)
    rphase = gen.get_phase(0)
    gen.set_band(0, 2087.0, 1.0)
    gen.set_phase(0, rphase)
    assert gen.get_phase(0) == pytest.approx(rphase, abs=1e-9)


def test_negative_frequency_rejected():
    gen = SoundGenerator(8000, 1)
    with pytest.raises(ValueError):
        gen.set_band(0, -1.0, 1.0)
    with pytest.raises(ValueError):
        gen.set_band_mod(0, -5.0, 0.0, 1.0)


def test_phase_out_of_range_rejected():
    gen = SoundGenerator(8000, 1)
    gen.set_band(0, 1000.0, 1.0)
    with pytest.raises(ValueError):
        gen.set_phase(0, 1.0)
    with pytest.raises(ValueError):
        gen.set_phase(0, -0.5)


def test_bad_band_index():
    gen = SoundGenerator(8000, 2)
    with pytest.raises(IndexError):
        gen.set_band(5, 100.0, 1.0)


@pytest.mark.parametrize("srate,nbands", [(0, 1), (8000, 0)])
def test_invalid_construction(srate, nbands):
    with pytest.raises(ValueError):
        SoundGenerator(srate, nbands)