import pytest

from pcmkit.fixed import F_ONE
from pcmkit.quantize import (
    AudioStats,
    Dither,
    linear_dither,
    linear_round,
    linear_to_mulaw,
    mulaw_dither,
    mulaw_round,
    mulaw_to_linear,
)


@pytest.mark.parametrize("bits", [8, 16, 24])
def test_round_clips_positive_overflow(bits):
    stats = AudioStats()
    assert linear_round(bits, 2 * F_ONE, stats) == (1 << (bits - 1)) - 1
    assert stats.clipped_samples == 1
    assert stats.peak_clipping > 0
    assert stats.peak_sample == F_ONE - 1


@pytest.mark.parametrize("bits", [8, 16, 24])
def test_round_clips_negative_overflow(bits):
    stats = AudioStats()
    assert linear_round(bits, -2 * F_ONE, stats) == -(1 << (bits - 1))
    assert stats.clipped_samples == 1
    assert stats.peak_sample == F_ONE


def test_round_zero_stays_zero():
    stats = AudioStats()
    assert linear_round(16, 0, stats) == 0
    assert stats.clipped_samples == 0


def test_round_half_scale():
    stats = AudioStats()
    assert linear_round(16, F_ONE // 2, stats) == 1 << 14


def test_dither_is_deterministic():
    first, second = Dither(), Dither()
    stats_a, stats_b = AudioStats(), AudioStats()
    samples = [F_ONE // 7 * k for k in range(-5, 6)]
    out_a = [linear_dither(16, s, first, stats_a) for s in samples]
    out_b = [linear_dither(16, s, second, stats_b) for s in samples]
    assert out_a == out_b
    assert first == second


def test_dither_of_silence_stays_small():
    dither, stats = Dither(), AudioStats()
    outputs = [linear_dither(16, 0, dither, stats) for _ in range(200)]
    assert all(abs(v) <= 4 for v in outputs)
    assert abs(sum(outputs)) / len(outputs) < 1


def test_dither_clips_to_full_scale():
    dither, stats = Dither(), AudioStats()
    assert linear_dither(16, 2 * F_ONE, dither, stats) == (1 << 15) - 1
    assert stats.clipped_samples == 1
    assert 0 <= dither.error[0] < 1 << 13


def test_dither_tracks_signal_closely():
    dither, stats = Dither(), AudioStats()
    value = linear_dither(16, F_ONE // 2, dither, stats)
    assert abs(value - (1 << 14)) <= 2


def test_mulaw_of_zero():
    assert linear_to_mulaw(0) == 0xFF
    assert mulaw_to_linear(0xFF) == 0


def test_mulaw_full_scale_positive():
    assert linear_to_mulaw(F_ONE - 1) == 0x80


@pytest.mark.parametrize("code", [c for c in range(256) if c != 0x7F])
def test_mulaw_round_trip(code):
    assert linear_to_mulaw(mulaw_to_linear(code)) == code


def test_mulaw_decode_sign_symmetry():
    for code in range(0x80):
        assert mulaw_to_linear(code) == -mulaw_to_linear(code | 0x80)


def test_mulaw_round_clips():
    stats = AudioStats()
    assert mulaw_round(2 * F_ONE, stats) == linear_to_mulaw(F_ONE - 1)
    assert stats.clipped_samples == 1


def test_mulaw_dither_silence():
    dither, stats = Dither(), AudioStats()
    assert mulaw_dither(0, dither, stats) == 0xFF
    assert dither.error[0] == 0


def test_mulaw_dither_error_feedback():
    dither, stats = Dither(), AudioStats()
    sample = F_ONE // 3
    code = mulaw_dither(sample, dither, stats)
    assert dither.error[0] == sample - mulaw_to_linear(code)