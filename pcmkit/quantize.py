"""Quantisation of fixed-point samples to linear PCM and mu-law, with dithering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .fixed import FRACBITS, F_ONE

MAX_RESAMPLEFACTOR = 6
MAX_NSAMPLES = 1152 * MAX_RESAMPLEFACTOR

_SAMPLE_MIN = -F_ONE
_SAMPLE_MAX = F_ONE - 1

_MULAW_BIAS = 0x21
_MULAW_LINEAR_BIAS = _MULAW_BIAS << (FRACBITS - 13)


class AudioMode(IntEnum):
    """How samples are reduced to the output precision."""

    ROUND = 0
    DITHER = 1


@dataclass
class AudioStats:
    """Signal statistics gathered while clipping."""

    clipped_samples: int = 0
    peak_clipping: int = 0
    peak_sample: int = 0


@dataclass
class Dither:
    """Noise-shaping error feedback and generator state for one channel."""

    error: list[int] = field(default_factory=lambda: [0, 0, 0])
    random: int = 0


def _wrap32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _cdiv2(value: int) -> int:
    """Halve, truncating towards zero."""
    return -((-value) // 2) if value < 0 else value // 2


def _prng(state: int) -> int:
    return (state * 0x0019660D + 0x3C6EF35F) & 0xFFFFFFFF


def _clip(sample: int, stats: AudioStats) -> int:
    if sample >= stats.peak_sample:
        if sample > _SAMPLE_MAX:
            stats.clipped_samples += 1
            stats.peak_clipping = max(stats.peak_clipping, sample - _SAMPLE_MAX)
            sample = _SAMPLE_MAX
        stats.peak_sample = sample
    elif sample < -stats.peak_sample:
        if sample < _SAMPLE_MIN:
            stats.clipped_samples += 1
            stats.peak_clipping = max(stats.peak_clipping, _SAMPLE_MIN - sample)
            sample = _SAMPLE_MIN
        stats.peak_sample = -sample
    return sample


def linear_round(bits: int, sample: int, stats: AudioStats) -> int:
    """Round, clip and scale a fixed-point sample to a *bits*-wide integer."""
    sample = _wrap32(sample + (1 << (FRACBITS - bits)))
    sample = _clip(sample, stats)
    return sample >> (FRACBITS + 1 - bits)


def linear_dither(bits: int, sample: int, dither: Dither, stats: AudioStats) -> int:
    """Quantise a fixed-point sample to *bits* with noise-shaped dither."""
    error = dither.error
    sample = _wrap32(sample + error[0] - error[1] + error[2])
    error[2] = error[1]
    error[1] = _cdiv2(error[0])

    output = _wrap32(sample + (1 << (FRACBITS - bits)))

    scalebits = FRACBITS + 1 - bits
    mask = (1 << scalebits) - 1

    random = _wrap32(_prng(dither.random & 0xFFFFFFFF))
    output = _wrap32(output + (random & mask) - (dither.random & mask))
    dither.random = random

    if output >= stats.peak_sample:
        if output > _SAMPLE_MAX:
            stats.clipped_samples += 1
            stats.peak_clipping = max(stats.peak_clipping, output - _SAMPLE_MAX)
            output = _SAMPLE_MAX
            sample = min(sample, _SAMPLE_MAX)
        stats.peak_sample = output
    elif output < -stats.peak_sample:
        if output < _SAMPLE_MIN:
            stats.clipped_samples += 1
            stats.peak_clipping = max(stats.peak_clipping, _SAMPLE_MIN - output)
            output = _SAMPLE_MIN
            sample = max(sample, _SAMPLE_MIN)
        stats.peak_sample = -output

    output &= ~mask
    error[0] = _wrap32(sample - output)
    return output >> scalebits


def linear_to_mulaw(sample: int) -> int:
    """Encode a fixed-point sample as an 8-bit ISDN mu-law code."""
    if sample < 0:
        sample = _MULAW_LINEAR_BIAS - sample
        sign = 0x7F
    else:
        sample = _MULAW_LINEAR_BIAS + sample
        sign = 0xFF

    mulaw = 0x7F
    if sample < F_ONE:
        segment = 7
        mask = 1 << (FRACBITS - 1)
        while not sample & mask:
            mask >>= 1
            segment -= 1
        shift = FRACBITS - 1 - (7 - segment) - 4
        mulaw = (segment << 4) | ((sample >> shift) & 0x0F)

    return (mulaw ^ sign) & 0xFF


def mulaw_to_linear(mulaw: int) -> int:
    """Decode an 8-bit mu-law code to a fixed-point sample."""
    mulaw = ~mulaw & 0xFF
    sign = (mulaw >> 7) & 0x01
    segment = (mulaw >> 4) & 0x07
    mantissa = mulaw & 0x0F

    value = ((0x21 | (mantissa << 1)) << segment) - _MULAW_BIAS
    if sign:
        value = -value
    return value << (FRACBITS - 13)


def mulaw_round(sample: int, stats: AudioStats) -> int:
    """Clip a fixed-point sample and encode it as mu-law."""
    return linear_to_mulaw(_clip(sample, stats))


def mulaw_dither(sample: int, dither: Dither, stats: AudioStats) -> int:
    """Encode a fixed-point sample as mu-law with error feedback."""
    sample = _clip(_wrap32(sample + dither.error[0]), stats)
    mulaw = linear_to_mulaw(sample)
    dither.error[0] = sample - mulaw_to_linear(mulaw)
    return mulaw