"""Encoding of fixed-point sample blocks into interleaved PCM byte strings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from .quantize import (
    AudioMode,
    AudioStats,
    Dither,
    linear_dither,
    linear_round,
    mulaw_dither,
    mulaw_round,
)


def _u8(value: int) -> bytes:
    return bytes(((value & 0xFF) ^ 0x80,))


def _s8(value: int) -> bytes:
    return bytes((value & 0xFF,))


def _s16le(value: int) -> bytes:
    return (value & 0xFFFF).to_bytes(2, "little")


def _s16be(value: int) -> bytes:
    return (value & 0xFFFF).to_bytes(2, "big")


def _s24le(value: int) -> bytes:
    return (value & 0xFFFFFF).to_bytes(3, "little")


def _s24be(value: int) -> bytes:
    return (value & 0xFFFFFF).to_bytes(3, "big")


def _s32le(value: int) -> bytes:
    return b"\0" + _s24le(value)


def _s32be(value: int) -> bytes:
    return _s24be(value) + b"\0"


def _mulaw(value: int) -> bytes:
    return bytes((value & 0xFF,))


class PcmFormat(Enum):
    """Output sample formats: (quantisation bits or None for mu-law, packer)."""

    U8 = "u8"
    S8 = "s8"
    S16LE = "s16le"
    S16BE = "s16be"
    S24LE = "s24le"
    S24BE = "s24be"
    S32LE = "s32le"
    S32BE = "s32be"
    MULAW = "mulaw"

    @property
    def bytes_per_sample(self) -> int:
        return _LAYOUT[self][2]


_LAYOUT: dict[PcmFormat, tuple[int | None, Callable[[int], bytes], int]] = {
    PcmFormat.U8: (8, _u8, 1),
    PcmFormat.S8: (8, _s8, 1),
    PcmFormat.S16LE: (16, _s16le, 2),
    PcmFormat.S16BE: (16, _s16be, 2),
    PcmFormat.S24LE: (24, _s24le, 3),
    PcmFormat.S24BE: (24, _s24be, 3),
    # 32-bit output carries 24 significant bits.
    PcmFormat.S32LE: (24, _s32le, 4),
    PcmFormat.S32BE: (24, _s32be, 4),
    PcmFormat.MULAW: (None, _mulaw, 1),
}


class PcmEncoder:
    """Quantises blocks of fixed-point samples, keeping dither state per channel."""

    def __init__(self) -> None:
        self.left_dither = Dither()
        self.right_dither = Dither()

    def _quantizer(
        self, fmt: PcmFormat, mode: AudioMode, stats: AudioStats
    ) -> Callable[[int, Dither], int]:
        bits = _LAYOUT[fmt][0]
        if mode == AudioMode.ROUND:
            if bits is None:
                return lambda sample, _dither: mulaw_round(sample, stats)
            return lambda sample, _dither: linear_round(bits, sample, stats)
        if mode == AudioMode.DITHER:
            if bits is None:
                return lambda sample, dither: mulaw_dither(sample, dither, stats)
            return lambda sample, dither: linear_dither(bits, sample, dither, stats)
        raise ValueError(f"unknown audio mode {mode!r}")

    def encode(
        self,
        fmt: PcmFormat,
        left: Sequence[int],
        right: Sequence[int] | None,
        mode: AudioMode,
        stats: AudioStats,
    ) -> bytes:
        """Encode *left* (and *right*, if stereo) as interleaved samples in *fmt*."""
        fmt = PcmFormat(fmt)
        quantize = self._quantizer(fmt, mode, stats)
        pack = _LAYOUT[fmt][1]
        out = bytearray()
        if right is None:
            for sample in left:
                out += pack(quantize(sample, self.left_dither))
            return bytes(out)
        if len(left) != len(right):
            raise ValueError("left and right channels differ in length")
        for lsample, rsample in zip(left, right):
            out += pack(quantize(lsample, self.left_dither))
            out += pack(quantize(rsample, self.right_dither))
        return bytes(out)