"""Linear-interpolation sample rate conversion of fixed-point blocks."""

from __future__ import annotations

from collections.abc import Sequence

from .fixed import F_ONE, f_div, f_fracpart, f_fromint, f_intpart, f_mul
from .quantize import MAX_RESAMPLEFACTOR


def _snap(step: int) -> int:
    """Snap a step that is within rounding distance of a whole number."""
    if ((step + 0x80) & 0x0FFFFF00) == 0:
        return (step + 0x80) & ~0x0FFFFFFF
    return step


class Resampler:
    """Converts successive blocks from one sampling rate to another."""

    def __init__(self, oldrate: int, newrate: int) -> None:
        if newrate == 0:
            raise ValueError("target sampling rate must not be zero")
        ratio = f_div(oldrate, newrate)
        if ratio <= 0 or ratio > MAX_RESAMPLEFACTOR * F_ONE:
            raise ValueError(f"cannot resample {oldrate} Hz to {newrate} Hz")
        self._ratio = ratio
        self._step = 0
        self._last = 0

    @property
    def ratio(self) -> int:
        """Input-to-output rate ratio in fixed point."""
        return self._ratio

    def block(self, samples: Sequence[int]) -> list[int]:
        """Resample one block, carrying interpolation state to the next."""
        if self._ratio == F_ONE:
            return list(samples)
        if not samples:
            return []

        old = samples
        end = len(old)
        out: list[int] = []
        ratio = self._ratio
        step = self._step

        if step < 0:
            step = f_fracpart(-step)
            last = self._last
            while step < F_ONE:
                out.append(last + f_mul(old[0] - last, step) if step else last)
                step = _snap(step + ratio)
            step -= F_ONE

        pos = 0
        while end - pos > 1 + f_intpart(step):
            pos += f_intpart(step)
            step = f_fracpart(step)
            current = old[pos]
            out.append(current + f_mul(old[pos + 1] - current, step) if step else current)
            step = _snap(step + ratio)

        if end - pos == 1 + f_intpart(step):
            self._last = old[end - 1]
            step = -step
        else:
            step -= f_fromint(end - pos)

        self._step = step
        return out