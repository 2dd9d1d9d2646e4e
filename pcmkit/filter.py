"""Chains of filters applied to decoded subband samples."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .fixed import F_ONE, f_mul


class FilterFlow(IntEnum):
    """What the decoder should do after a filter has run."""

    CONTINUE = 0x0000
    STOP = 0x0010
    BREAK = 0x0011
    IGNORE = 0x0020


@dataclass
class Frame:
    """Subband samples of one frame, indexed [channel][sample][subband]."""

    sbsample: list[list[list[int]]] = field(default_factory=list)

    @property
    def nchannels(self) -> int:
        return len(self.sbsample)

    @property
    def nsbsamples(self) -> int:
        return len(self.sbsample[0]) if self.sbsample else 0


FilterFunc = Callable[[Any, Frame], FilterFlow]


class FilterChain:
    """An ordered list of filters run one after another on each frame."""

    def __init__(self) -> None:
        self._filters: list[tuple[FilterFunc, Any]] = []

    def prepend(self, func: FilterFunc, data: Any = None) -> None:
        """Insert a filter at the start of the chain."""
        self._filters.insert(0, (func, data))

    def run(self, frame: Frame) -> FilterFlow:
        """Run every filter in order, stopping at the first that does not continue."""
        for func, data in self._filters:
            result = func(data, frame)
            if result != FilterFlow.CONTINUE:
                return FilterFlow(result)
        return FilterFlow.CONTINUE

    def __len__(self) -> int:
        return len(self._filters)


def gain_filter(data: int | Callable[[], int], frame: Frame) -> FilterFlow:
    """Scale every subband sample by a fixed-point gain.

    *data* is the gain, or a callable giving the gain at the time of the call.
    """
    gain = data() if callable(data) else data
    if gain != F_ONE:
        for channel in frame.sbsample:
            for row in channel:
                row[:] = [f_mul(value, gain) for value in row]
    return FilterFlow.CONTINUE