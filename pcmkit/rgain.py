"""Replay Gain fields as stored in the LAME info tag."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .bits import BitReader

REFERENCE_DB_SPL = 83


class RgainName(IntEnum):
    NOT_SET = 0x0
    RADIO = 0x1
    AUDIOPHILE = 0x2


class RgainOriginator(IntEnum):
    UNSPECIFIED = 0x0
    PRESET = 0x1
    USER = 0x2
    AUTOMATIC = 0x3


_ORIGINATOR_TEXT = {
    RgainOriginator.PRESET: "preset",
    RgainOriginator.USER: "user",
    RgainOriginator.AUTOMATIC: "automatic",
}


@dataclass
class ReplayGain:
    """A 16-bit Replay Gain record; *adjustment* is in units of 0.1 dB."""

    name: int = RgainName.NOT_SET
    originator: int = RgainOriginator.UNSPECIFIED
    adjustment: int = 0

    @classmethod
    def parse(cls, reader: BitReader) -> ReplayGain:
        """Read a Replay Gain field from *reader*."""
        name = reader.read(3)
        originator = reader.read(3)
        negative = reader.read(1)
        adjustment = reader.read(9)
        return cls(name, originator, -adjustment if negative else adjustment)

    def is_set(self) -> bool:
        return self.name != RgainName.NOT_SET

    def is_valid(self) -> bool:
        return (
            self.name in (RgainName.RADIO, RgainName.AUDIOPHILE)
            and self.originator != RgainOriginator.UNSPECIFIED
        )

    def db(self) -> float:
        """The adjustment in decibels."""
        return self.adjustment / 10.0

    def originator_description(self) -> str | None:
        """Describe the originator; None when it is unspecified."""
        if self.originator == RgainOriginator.UNSPECIFIED:
            return None
        return _ORIGINATOR_TEXT.get(self.originator, "other")