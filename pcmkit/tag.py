"""Parsing of Xing/Info VBR tags and LAME info tags in a first MPEG frame."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar

from .bits import BitReader
from .crc import crc_compute
from .rgain import ReplayGain

_XING_MAGIC = int.from_bytes(b"Xing", "big")
_INFO_MAGIC = int.from_bytes(b"Info", "big")
_LAME_MAGIC = int.from_bytes(b"LAME", "big")

_LAME_BITS = 36 * 8
_VERSION_RE = re.compile(rb"\s*\+?(\d+)(?:\.\s*\+?(\d+)(?:\.\s*\+?(\d+))?)?")


class TagError(ValueError):
    """No Xing, Info or LAME tag could be found."""


@dataclass
class XingTag:
    """Contents of a Xing or Info VBR header."""

    FRAMES: ClassVar[int] = 0x01
    BYTES: ClassVar[int] = 0x02
    TOC: ClassVar[int] = 0x04
    SCALE: ClassVar[int] = 0x08

    flags: int = 0
    frames: int = 0
    total_bytes: int = 0
    toc: tuple[int, ...] = ()
    scale: int = 0


@dataclass
class LameTag:
    """Contents of a LAME info tag."""

    NSPSYTUNE: ClassVar[int] = 0x01
    NSSAFEJOINT: ClassVar[int] = 0x02
    NOGAP_NEXT: ClassVar[int] = 0x04
    NOGAP_PREV: ClassVar[int] = 0x08
    UNWISE: ClassVar[int] = 0x10

    revision: int = 0
    flags: int = 0
    vbr_method: int = 0
    lowpass_filter: int = 0
    peak: int = 0
    replay_gain: tuple[ReplayGain, ReplayGain] = field(
        default_factory=lambda: (ReplayGain(), ReplayGain())
    )
    ath_type: int = 0
    bitrate: int = 0
    start_delay: int = 0
    end_padding: int = 0
    source_samplerate: int = 0
    stereo_mode: int = 0
    noise_shaping: int = 0
    gain: int = 0
    surround: int = 0
    preset: int = 0
    music_length: int = 0
    music_crc: int = 0


@dataclass
class Tag:
    """Result of tag parsing: flags plus whatever tags were found."""

    XING: ClassVar[int] = 0x0001
    LAME: ClassVar[int] = 0x0002
    VBR: ClassVar[int] = 0x0100

    flags: int = 0
    xing: XingTag | None = None
    lame: LameTag | None = None
    encoder: str = ""


def _signed(value: int, bits: int) -> int:
    sign = 1 << (bits - 1)
    value &= (1 << bits) - 1
    return value - (sign << 1) if value & sign else value


def _parse_xing(reader: BitReader, bitlen: int) -> tuple[XingTag | None, int]:
    if bitlen < 32:
        return None, bitlen
    xing = XingTag(flags=reader.read(32))
    bitlen -= 32

    if xing.flags & XingTag.FRAMES:
        if bitlen < 32:
            return None, bitlen
        xing.frames = reader.read(32)
        bitlen -= 32

    if xing.flags & XingTag.BYTES:
        if bitlen < 32:
            return None, bitlen
        xing.total_bytes = reader.read(32)
        bitlen -= 32

    if xing.flags & XingTag.TOC:
        if bitlen < 800:
            return None, bitlen
        xing.toc = tuple(reader.read(8) for _ in range(100))
        bitlen -= 800

    if xing.flags & XingTag.SCALE:
        if bitlen < 32:
            return None, bitlen
        xing.scale = reader.read(32)
        bitlen -= 32

    return xing, bitlen


def _needs_reference_fix(version: bytes) -> bool:
    """Whether this LAME version writes Replay Gain against 89 dB SPL."""
    text = version.split(b"\0", 1)[0]
    major = minor = 0
    match = _VERSION_RE.match(text)
    if match:
        major = int(match.group(1))
        minor = int(match.group(2) or 0)
    fifth = version[4] if len(version) > 4 else 0
    return major > 3 or (
        major == 3 and (minor > 95 or (minor == 95 and fifth == ord(".")))
    )


def _parse_lame(reader: BitReader, bitlen: int, crc: int) -> LameTag | None:
    if bitlen < _LAME_BITS:
        return None
    frame = reader.data
    magic = reader.read(32)
    start = reader.next_byte()
    version = frame[start:start + 5]
    reader.skip(5 * 8)

    lame = LameTag()
    lame.revision = reader.read(4)
    if lame.revision == 15:
        return None
    lame.vbr_method = reader.read(4)
    lame.lowpass_filter = reader.read(8) * 100
    lame.peak = _signed(reader.read(32) << 5, 32)

    radio = ReplayGain.parse(reader)
    audiophile = ReplayGain.parse(reader)
    if magic == _LAME_MAGIC and _needs_reference_fix(version):
        for gain in (radio, audiophile):
            if gain.is_set():
                gain.adjustment -= 60
    lame.replay_gain = (radio, audiophile)

    lame.flags = reader.read(4)
    lame.ath_type = reader.read(4)
    lame.bitrate = reader.read(8)
    lame.start_delay = reader.read(12)
    lame.end_padding = reader.read(12)
    lame.source_samplerate = reader.read(2)
    if reader.read(1):
        lame.flags |= LameTag.UNWISE
    lame.stereo_mode = reader.read(3)
    lame.noise_shaping = reader.read(2)
    lame.gain = _signed(reader.read(8), 8)
    reader.skip(2)
    lame.surround = reader.read(3)
    lame.preset = reader.read(11)
    lame.music_length = reader.read(32)
    lame.music_crc = reader.read(16)

    if reader.read(16) != crc:
        return None
    return lame


def _read_encoder(reader: BitReader) -> str:
    chars = []
    for _ in range(20):
        code = reader.read(8)
        if code == 0 or code < 0x20 or code >= 0x7F:
            break
        chars.append(chr(code))
    return "".join(chars)


def parse_tag(frame: bytes, anc_bit_offset: int, anc_bitlen: int) -> Tag:
    """Parse Xing/Info/LAME tags from the ancillary data of a first frame.

    *frame* holds the whole frame; the ancillary data begins *anc_bit_offset*
    bits into it and is *anc_bitlen* bits long.
    """
    frame = bytes(frame)
    if anc_bit_offset < 0 or anc_bitlen < 0 or anc_bit_offset + anc_bitlen > len(frame) * 8:
        raise ValueError("ancillary data lies outside the frame")

    start = BitReader(frame, anc_bit_offset)
    reader = start.copy()
    bitlen = anc_bitlen
    tag = Tag()

    if bitlen < 32:
        raise TagError("ancillary data too short for a tag")
    magic = reader.read(32)
    bitlen -= 32

    if magic not in (_XING_MAGIC, _INFO_MAGIC, _LAME_MAGIC):
        # A Xing tag may sit two octets early in CRC-protected streams.
        if magic not in ((_XING_MAGIC << 16) & 0xFFFFFFFF, (_INFO_MAGIC << 16) & 0xFFFFFFFF):
            raise TagError("no Xing, Info or LAME tag")
        magic >>= 16
        reader = start.copy()
        reader.skip(16)
        bitlen += 16

    if (magic & 0xFFFF) == (_XING_MAGIC & 0xFFFF):
        tag.flags |= Tag.VBR

    if magic == _LAME_MAGIC:
        reader = start.copy()
        bitlen += 32
    else:
        xing, bitlen = _parse_xing(reader, bitlen)
        if xing is not None:
            tag.xing = xing
            tag.flags |= Tag.XING

    if bitlen >= 20 * 8:
        tag.encoder = _read_encoder(reader.copy())

    lame = None
    if len(frame) >= 192:
        lame = _parse_lame(reader.copy(), bitlen, crc_compute(frame[:190], 0))
    if lame is not None:
        tag.lame = lame
        tag.flags |= Tag.LAME
        tag.encoder = tag.encoder[:9]
    else:
        tag.encoder = tag.encoder.split("U", 1)[0]

    return tag