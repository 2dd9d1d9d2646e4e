import struct

import pytest

from pcmkit.crc import crc_compute
from pcmkit.fixed import F_ONE
from pcmkit.rgain import RgainName, RgainOriginator
from pcmkit.tag import LameTag, Tag, TagError, XingTag, parse_tag

FRAME_SIZE = 192
XING_SIZE = 16
LAME_SIZE = 36


def _rgain(name, originator, negative, adjustment):
    return (name << 13) | (originator << 10) | (int(negative) << 9) | adjustment


def _lame_body(version=b"3.90.", revision=0, radio=None):
    if radio is None:
        radio = _rgain(RgainName.RADIO, RgainOriginator.AUTOMATIC, True, 50)
    delays = ((576 << 12) | 72).to_bytes(3, "big")
    body = (
        b"LAME"
        + version
        + bytes([(revision << 4) | 3, 195])
        + struct.pack(">I", 0x00800000)
        + struct.pack(">HH", radio, 0)
        + bytes([0x00, 128])
        + delays
        + bytes([0x40, 0xFF])
        + struct.pack(">H", 0)
        + struct.pack(">I", 123456)
        + struct.pack(">H", 0xBEEF)
    )
    assert len(body) == LAME_SIZE - 2
    return body


def _finish(prefix_and_body, corrupt_crc=False):
    frame = bytearray(prefix_and_body + b"\0\0")
    assert len(frame) == FRAME_SIZE
    crc = crc_compute(bytes(frame[:190]))
    if corrupt_crc:
        crc ^= 1
    frame[190:192] = struct.pack(">H", crc)
    return bytes(frame)


def _xing_lame_frame(**kwargs):
    corrupt = kwargs.pop("corrupt_crc", False)
    offset = FRAME_SIZE - XING_SIZE - LAME_SIZE
    xing = b"Xing" + struct.pack(">III", XingTag.FRAMES | XingTag.BYTES, 1000, 400000)
    frame = _finish(bytes(offset) + xing + _lame_body(**kwargs), corrupt)
    return frame, offset * 8, (FRAME_SIZE - offset) * 8


def _parse(frame_info):
    frame, offset, bitlen = frame_info
    return parse_tag(frame, offset, bitlen)


def test_xing_and_lame():
    tag = _parse(_xing_lame_frame())
    assert tag.flags == Tag.XING | Tag.LAME | Tag.VBR
    assert tag.xing.frames == 1000
    assert tag.xing.total_bytes == 400000
    assert tag.encoder == "LAME3.90."
    lame = tag.lame
    assert lame.revision == 0
    assert lame.lowpass_filter == 19500
    assert lame.peak == F_ONE
    assert lame.bitrate == 128
    assert lame.start_delay == 576
    assert lame.end_padding == 72
    assert lame.gain == -1
    assert lame.music_length == 123456
    assert lame.music_crc == 0xBEEF
    assert lame.flags & LameTag.UNWISE == 0
    assert lame.replay_gain[0].adjustment == -50
    assert not lame.replay_gain[1].is_set()


def test_newer_lame_versions_shift_reference():
    old = _parse(_xing_lame_frame(version=b"3.90."))
    new = _parse(_xing_lame_frame(version=b"3.97 "))
    dotted = _parse(_xing_lame_frame(version=b"3.95."))
    release = _parse(_xing_lame_frame(version=b"3.95r"))
    base = old.lame.replay_gain[0].adjustment
    assert new.lame.replay_gain[0].adjustment == base - 60
    assert dotted.lame.replay_gain[0].adjustment == base - 60
    assert release.lame.replay_gain[0].adjustment == base
    assert not new.lame.replay_gain[1].is_set()


def test_bad_crc_drops_lame():
    tag = _parse(_xing_lame_frame(corrupt_crc=True))
    assert tag.lame is None
    assert tag.flags == Tag.XING | Tag.VBR
    assert tag.encoder == "LAME3.90."


def test_revision_fifteen_rejected():
    tag = _parse(_xing_lame_frame(revision=15))
    assert tag.lame is None
    assert tag.flags & Tag.LAME == 0


def test_lame_magic_without_xing():
    offset = FRAME_SIZE - LAME_SIZE
    frame = _finish(bytes(offset) + _lame_body())
    tag = parse_tag(frame, offset * 8, LAME_SIZE * 8)
    assert tag.flags == Tag.LAME
    assert tag.xing is None
    assert tag.encoder == "LAME3.90."


def test_info_tag_is_not_vbr():
    data = bytes(8) + b"Info" + struct.pack(">II", XingTag.FRAMES, 42)
    tag = parse_tag(data, 8 * 8, 12 * 8)
    assert tag.flags == Tag.XING
    assert tag.xing.frames == 42


def test_misplaced_xing_tag():
    data = bytes(10) + b"Xing" + struct.pack(">II", XingTag.FRAMES, 777)
    tag = parse_tag(data, 12 * 8, (len(data) - 12) * 8)
    assert tag.flags == Tag.XING | Tag.VBR
    assert tag.xing.frames == 777


def test_truncated_toc_fails_xing():
    data = b"Xing" + struct.pack(">I", XingTag.TOC) + bytes(50)
    tag = parse_tag(data, 0, len(data) * 8)
    assert tag.xing is None
    assert tag.flags == Tag.VBR


def test_encoder_stops_at_padding():
    data = b"Xing" + struct.pack(">I", 0) + b"GOGO" + b"\x55" * 16
    tag = parse_tag(data, 0, len(data) * 8)
    assert tag.encoder == "GOGO"


def test_unknown_magic_raises():
    with pytest.raises(TagError):
        parse_tag(b"ABCDEFGH", 0, 64)


def test_short_data_raises():
    with pytest.raises(TagError):
        parse_tag(b"Xing", 0, 16)


def test_out_of_bounds_raises():
    with pytest.raises(ValueError):
        parse_tag(b"Xing", 8, 32)