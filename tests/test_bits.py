import pytest

from pcmkit.bits import BitReader


def test_read_nibbles():
    reader = BitReader(b"\xa5")
    assert reader.read(4) == 0xA
    assert reader.read(4) == 0x5
    assert reader.remaining == 0


def test_read_across_bytes():
    reader = BitReader(b"\x12\x34\x56")
    assert reader.read(4) == 0x1
    assert reader.read(16) == 0x2345
    assert reader.read(4) == 0x6


def test_bit_offset_start():
    reader = BitReader(b"\x0f\xf0", 4)
    assert reader.read(8) == 0xFF
    assert reader.position == 12


def test_read_zero_bits():
    reader = BitReader(b"\xff")
    assert reader.read(0) == 0
    assert reader.position == 0


def test_read_past_end_raises():
    reader = BitReader(b"\x00")
    reader.read(5)
    with pytest.raises(EOFError):
        reader.read(4)


def test_skip_and_next_byte():
    reader = BitReader(b"\x00\x00\x00")
    assert reader.next_byte() == 0
    reader.skip(3)
    assert reader.next_byte() == 1
    reader.skip(5)
    assert reader.next_byte() == 1
    with pytest.raises(EOFError):
        reader.skip(17)


def test_copy_is_independent():
    reader = BitReader(b"\xab\xcd")
    reader.read(4)
    twin = reader.copy()
    assert twin.read(8) == 0xBC
    assert reader.position == 4
    assert reader.read(8) == 0xBC


def test_bad_offset_raises():
    with pytest.raises(ValueError):
        BitReader(b"\x00", 9)