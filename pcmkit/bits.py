"""Most-significant-bit-first reader over a byte string."""

from __future__ import annotations


class BitReader:
    """Reads unsigned big-endian bit fields from bytes."""

    def __init__(self, data: bytes, bit_offset: int = 0) -> None:
        self._data = bytes(data)
        if not 0 <= bit_offset <= len(self._data) * 8:
            raise ValueError("bit offset outside the data")
        self._pos = bit_offset

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def position(self) -> int:
        """Current position in bits from the start of the data."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of bits left to read."""
        return len(self._data) * 8 - self._pos

    def read(self, nbits: int) -> int:
        """Read *nbits* bits and return them as an unsigned integer."""
        if nbits < 0:
            raise ValueError("cannot read a negative number of bits")
        if nbits > self.remaining:
            raise EOFError("not enough bits left")
        if nbits == 0:
            return 0
        end = self._pos + nbits
        first = self._pos // 8
        last = (end + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        value = (chunk >> (last * 8 - end)) & ((1 << nbits) - 1)
        self._pos = end
        return value

    def skip(self, nbits: int) -> None:
        """Advance by *nbits* bits."""
        if nbits < 0:
            raise ValueError("cannot skip a negative number of bits")
        if nbits > self.remaining:
            raise EOFError("not enough bits left")
        self._pos += nbits

    def next_byte(self) -> int:
        """Index of the first whole byte not yet started."""
        byte, bit = divmod(self._pos, 8)
        return byte if bit == 0 else byte + 1

    def copy(self) -> BitReader:
        """A reader over the same data at the same position."""
        return BitReader(self._data, self._pos)