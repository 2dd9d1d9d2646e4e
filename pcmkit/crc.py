"""Reflected CRC-16 (polynomial 0x8005) as used by the LAME info tag."""


def _make_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


def crc_compute(data: bytes, init: int = 0) -> int:
    """Compute the reflected CRC-16 of *data*, starting from *init*."""
    crc = init & 0xFFFF
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc