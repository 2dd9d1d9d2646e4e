"""Helpers for 32-bit fixed-point samples with 28 fractional bits."""

FRACBITS = 28
F_ONE = 1 << FRACBITS
F_MIN = -(1 << 31)
F_MAX = (1 << 31) - 1

_FRACMASK = F_ONE - 1


def f_mul(x: int, y: int) -> int:
    """Multiply two fixed-point values, flooring the result."""
    return (x * y) >> FRACBITS


def f_div(x: int, y: int) -> int:
    """Divide two integers or fixed-point values, giving a rounded fixed-point quotient.

    Returns 0 when the quotient does not fit the fixed-point range.
    """
    if y == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    quotient, remainder = divmod(abs(x) << FRACBITS, abs(y))
    if 2 * remainder >= abs(y):
        quotient += 1
    if (x < 0) != (y < 0):
        quotient = -quotient
    if not F_MIN <= quotient <= F_MAX:
        return 0
    return quotient


def f_intpart(x: int) -> int:
    """Integer part of a fixed-point value (rounded towards minus infinity)."""
    return x >> FRACBITS


def f_fracpart(x: int) -> int:
    """Fractional bits of a fixed-point value."""
    return x & _FRACMASK


def f_fromint(x: int) -> int:
    """Convert an integer to fixed point."""
    return x << FRACBITS


def f_tofixed(x: float) -> int:
    """Convert a float to fixed point."""
    return int(x * F_ONE + 0.5)