"""Parsing of time specifications such as "1:30", "2.5", "1/4" or "1:00-0:05"."""

from __future__ import annotations

import re
from fractions import Fraction

_SPACE = " \t\n\v\f\r"
_DIGITS = frozenset("0123456789")
_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class TimeSpecError(ValueError):
    """A time specification could not be parsed or is out of range."""


def _at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


def _strtol(text: str, pos: int) -> tuple[int, int]:
    """Read a decimal integer as C's strtol does: (value, position after it)."""
    match = _INTEGER.match(text, pos)
    if match is None:
        return 0, pos
    return int(match.group(1)), match.end()


def _invalid(text: str) -> TimeSpecError:
    return TimeSpecError(f'invalid time specification "{text}"')


def parse_time(text: str) -> Fraction:
    """Parse a time specification and return it in seconds.

    Terms are [-|+]H:M:S[.frac] or [-|+]N/D, joined by "-" or "+".
    """
    pos = 0
    while _at(text, pos) and _at(text, pos) in _SPACE:
        pos += 1

    total = Fraction(0)
    minus = False
    while True:
        fraction = fracpart = 0
        seconds = 0

        sign = _at(text, pos)
        if sign == "-":
            pos += 1
            minus = True
        elif sign == "+":
            # A "+" keeps the sign of the previous term.
            pos += 1
        else:
            minus = False

        while True:
            value, pos = _strtol(text, pos)
            if value < 0:
                raise _invalid(text)
            seconds += value
            if _at(text, pos) == ":":
                seconds *= 60
                pos += 1
            if _at(text, pos) not in _DIGITS or not _at(text, pos):
                break

        marker = _at(text, pos)
        if marker == ".":
            pos += 1
            value, end = _strtol(text, pos)
            if value < 0:
                raise _invalid(text)
            fraction = value
            fracpart = 10 ** (end - pos)
            pos = end
        elif marker == "/":
            pos += 1
            value, pos = _strtol(text, pos)
            if value < 0:
                raise _invalid(text)
            fraction = seconds
            fracpart = value
            seconds = 0

        term = Fraction(seconds)
        if fracpart > 0:
            term += Fraction(fraction, fracpart)
        total += -term if minus else term

        if not _at(text, pos) or _at(text, pos) not in "-+":
            break

    while _at(text, pos) and _at(text, pos) in _SPACE:
        pos += 1
    if pos != len(text):
        raise _invalid(text)
    return total


def get_time(text: str, positive: bool, name: str) -> Fraction:
    """Parse *text* as the time called *name*, optionally requiring it to be positive."""
    try:
        value = parse_time(text)
    except TimeSpecError:
        raise TimeSpecError(f'invalid {name} specification "{text}"') from None
    if positive and value <= 0:
        raise TimeSpecError(f"{name} must be positive")
    return value