"""Arithmetic in the 64-bit prime field used by hashing and curve code."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterable

PRIME = 18446744069414584321
R2 = 18446744065119617025
_RP = 340282366841710300967557013911933812736
_U64 = (1 << 64) - 1
_U32 = (1 << 32) - 1

ROOTS = (
    0x0000000000000001,
    0xFFFFFFFF00000000,
    0x0001000000000000,
    0xFFFFFFFEFF000001,
    0xEFFFFFFF00000001,
    0x00003FFFFFFFC000,
    0x0000008000000000,
    0xF80007FF08000001,
    0xBF79143CE60CA966,
    0x1905D02A5C411F4E,
    0x9D8F2AD78BFED972,
    0x0653B4801DA1C8CF,
    0xF2C35199959DFCB6,
    0x1544EF2335D17997,
    0xE0EE099310BBA1E2,
    0xF6B2CFFE2306BAAC,
    0x54DF9630BF79450E,
    0xABD0A6E8AA3D8A0E,
    0x81281A7B05F9BEAC,
    0xFBD41C6B8CAA3302,
    0x30BA2ECD5E93E76D,
    0xF502AEF532322654,
    0x4B2A18ADE67246B5,
    0xEA9D5A1336FBC98B,
    0x86CDCC31C307E171,
    0x4BBAF5976ECFEFD8,
    0xED41D05B78D6E286,
    0x10D78DD8915A171D,
    0x59049500004A4485,
    0xDFA8C93BA46D2666,
    0x7E9BD009B86A0845,
    0x400A7F755588E659,
    0x185629DCDA58878C,
)


class FieldError(ValueError):
    """Raised when a field element has no ordered root of unity."""


def based_check(a: int) -> bool:
    """Return True when ``a`` is a canonical field element."""
    return 0 <= a < PRIME


def mont_reduction(a: int) -> int:
    """Montgomery-reduce a 128-bit value."""
    if not 0 <= a < _RP:
        raise ValueError("element must be inside the field")
    x1 = (a >> 32) & _U32
    x2 = a >> 64
    c = ((a & _U32) + x1) << 32
    f = c >> 64
    d = c - (x1 + f * PRIME)
    if x2 >= d:
        return (x2 - d) & _U64
    return (x2 + PRIME - d) & _U64


def montiply(a: int, b: int) -> int:
    """Multiply two elements in Montgomery form."""
    return mont_reduction(a * b)


def montify(a: int) -> int:
    """Bring an element into Montgomery form."""
    return mont_reduction(a * R2)


def montwopow(a: int, b: int) -> int:
    """Square a Montgomery-form element ``b`` times."""
    res = a
    for _ in range(b):
        res = montiply(res, res)
    return res


def badd(a: int, b: int) -> int:
    """Field addition."""
    nb = (PRIME - b) & _U64
    r = (a - nb) & _U64
    if a < nb:
        r = (r - _U32) & _U64
    return r


def bneg(a: int) -> int:
    """Field negation."""
    return PRIME - a if a != 0 else 0


def bsub(a: int, b: int) -> int:
    """Field subtraction."""
    r = (a - b) & _U64
    if a < b:
        r = (r - _U32) & _U64
    return r


def _reduce_159(low: int, mid: int, high: int) -> int:
    low2 = (low - high) & _U64
    if low < high:
        low2 = (low2 + PRIME) & _U64

    product = (mid << 32) & _U64
    product -= product >> 32

    total = product + low2
    result = total & _U64
    if total > _U64:
        result = (result - PRIME) & _U64
    if result >= PRIME:
        result -= PRIME
    return result


def reduce(n: int) -> int:
    """Reduce a 128-bit value modulo the field prime."""
    return _reduce_159(n & _U64, (n >> 64) & _U32, (n >> 96) & _U64)


def bmul(a: int, b: int) -> int:
    """Field multiplication."""
    return reduce(a * b)


def binv(a: int) -> int:
    """Field inverse via an addition chain for ``a ** (PRIME - 2)``."""
    y = montify(a)
    y2 = montiply(y, montiply(y, y))
    y3 = montiply(y, montiply(y2, y2))
    y5 = montiply(y2, montwopow(y3, 2))
    y10 = montiply(y5, montwopow(y5, 5))
    y20 = montiply(y10, montwopow(y10, 10))
    y30 = montiply(y10, montwopow(y20, 10))
    y31 = montiply(y, montiply(y30, y30))
    dup = montiply(montwopow(y31, 32), y31)
    return mont_reduction(montiply(y, montiply(dup, dup)))


def bpow(a: int, b: int) -> int:
    """Raise a field element to a non-negative integer power."""
    if b < 0:
        raise ValueError("exponent must be non-negative")
    c = 1
    if b == 0:
        return c
    while b > 1:
        if b & 1 == 0:
            a = reduce(a * a)
            b //= 2
        else:
            c = reduce(c * a)
            a = reduce(a * a)
            b = (b - 1) // 2
    return reduce(c * a)


@functools.total_ordering
@dataclass(frozen=True, eq=False, slots=True)
class Belt:
    """A base field element stored as a 64-bit integer."""

    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= _U64:
            raise ValueError(f"belt value out of u64 range: {self.value!r}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Belt):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Belt):
            return self.value < other.value
        return NotImplemented

    def __int__(self) -> int:
        return self.value

    def __add__(self, other: Belt) -> Belt:
        return Belt(badd(self.value, other.value))

    def __sub__(self, other: Belt) -> Belt:
        return Belt(bsub(self.value, other.value))

    def __neg__(self) -> Belt:
        return Belt(bneg(self.value))

    def __mul__(self, other: Belt) -> Belt:
        return Belt(bmul(self.value, other.value))

    def __truediv__(self, other: Belt) -> Belt:
        return self * other.inv()

    def __pow__(self, exponent: int) -> Belt:
        return Belt(bpow(self.value, exponent))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1

    def inv(self) -> Belt:
        """Multiplicative inverse."""
        return Belt(binv(self.value))

    def ordered_root(self) -> Belt:
        """Primitive root of unity whose order is this element, a power of two."""
        if self.value == 0:
            raise FieldError("zero has no ordered root")
        log = self.value.bit_length() - 1
        if log >= len(ROOTS) or self.value != 1 << log:
            raise FieldError(f"no ordered root for {self.value}")
        return Belt(ROOTS[log])

    @staticmethod
    def from_bytes(data: bytes) -> list[Belt]:
        """Split bytes into little-endian 32-bit belts, zero-padding the last chunk."""
        data = bytes(data)
        return [
            Belt(int.from_bytes(data[start:start + 4], "little"))
            for start in range(0, len(data), 4)
        ]

    @staticmethod
    def to_bytes(belts: Iterable[Belt]) -> bytes:
        """Join belts as little-endian 32-bit words."""
        out = bytearray()
        for belt in belts:
            if belt.value > _U32:
                raise ValueError("belt too big for u32")
            out += belt.value.to_bytes(4, "little")
        return bytes(out)