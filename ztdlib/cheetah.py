"""The Cheetah elliptic curve over the sextic extension of the base field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .base58 import b58decode, b58encode
from .belt import PRIME, Belt, bneg
from .bpoly import bpegcd, bpscal
from .noun import Cell, Noun, decode_bool, decode_tuple, encode_bool, encode_tuple

G_ORDER = int("7af2599b3b3f22d0563fbf0f990a37b5327aa72330157722d443623eaed4accf", 16)

_DEGREE = 6
_ENCODED_LEN = 1 + 2 * _DEGREE * 8

BeltLike = Union[Belt, int]


class CheetahError(ValueError):
    """Raised for malformed points, points off the curve and division by zero."""


def _to_belts(values: Iterable[BeltLike]) -> tuple[Belt, ...]:
    return tuple(v if isinstance(v, Belt) else Belt(v) for v in values)


@dataclass(frozen=True, order=True)
class F6lt:
    """An element of the field extension, six coefficients lowest first."""

    coeffs: tuple[Belt, ...]

    def __post_init__(self) -> None:
        coeffs = _to_belts(self.coeffs)
        if len(coeffs) != _DEGREE:
            raise ValueError(f"F6lt needs {_DEGREE} coefficients, got {len(coeffs)}")
        object.__setattr__(self, "coeffs", coeffs)


F6_ZERO = F6lt((0,) * _DEGREE)
F6_ONE = F6lt((1, 0, 0, 0, 0, 0))
_SEVEN = Belt(7)
_MODULUS = _to_belts((bneg(7), 0, 0, 0, 0, 0, 1))


def _karat3(a: Sequence[Belt], b: Sequence[Belt]) -> tuple[Belt, ...]:
    m0, m1, m2 = a[0] * b[0], a[1] * b[1], a[2] * b[2]
    return (
        m0,
        (a[0] + a[1]) * (b[0] + b[1]) - (m0 + m1),
        (a[0] + a[2]) * (b[0] + b[2]) - (m0 + m2) + m1,
        (a[1] + a[2]) * (b[1] + b[2]) - (m1 + m2),
        m2,
    )


def f6_mul(f: F6lt, g: F6lt) -> F6lt:
    """Product modulo ``x**6 - 7``."""
    fc, gc = f.coeffs, g.coeffs
    f0g0 = _karat3(fc[:3], gc[:3])
    f1g1 = _karat3(fc[3:], gc[3:])
    foil = _karat3(
        [x + y for x, y in zip(fc[:3], fc[3:])],
        [x + y for x, y in zip(gc[:3], gc[3:])],
    )
    cross = [fo - (lo + hi) for fo, lo, hi in zip(foil, f0g0, f1g1)]
    return F6lt((
        f0g0[0] + _SEVEN * (cross[3] + f1g1[0]),
        f0g0[1] + _SEVEN * (cross[4] + f1g1[1]),
        f0g0[2] + _SEVEN * f1g1[2],
        f0g0[3] + cross[0] + _SEVEN * f1g1[3],
        f0g0[4] + cross[1] + _SEVEN * f1g1[4],
        cross[2],
    ))


def f6_inv(f: F6lt) -> F6lt:
    """Multiplicative inverse; raises CheetahError for zero."""
    if f == F6_ZERO:
        raise CheetahError("division by zero")
    d, u, _ = bpegcd(f.coeffs, _MODULUS)
    u = (list(u) + [Belt(0)] * (_DEGREE + 1))[:_DEGREE]
    return F6lt(bpscal(d[0].inv(), u))


def f6_div(f1: F6lt, f2: F6lt) -> F6lt:
    """Quotient ``f1 / f2``."""
    return f6_mul(f1, f6_inv(f2))


def _f6_add(f1: F6lt, f2: F6lt) -> F6lt:
    return F6lt(tuple(a + b for a, b in zip(f1.coeffs, f2.coeffs)))


def _f6_neg(f: F6lt) -> F6lt:
    return F6lt(tuple(-a for a in f.coeffs))


def _f6_sub(f1: F6lt, f2: F6lt) -> F6lt:
    return _f6_add(f1, _f6_neg(f2))


def _f6_scal(s: Belt, f: F6lt) -> F6lt:
    return F6lt(tuple(a * s for a in f.coeffs))


def _f6_square(f: F6lt) -> F6lt:
    return f6_mul(f, f)


def _decode_belts(noun: Noun, count: int) -> tuple[Belt, ...]:
    items = []
    for i in range(count):
        if isinstance(noun, Cell):
            item, noun = noun.head, noun.tail
        elif i == count - 1:
            item = noun
        else:
            raise ValueError("noun has too few elements")
        if isinstance(item, Cell) or not 0 <= item < PRIME:
            raise ValueError(f"not a field element: {item!r}")
        items.append(Belt(item))
    return tuple(items)


@dataclass(frozen=True, order=True)
class CheetahPoint:
    """An affine curve point; ``inf`` marks the point at infinity."""

    x: F6lt
    y: F6lt
    inf: bool = False

    def to_base58(self) -> str:
        """``0x01`` then y and x coefficients, highest first, as big-endian words."""
        if self.inf:
            raise CheetahError("point at infinity has no base58 form")
        data = bytearray([0x01])
        for belt in (*reversed(self.y.coeffs), *reversed(self.x.coeffs)):
            data += belt.value.to_bytes(8, "big")
        return b58encode(bytes(data))

    @classmethod
    def from_base58(cls, text: str) -> CheetahPoint:
        """Parse the form written by :meth:`to_base58` and check the point is on the curve."""
        try:
            data = b58decode(text)
        except ValueError as exc:
            raise CheetahError(f"invalid base58: {exc}") from exc
        if len(data) != _ENCODED_LEN:
            raise CheetahError(f"invalid length: {len(data)}")
        words = [
            Belt(int.from_bytes(data[start:start + 8], "big"))
            for start in range(1, len(data), 8)
        ]
        words.reverse()
        point = cls(F6lt(words[:_DEGREE]), F6lt(words[_DEGREE:]), False)
        if not point.in_curve():
            raise CheetahError("point is not on the curve")
        return point

    def in_curve(self) -> bool:
        """True when the point lies in the group of order ``G_ORDER``."""
        if self == A_ID:
            return True
        return ch_scal(G_ORDER, self) == A_ID

    @classmethod
    def identity(cls) -> CheetahPoint:
        return A_ID

    def to_noun(self) -> Noun:
        return encode_tuple(
            encode_tuple(*(b.value for b in self.x.coeffs)),
            encode_tuple(*(b.value for b in self.y.coeffs)),
            encode_bool(self.inf),
        )

    @classmethod
    def from_noun(cls, noun: Noun) -> CheetahPoint:
        x_noun, y_noun, inf_noun = decode_tuple(noun, 3)
        return cls(
            F6lt(_decode_belts(x_noun, _DEGREE)),
            F6lt(_decode_belts(y_noun, _DEGREE)),
            decode_bool(inf_noun),
        )


A_ID = CheetahPoint(F6_ZERO, F6_ONE, True)

A_GEN = CheetahPoint(
    F6lt((
        2754611494552410273,
        8599518745794843693,
        10526511002404673680,
        4830863958577994148,
        375185138577093320,
        12938930721685970739,
    )),
    F6lt((
        15384029202802550068,
        2774812795997841935,
        14375303400746062753,
        10708493419890101954,
        13187678623570541764,
        9990732138772505951,
    )),
    False,
)


def _ch_double_unsafe(x: F6lt, y: F6lt) -> CheetahPoint:
    slope = f6_div(
        _f6_add(_f6_scal(Belt(3), _f6_square(x)), F6_ONE),
        _f6_scal(Belt(2), y),
    )
    x_out = _f6_sub(_f6_square(slope), _f6_scal(Belt(2), x))
    y_out = _f6_sub(f6_mul(slope, _f6_sub(x, x_out)), y)
    return CheetahPoint(x_out, y_out, False)


def _ch_add_unsafe(p: CheetahPoint, q: CheetahPoint) -> CheetahPoint:
    slope = f6_div(_f6_sub(p.y, q.y), _f6_sub(p.x, q.x))
    x_out = _f6_sub(_f6_square(slope), _f6_add(p.x, q.x))
    y_out = _f6_sub(f6_mul(slope, _f6_sub(p.x, x_out)), p.y)
    return CheetahPoint(x_out, y_out, False)


def ch_double(p: CheetahPoint) -> CheetahPoint:
    """Point doubling."""
    if p.inf or p.y == F6_ZERO:
        return A_ID
    return _ch_double_unsafe(p.x, p.y)


def ch_neg(p: CheetahPoint) -> CheetahPoint:
    """Point negation."""
    return CheetahPoint(p.x, _f6_neg(p.y), p.inf)


def ch_add(p: CheetahPoint, q: CheetahPoint) -> CheetahPoint:
    """Point addition."""
    if p.inf:
        return q
    if q.inf:
        return p
    if p == ch_neg(q):
        return A_ID
    if p == q:
        return ch_double(p)
    return _ch_add_unsafe(p, q)


def ch_scal(n: int, p: CheetahPoint) -> CheetahPoint:
    """Scalar multiplication by a non-negative integer of any size."""
    if n < 0:
        raise ValueError("scalar must be non-negative")
    acc = A_ID
    while n > 0:
        if n & 1:
            acc = ch_add(acc, p)
        p = ch_double(p)
        n >>= 1
    return acc


def trunc_g_order(values: Sequence[int]) -> int:
    """Combine four words as base-PRIME digits and reduce modulo ``G_ORDER``."""
    if len(values) < 4:
        raise ValueError("need at least four words")
    total = sum(int(v) * PRIME**i for i, v in enumerate(values[:4]))
    return total % G_ORDER