"""Polynomials over the base field, stored as coefficient lists, lowest first."""

from __future__ import annotations

from itertools import zip_longest
from typing import Sequence

from .belt import Belt

_ZERO = Belt(0)
_ONE = Belt(1)


def degree(poly: Sequence[Belt]) -> int:
    """Index of the highest non-zero coefficient, or 0 when there is none."""
    return next(
        (i for i in reversed(range(len(poly))) if not poly[i].is_zero()), 0
    )


def is_zero_poly(poly: Sequence[Belt]) -> bool:
    """True for the empty polynomial or one with only zero coefficients."""
    return all(coeff.is_zero() for coeff in poly)


def bpsub(a: Sequence[Belt], b: Sequence[Belt]) -> list[Belt]:
    """Coefficient-wise difference ``a - b``."""
    return [x - y for x, y in zip_longest(a, b, fillvalue=_ZERO)]


def bpmul(a: Sequence[Belt], b: Sequence[Belt]) -> list[Belt]:
    """Product of two polynomials, of length ``len(a) + len(b) - 1``."""
    res = [_ZERO] * max(len(a) + len(b) - 1, 0)
    if is_zero_poly(a) or is_zero_poly(b):
        return res
    for i, x in enumerate(a):
        if x.is_zero():
            continue
        for j, y in enumerate(b):
            res[i + j] = res[i + j] + x * y
    return res


def bpscal(scalar: Belt, b: Sequence[Belt]) -> list[Belt]:
    """Multiply every coefficient by ``scalar``."""
    return [scalar * coeff for coeff in b]


def bpdvr(a: Sequence[Belt], b: Sequence[Belt]) -> tuple[list[Belt], list[Belt]]:
    """Divide ``a`` by ``b``, returning ``(quotient, remainder)``."""
    deg_a = degree(a)
    deg_b = degree(b)
    quotient = [_ZERO] * (max(deg_a - deg_b, 0) + 1)
    remainder = [_ZERO] * (deg_b + 1)

    if is_zero_poly(a):
        return quotient, remainder
    if is_zero_poly(b):
        raise ZeroDivisionError("polynomial division by zero")

    r = list(a[: deg_a + 1])
    lead = b[deg_b]
    i = deg_a
    deg_r = deg_a
    q_index = max(deg_a - deg_b, 0)

    while deg_r >= deg_b:
        coeff = r[i] / lead
        quotient[q_index] = coeff
        for k in range(deg_b + 1):
            if k <= deg_a and k < len(b) and k <= i:
                r[i - k] = r[i - k] - coeff * b[deg_b - k]
        deg_r = max(deg_r - 1, 0)
        q_index = max(q_index - 1, 0)
        if deg_r == 0 and r[0].is_zero():
            break
        i -= 1

    remainder[: deg_r + 1] = r[: deg_r + 1]
    return quotient, remainder


def bpegcd(
    a: Sequence[Belt], b: Sequence[Belt]
) -> tuple[list[Belt], list[Belt], list[Belt]]:
    """Extended Euclid: return ``(d, u, v)`` with ``u*a + v*b == d``."""
    m1_u, m2_u = [_ZERO], [_ONE]
    m1_v, m2_v = [_ONE], [_ZERO]
    a = list(a)
    b = list(b)

    while not is_zero_poly(b):
        q, r = bpdvr(a, b)
        a, b = b, r
        m2_u, m1_u = m1_u, bpsub(m2_u, bpmul(q, m1_u))
        m2_v, m1_v = m1_v, bpsub(m2_v, bpmul(q, m1_v))

    return a, m2_u, m2_v