import random

import pytest

from ztdlib.belt import (
    PRIME,
    ROOTS,
    Belt,
    FieldError,
    badd,
    based_check,
    binv,
    bmul,
    bneg,
    bpow,
    bsub,
    mont_reduction,
    montify,
    montiply,
    montwopow,
    reduce,
)

SAMPLES = [0, 1, 2, 7, 2**32 - 1, 2**32, 2**63, PRIME - 2, PRIME - 1,
           12345678901234567890 % PRIME]


def _random_elements(count, seed):
    rng = random.Random(seed)
    return [rng.randrange(PRIME) for _ in range(count)]


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("b", SAMPLES)
def test_add_sub_mul_match_modular_arithmetic(a, b):
    assert badd(a, b) == (a + b) % PRIME
    assert bsub(a, b) == (a - b) % PRIME
    assert bmul(a, b) == (a * b) % PRIME


def test_reduce_agrees_with_modulo_on_wide_values():
    rng = random.Random(5)
    for _ in range(200):
        n = rng.getrandbits(128)
        assert reduce(n) == n % PRIME


@pytest.mark.parametrize("a", SAMPLES)
def test_negation_is_additive_inverse(a):
    assert badd(a, bneg(a)) == 0
    assert bneg(bneg(a)) == a


@pytest.mark.parametrize("a", [x for x in SAMPLES if x != 0])
def test_inverse_multiplies_to_one(a):
    assert bmul(a, binv(a)) == 1
    assert (Belt(a) * Belt(a).inv()).is_one()


def test_fermat_little_theorem():
    for a in _random_elements(10, 1):
        if a:
            assert bpow(a, PRIME - 1) == 1


def test_pow_zero_exponent_is_one():
    assert Belt(3) ** 0 == Belt(1)
    assert bpow(0, 0) == 1


def test_pow_matches_repeated_multiplication():
    for a in _random_elements(5, 2):
        acc = Belt(1)
        for exponent in range(10):
            assert Belt(a) ** exponent == acc
            acc = acc * Belt(a)


def test_montgomery_round_trip():
    for a in _random_elements(50, 3):
        assert mont_reduction(montify(a)) == a


def test_montiply_matches_field_multiplication():
    for a, b in zip(_random_elements(30, 4), _random_elements(30, 6)):
        product = mont_reduction(montiply(montify(a), montify(b)))
        assert product == bmul(a, b)


def test_montwopow_repeated_squaring():
    a = _random_elements(1, 7)[0]
    assert mont_reduction(montwopow(montify(a), 3)) == bpow(a, 8)


def test_mont_reduction_rejects_out_of_range():
    with pytest.raises(ValueError):
        mont_reduction(2**128)


def test_operators_and_division():
    a, b = (Belt(x) for x in _random_elements(2, 8))
    assert (a + b) - b == a
    assert (a / b) * b == a
    assert -a + a == Belt(0)


def test_belt_compares_with_int():
    assert Belt(42) == 42
    assert Belt(42) != 43
    assert Belt(1) < Belt(2)
    assert hash(Belt(9)) == hash(9)


def test_belt_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        Belt(-1)
    with pytest.raises(ValueError):
        Belt(2**64)


def test_based_check():
    assert based_check(PRIME - 1)
    assert not based_check(PRIME)


def test_ordered_root_values():
    assert Belt(1).ordered_root() == Belt(ROOTS[0])
    assert Belt(2).ordered_root() == Belt(0xFFFFFFFF00000000)
    assert Belt(4).ordered_root() == Belt(0x0001000000000000)


@pytest.mark.parametrize("log", [1, 2, 5, 10, 32])
def test_ordered_root_has_exact_order(log):
    root = Belt(1 << log).ordered_root()
    assert (root ** (1 << log)).is_one()
    assert not (root ** (1 << (log - 1))).is_one()


@pytest.mark.parametrize("value", [0, 3, 6, 2**33])
def test_ordered_root_errors(value):
    with pytest.raises(FieldError):
        Belt(value).ordered_root()


def test_from_bytes_pads_last_chunk():
    assert Belt.from_bytes(b"\x01\x02\x03\x04\x05") == [Belt(0x04030201), Belt(5)]


def test_bytes_round_trip():
    data = bytes(range(1, 33))
    assert Belt.to_bytes(Belt.from_bytes(data)) == data


def test_to_bytes_rejects_wide_belts():
    with pytest.raises(ValueError):
        Belt.to_bytes([Belt(2**32)])