import pytest

from ztdlib.belt import PRIME, Belt
from ztdlib.hash import (
    Digest,
    belts_from_base58,
    belts_from_bytes,
    belts_to_atom,
    belts_to_base58,
    belts_to_bytes,
    hash_bool,
    hash_list,
    hash_noun,
    hash_of_noun,
    hash_option,
    hash_pair,
    hash_string,
    hash_tuple,
    hash_u64,
    hash_unit,
    hash_zeroable,
)
from ztdlib.noun import cons

SAMPLE = Digest((1, 2, 3, 4, 5))


def test_digest_requires_five_belts():
    with pytest.raises(ValueError):
        Digest((1, 2, 3))


def test_to_atom_digits():
    assert Digest((7, 0, 0, 0, 0)).to_atom() == 7
    assert Digest((0, 1, 0, 0, 0)).to_atom() == PRIME


def test_bytes_round_trip():
    data = SAMPLE.to_bytes()
    assert len(data) == 40
    assert Digest.from_bytes(data) == SAMPLE


def test_zero_digest_base58():
    zero = Digest((0, 0, 0, 0, 0))
    assert str(zero) == "1" * 40
    assert Digest.from_base58(str(zero)) == zero


def test_base58_round_trip():
    assert Digest.from_base58(str(SAMPLE)) == SAMPLE


def test_base58_invalid():
    with pytest.raises(ValueError):
        Digest.from_base58("0OIl")


def test_generic_belts_round_trip():
    belts = (Belt(9), Belt(PRIME - 1), Belt(0))
    assert belts_from_bytes(belts_to_bytes(belts), 3) == belts
    assert belts_from_base58(belts_to_base58(belts), 3) == belts
    assert belts_to_atom([Belt(3)]) == 3


def test_digest_noun_round_trip():
    assert SAMPLE.to_noun() == cons(1, cons(2, cons(3, cons(4, 5))))
    assert Digest.from_noun(SAMPLE.to_noun()) == SAMPLE


def test_digest_from_noun_last_cell_takes_head():
    noun = cons(1, cons(2, cons(3, cons(4, cons(5, 99)))))
    assert Digest.from_noun(noun) == SAMPLE


def test_digest_from_noun_errors():
    with pytest.raises(ValueError):
        Digest.from_noun(cons(1, 2))
    with pytest.raises(ValueError):
        Digest.from_noun(cons(1, cons(2, cons(3, cons(4, PRIME)))))


def test_digest_ordering():
    assert Digest((1, 0, 0, 0, 0)) < Digest((2, 0, 0, 0, 0))
    assert sorted([SAMPLE, Digest((0, 9, 9, 9, 9))])[0] == Digest((0, 9, 9, 9, 9))


def test_scalar_hashes_agree():
    assert hash_u64(5) == hash_noun([Belt(5)], [])
    assert hash_unit() == hash_u64(0)
    assert hash_bool(True) == hash_u64(0)
    assert hash_bool(False) == hash_u64(1)
    assert hash_u64(1) != hash_u64(2)


def test_option_and_zeroable():
    assert hash_option(None) == hash_unit()
    assert hash_option(SAMPLE) == hash_pair(hash_u64(0), SAMPLE)
    assert hash_zeroable(None) == hash_unit()
    assert hash_zeroable(SAMPLE) == SAMPLE


def test_pair_is_ordered():
    a, b = hash_u64(1), hash_u64(2)
    assert hash_pair(a, b) != hash_pair(b, a)


def test_tuple_and_list_structure():
    a, b, c = hash_u64(1), hash_u64(2), hash_u64(3)
    assert hash_tuple(a, b) == hash_pair(a, b)
    assert hash_tuple(a, b, c) == hash_pair(a, hash_pair(b, c))
    assert hash_list([]) == hash_unit()
    assert hash_list([a, b]) == hash_pair(a, hash_pair(b, hash_unit()))
    with pytest.raises(ValueError):
        hash_tuple()


def test_string_hash():
    assert hash_string("") == hash_u64(0)
    assert hash_string("ab") == hash_u64(0x6261)
    with pytest.raises(ValueError):
        hash_string("longer than eight")


def test_hash_of_noun():
    assert hash_of_noun(5) == hash_u64(5)
    assert hash_of_noun(cons(1, 2)) == hash_noun([Belt(1), Belt(2)], [Belt(0), Belt(1)])
    assert hash_of_noun(cons(cons(1, 2), 3)) == hash_noun(
        [Belt(1), Belt(2), Belt(3)], [Belt(0), Belt(0), Belt(1), Belt(1)]
    )
    with pytest.raises(ValueError):
        hash_of_noun(1 << 70)