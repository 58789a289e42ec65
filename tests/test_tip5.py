import pytest

from ztdlib.belt import PRIME, Belt
from ztdlib.tip5 import hash_fixed, hash_varlen, permute


def test_permute_output_is_in_field():
    out = permute(list(range(16)))
    assert len(out) == 16
    assert all(0 <= w < PRIME for w in out)


def test_permute_returns_new_state_without_mutating():
    state = [0] * 16
    out = permute(state)
    assert state == [0] * 16
    assert len(out) == 16
    assert out != state


def test_permute_distinguishes_states():
    first = permute(list(range(16)))
    second = permute(list(range(1, 17)))
    assert first != second
    assert permute(list(range(16))) == first


def test_permute_rejects_wrong_size():
    with pytest.raises(ValueError):
        permute([0] * 15)


def test_hash_varlen_shape_and_determinism():
    digest = hash_varlen([Belt(1), Belt(2), Belt(3)])
    assert len(digest) == 5
    assert all(0 <= w < 2**64 for w in digest)
    assert digest == hash_varlen([1, 2, 3])


def test_hash_varlen_does_not_mutate_input():
    data = [Belt(4), Belt(5)]
    hash_varlen(data)
    assert data == [Belt(4), Belt(5)]


def test_hash_varlen_padding_distinguishes_lengths():
    assert hash_varlen([1]) != hash_varlen([1, 0])
    assert hash_varlen([]) != hash_varlen([0])


def test_hash_varlen_multi_block():
    long_input = list(range(25))
    assert hash_varlen(long_input) != hash_varlen(long_input[:24])
    assert len(hash_varlen(long_input)) == 5


def test_hash_varlen_rejects_unbased():
    with pytest.raises(ValueError):
        hash_varlen([PRIME])


def test_hash_fixed_requires_ten():
    with pytest.raises(ValueError):
        hash_fixed([0] * 9)
    with pytest.raises(ValueError):
        hash_fixed([0] * 11)


def test_hash_fixed_differs_from_varlen():
    data = list(range(10))
    assert hash_fixed(data) == hash_fixed([Belt(i) for i in data])
    assert hash_fixed(data) != hash_varlen(data)
    assert hash_fixed(data) != hash_fixed(list(range(1, 11)))