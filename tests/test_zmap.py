import pytest

from ztdlib.hash import hash_string, hash_u64
from ztdlib.noun import cons, cue, decode_int, decode_string, encode_string, jam
from ztdlib.zmap import ZMap

ITEMS = [("ver", 10), ("ve2", 11), ("a", 1), ("b", 2), ("nock", 99)]


def test_zmap_encode_decode():
    zm = ZMap(encode_key=encode_string)
    zm.insert("ver", 10)
    zm.insert("ve2", 11)
    decoded = ZMap.from_noun(zm.to_noun(), decode_string, decode_int)
    assert list(zm) == list(decoded)


def test_get_and_membership():
    zm = ZMap(ITEMS, encode_key=encode_string)
    assert zm.get("ver") == 10
    assert zm.get("nock") == 99
    assert zm.get("missing") is None
    assert "ve2" in zm
    assert "missing" not in zm
    assert len(zm) == len(ITEMS)


def test_existing_key_keeps_first_value():
    zm = ZMap(encode_key=encode_string)
    assert zm.insert("k", 1) is True
    assert zm.insert("k", 2) is False
    assert zm.get("k") == 1
    assert len(zm) == 1


def test_shape_does_not_depend_on_insertion_order():
    forward = ZMap(ITEMS, encode_key=encode_string)
    backward = ZMap(reversed(ITEMS), encode_key=encode_string)
    assert forward.to_noun() == backward.to_noun()
    assert forward == backward
    assert forward.hash(hash_string, hash_u64) == backward.hash(hash_string, hash_u64)


def test_empty_map():
    zm = ZMap()
    assert zm.to_noun() == 0
    assert zm.hash() == hash_u64(0)
    assert list(ZMap.from_noun(0)) == []


def test_single_entry_noun_layout():
    zm = ZMap([(3, 4)])
    assert zm.to_noun() == cons(cons(3, 4), cons(0, 0))


def test_hash_depends_on_values():
    first = ZMap([("k", 1)], encode_key=encode_string)
    second = ZMap([("k", 2)], encode_key=encode_string)
    assert first.hash() != second.hash()


def test_from_noun_rejects_bad_entry():
    with pytest.raises(ValueError):
        ZMap.from_noun(cons(5, cons(0, 0)))