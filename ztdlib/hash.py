"""Digests, base58 belt encoding and structural hashing of values and nouns."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Sequence, Union

from .base58 import b58decode, b58encode
from .belt import PRIME, Belt
from .noun import Cell, Noun, encode_tuple
from .tip5 import hash_fixed, hash_varlen

DIGEST_SIZE = 5

BeltLike = Union[Belt, int]


def _to_belt(value: BeltLike) -> Belt:
    return value if isinstance(value, Belt) else Belt(value)


def belts_to_atom(belts: Iterable[BeltLike]) -> int:
    """Interpret belts as base-PRIME digits, least significant first."""
    result = 0
    power = 1
    for belt in belts:
        result += int(belt) * power
        power *= PRIME
    return result


def belts_to_bytes(belts: Sequence[BeltLike]) -> bytes:
    """Big-endian bytes of the atom, zero-padded to eight bytes per belt."""
    atom = belts_to_atom(belts)
    length = len(belts) * 8
    if atom.bit_length() > length * 8:
        raise ValueError("belts do not fit in their byte width")
    return atom.to_bytes(length, "big")


def belts_from_bytes(data: bytes, count: int) -> tuple[Belt, ...]:
    """Split a big-endian number into ``count`` base-PRIME digits."""
    num = int.from_bytes(bytes(data), "big")
    belts = []
    for _ in range(count):
        num, rem = divmod(num, PRIME)
        belts.append(Belt(rem))
    return tuple(belts)


def belts_to_base58(belts: Sequence[BeltLike]) -> str:
    """Base58 text of :func:`belts_to_bytes`."""
    return b58encode(belts_to_bytes(belts))


def belts_from_base58(text: str, count: int) -> tuple[Belt, ...]:
    """Inverse of :func:`belts_to_base58`."""
    try:
        data = b58decode(text)
    except ValueError as exc:
        raise ValueError("unable to decode base58 belts") from exc
    return belts_from_bytes(data, count)


@dataclass(frozen=True, order=True)
class Digest:
    """A five-belt hash value."""

    belts: tuple[Belt, ...]

    def __post_init__(self) -> None:
        belts = tuple(_to_belt(b) for b in self.belts)
        if len(belts) != DIGEST_SIZE:
            raise ValueError(f"digest needs {DIGEST_SIZE} belts, got {len(belts)}")
        object.__setattr__(self, "belts", belts)

    def __str__(self) -> str:
        return belts_to_base58(self.belts)

    def to_atom(self) -> int:
        return belts_to_atom(self.belts)

    def to_bytes(self) -> bytes:
        """Forty big-endian bytes."""
        return belts_to_bytes(self.belts)

    @classmethod
    def from_bytes(cls, data: bytes) -> Digest:
        return cls(belts_from_bytes(data, DIGEST_SIZE))

    @classmethod
    def from_base58(cls, text: str) -> Digest:
        return cls(belts_from_base58(text, DIGEST_SIZE))

    def to_noun(self) -> Noun:
        return encode_tuple(*(b.value for b in self.belts))

    @classmethod
    def from_noun(cls, noun: Noun) -> Digest:
        """Decode five belts; a trailing cell contributes only its head."""
        items = []
        for i in range(DIGEST_SIZE):
            if isinstance(noun, Cell):
                item, noun = noun.head, noun.tail
            elif i == DIGEST_SIZE - 1:
                item = noun
            else:
                raise ValueError("digest noun is too short")
            if isinstance(item, Cell) or not 0 <= item < PRIME:
                raise ValueError(f"digest element is not a field element: {item!r}")
            items.append(Belt(item))
        return cls(tuple(items))


def hash_noun(leaves: Sequence[BeltLike], dyck: Sequence[BeltLike]) -> Digest:
    """Hash a noun's leaves and Dyck-word shape."""
    combined = [len(leaves), *(int(b) for b in leaves), *(int(b) for b in dyck)]
    return Digest(hash_varlen(combined))


def hash_u64(value: int) -> Digest:
    """Hash a single integer as a one-leaf noun."""
    return hash_noun([Belt(value)], [])


def hash_bool(value: bool) -> Digest:
    """Loobean hash: true hashes as 0, false as 1."""
    return hash_u64(0 if value else 1)


def hash_unit() -> Digest:
    return hash_u64(0)


def hash_pair(left: Digest, right: Digest) -> Digest:
    """Hash two digests together with the fixed-length sponge."""
    return Digest(hash_fixed(left.belts + right.belts))


def hash_tuple(*args: Digest) -> Digest:
    """Hash ``(a, b, c)`` as ``(a, (b, c))``."""
    if not args:
        raise ValueError("cannot hash an empty tuple")
    return reduce(lambda acc, d: hash_pair(d, acc), reversed(args[:-1]), args[-1])


def hash_list(digests: Iterable[Digest]) -> Digest:
    """Hash a list as a null-terminated chain of pairs."""
    return reduce(lambda acc, d: hash_pair(d, acc), reversed(list(digests)), hash_unit())


def hash_option(digest: Optional[Digest]) -> Digest:
    """``None`` hashes as 0; a value as ``(0, value)``."""
    if digest is None:
        return hash_unit()
    return hash_pair(hash_u64(0), digest)


def hash_zeroable(digest: Optional[Digest]) -> Digest:
    """``None`` hashes as 0; a value hashes as itself."""
    return hash_unit() if digest is None else digest


def hash_string(text: str) -> Digest:
    """Hash up to eight UTF-8 bytes packed little-endian into one word."""
    data = text.encode("utf-8")
    if len(data) > 8:
        raise ValueError("string longer than 8 bytes cannot be hashed")
    return hash_u64(int.from_bytes(data, "little"))


_RIGHT_MARK = object()


def hash_of_noun(noun: Noun) -> Digest:
    """Structural hash of a noun whose atoms all fit in 64 bits."""
    leaves: list[Belt] = []
    dyck: list[Belt] = []
    stack: list[object] = [noun]
    while stack:
        item = stack.pop()
        if item is _RIGHT_MARK:
            dyck.append(Belt(1))
        elif isinstance(item, Cell):
            dyck.append(Belt(0))
            stack.append(item.tail)
            stack.append(_RIGHT_MARK)
            stack.append(item.head)
        else:
            if item.bit_length() > 64:
                raise ValueError("atom too large")
            leaves.append(Belt(item))
    return hash_noun(leaves, dyck)