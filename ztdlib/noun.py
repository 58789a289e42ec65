"""Nouns (atoms and cells), their codecs, and the jam/cue bit serialization."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

T = TypeVar("T")

Noun = Union[int, "Cell"]

_HEX = re.compile(r"[0-9a-fA-F]+")


def _check_noun(value: object) -> None:
    if isinstance(value, Cell):
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"not a noun: {value!r}")
    if value < 0:
        raise ValueError(f"atoms are non-negative, got {value}")


@dataclass(frozen=True, eq=False, slots=True)
class Cell:
    """An ordered pair of nouns."""

    head: Noun
    tail: Noun
    _hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _check_noun(self.head)
        _check_noun(self.tail)
        object.__setattr__(self, "_hash", hash((self.head, self.tail)))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        stack: list[tuple[Any, Any]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            a_cell = isinstance(a, Cell)
            if a_cell != isinstance(b, Cell):
                return False
            if not a_cell:
                if a != b:
                    return False
                continue
            if a._hash != b._hash:
                return False
            stack.append((a.tail, b.tail))
            stack.append((a.head, b.head))
        return True

    def __str__(self) -> str:
        return noun_to_string(self)


def cons(head: Noun, tail: Noun) -> Cell:
    """Build the cell ``[head tail]``."""
    return Cell(head, tail)


def _apply(decode: Optional[Callable[[Noun], T]], noun: Noun) -> Any:
    return noun if decode is None else decode(noun)


def _autocons(noun: Noun) -> str:
    if not isinstance(noun, Cell):
        return str(noun)
    parts = []
    while isinstance(noun, Cell):
        parts.append(_autocons(noun.head))
        noun = noun.tail
    if noun != 0:
        parts.extend((".", str(noun)))
    return " ".join(parts)


def noun_to_string(noun: Noun) -> str:
    """Render a noun; null-terminated tails are elided, other tails shown with ``.``."""
    if isinstance(noun, Cell):
        return f"[{_autocons(noun)}]"
    return str(noun)


def noun_to_json(noun: Noun) -> Any:
    """JSON-friendly form: atoms as lowercase hex strings, cells as two-item lists."""
    if isinstance(noun, Cell):
        return [noun_to_json(noun.head), noun_to_json(noun.tail)]
    _check_noun(noun)
    return format(noun, "x")


def noun_from_json(value: Any) -> Noun:
    """Inverse of :func:`noun_to_json`; raises ValueError on malformed input."""
    if isinstance(value, str):
        if not _HEX.fullmatch(value):
            raise ValueError(f"invalid hex atom: {value!r}")
        return int(value, 16)
    if isinstance(value, (list, tuple)):
        if len(value) < 1:
            raise ValueError("cell missing car")
        if len(value) < 2:
            raise ValueError("cell missing cdr")
        if len(value) > 2:
            raise ValueError("cell has more than two elements")
        return cons(noun_from_json(value[0]), noun_from_json(value[1]))
    raise ValueError(f"expected atom or cell, got {value!r}")


def encode_bool(value: bool) -> int:
    """Loobean encoding: true is 0, false is 1."""
    if not isinstance(value, bool):
        raise TypeError(f"expected a bool, got {value!r}")
    return 0 if value else 1


def decode_bool(noun: Noun) -> bool:
    """Decode a loobean; only atoms 0 and 1 are accepted."""
    if isinstance(noun, Cell) or noun not in (0, 1):
        raise ValueError(f"not a loobean: {noun!r}")
    return noun == 0


def encode_string(value: str) -> int:
    """Encode text as an atom of its UTF-8 bytes, little-endian."""
    return int.from_bytes(value.encode("utf-8"), "little")


def decode_string(noun: Noun) -> str:
    """Decode an atom of little-endian UTF-8 bytes."""
    if isinstance(noun, Cell):
        raise ValueError("string must be an atom")
    data = noun.to_bytes((noun.bit_length() + 7) // 8, "little")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("atom is not valid UTF-8") from exc


def decode_int(noun: Noun, bits: int = 64) -> int:
    """Decode an atom that must fit in ``bits`` unsigned bits."""
    if isinstance(noun, Cell):
        raise ValueError("integer must be an atom")
    if noun >> bits:
        raise ValueError(f"atom {noun} does not fit in {bits} bits")
    return noun


def encode_tuple(*args: Noun) -> Noun:
    """Right-nested cell ``[a b c]`` = ``[a [b c]]``; one item encodes as itself."""
    if not args:
        raise ValueError("cannot encode an empty tuple")
    return reduce(lambda acc, item: cons(item, acc), reversed(args[:-1]), args[-1])


def decode_tuple(noun: Noun, count: int) -> tuple[Noun, ...]:
    """Split a right-nested cell into ``count`` parts; the last takes the rest."""
    if count < 1:
        raise ValueError("count must be at least 1")
    items = []
    for _ in range(count - 1):
        if not isinstance(noun, Cell):
            raise ValueError(f"expected a {count}-tuple")
        items.append(noun.head)
        noun = noun.tail
    items.append(noun)
    return tuple(items)


def encode_list(items: Iterable[Noun]) -> Noun:
    """Null-terminated list."""
    return reduce(lambda acc, item: cons(item, acc), reversed(list(items)), 0)


def decode_list(noun: Noun, decode: Optional[Callable[[Noun], T]] = None) -> list:
    """Decode a null-terminated list, applying ``decode`` to each item."""
    out = []
    while isinstance(noun, Cell):
        out.append(_apply(decode, noun.head))
        noun = noun.tail
    if noun != 0:
        raise ValueError("list is not null-terminated")
    return out


def encode_option(value: Optional[Noun]) -> Noun:
    """``None`` is 0; a value is ``[0 value]``."""
    return 0 if value is None else cons(0, value)


def decode_option(noun: Noun, decode: Optional[Callable[[Noun], T]] = None) -> Any:
    """Inverse of :func:`encode_option`."""
    if isinstance(noun, Cell):
        if noun.head == 0:
            return _apply(decode, noun.tail)
        raise ValueError("option cell must have a zero head")
    if noun == 0:
        return None
    raise ValueError(f"not an option: {noun}")


def encode_zeroable(value: Optional[Noun]) -> Noun:
    """``None`` is 0; a value is encoded as itself."""
    return 0 if value is None else value


def decode_zeroable(noun: Noun, decode: Optional[Callable[[Noun], T]] = None) -> Any:
    """Atom 0 is ``None``; anything else is decoded."""
    if not isinstance(noun, Cell) and noun == 0:
        return None
    return _apply(decode, noun)


class _BitWriter:
    __slots__ = ("value", "length")

    def __init__(self) -> None:
        self.value = 0
        self.length = 0

    def write(self, bits: int, count: int) -> None:
        self.value |= (bits & ((1 << count) - 1)) << self.length
        self.length += count

    def push(self, bit: bool) -> None:
        self.write(int(bit), 1)

    def zeros(self, count: int) -> None:
        self.length += count

    def to_bytes(self) -> bytes:
        return self.value.to_bytes((self.length + 7) // 8, "little")


def _mat_backref(out: _BitWriter, backref: int) -> None:
    if backref == 0:
        out.write(0b111, 3)
        return
    size = backref.bit_length()
    size_size = size.bit_length()
    out.write(0b11, 2)
    out.zeros(size_size)
    out.push(True)
    out.write(size, size_size - 1)
    out.write(backref, size)


def _mat_atom(out: _BitWriter, atom: int) -> None:
    if atom == 0:
        out.write(0b10, 2)
        return
    size = atom.bit_length()
    size_size = size.bit_length()
    out.push(False)
    out.zeros(size_size)
    out.push(True)
    out.write(size, size_size - 1)
    out.write(atom, size)


def jam(noun: Noun) -> bytes:
    """Serialize a noun to bytes, sharing repeated subtrees through back-references."""
    _check_noun(noun)
    out = _BitWriter()
    offsets: dict[Noun, int] = {}
    stack = [noun]
    while stack:
        current = stack.pop()
        backref = offsets.get(current)
        if backref is not None:
            if isinstance(current, Cell) or backref.bit_length() < current.bit_length():
                _mat_backref(out, backref)
            else:
                _mat_atom(out, current)
            continue
        offsets[current] = out.length
        if isinstance(current, Cell):
            out.write(0b01, 2)
            stack.append(current.tail)
            stack.append(current.head)
        else:
            _mat_atom(out, current)
    return out.to_bytes()


class _BitReader:
    __slots__ = ("data", "total", "cursor")

    def __init__(self, data: bytes) -> None:
        self.data = int.from_bytes(data, "little")
        self.total = len(data) * 8
        self.cursor = 0

    def read(self, count: int) -> int:
        value = (self.data >> self.cursor) & ((1 << count) - 1)
        self.cursor += count
        return value

    def bit(self) -> bool:
        return bool(self.read(1))

    def size(self) -> int:
        if self.cursor >= self.total:
            raise ValueError("unexpected end of jam data")
        rest = self.data >> self.cursor
        if rest == 0:
            raise ValueError("unexpected end of jam data")
        width = (rest & -rest).bit_length() - 1
        if width == 0:
            self.cursor += 1
            return 0
        if width - 1 > 64:
            raise ValueError("size prefix too long")
        self.cursor += width + 1
        return self.read(width - 1) + (1 << (width - 1))

    def backref(self) -> int:
        size = self.size()
        if size > 64:
            raise ValueError("back-reference too large")
        if self.cursor + size > self.total:
            raise ValueError("unexpected end of jam data")
        return self.read(size)

    def atom(self) -> int:
        return self.read(self.size())


def cue(data: bytes) -> Noun:
    """Deserialize bytes produced by :func:`jam`; raises ValueError if malformed."""
    reader = _BitReader(bytes(data))
    refs: dict[int, Noun] = {}
    values: list[Noun] = []
    tasks: list[Optional[int]] = [None]
    while tasks:
        task = tasks.pop()
        if task is not None:
            tail = values.pop()
            head = values.pop()
            cell = Cell(head, tail)
            refs[task] = cell
            values.append(cell)
            continue
        if reader.bit():
            if reader.bit():
                backref = reader.backref()
                try:
                    values.append(refs[backref])
                except KeyError:
                    raise ValueError(f"dangling back-reference {backref}") from None
            else:
                tasks.append(reader.cursor - 2)
                tasks.append(None)
                tasks.append(None)
        else:
            offset = reader.cursor - 1
            atom = reader.atom()
            refs[offset] = atom
            values.append(atom)
    return values[0]