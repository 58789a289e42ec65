"""Hash-ordered treap maps whose shape is fixed by the tips of their keys."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Optional

from .hash import Digest, hash_of_noun, hash_pair, hash_u64
from .noun import Cell, Noun, cons, decode_tuple
from .zset import _identity, _treap_find, _treap_insert, _treap_nodes, _TreapNode


class ZMap:
    """A map kept in a treap ordered by the hashes of its key nouns.

    ``encode_key`` and ``encode_value`` turn keys and values into nouns; by
    default both are nouns already.
    """

    def __init__(
        self,
        items: Iterable[tuple[Any, Any]] = (),
        encode_key: Optional[Callable[[Any], Noun]] = None,
        encode_value: Optional[Callable[[Any], Noun]] = None,
    ) -> None:
        self._encode_key = encode_key or _identity
        self._encode_value = encode_value or _identity
        self._root: Optional[_TreapNode] = None
        self._size = 0
        for key, value in items:
            self.insert(key, value)

    def insert(self, key: Any, value: Any) -> bool:
        """Add ``key``; an existing key keeps its old value and False is returned."""
        node = _TreapNode(
            item=(key, value),
            noun=self._encode_key(key),
            payload=self._encode_value(value),
        )
        self._root, inserted = _treap_insert(self._root, node)
        if inserted:
            self._size += 1
        return inserted

    def get(self, key: Any) -> Any:
        """Value stored for ``key``, or None if absent."""
        node = _treap_find(self._root, self._encode_key(key))
        return None if node is None else node.item[1]

    def __contains__(self, key: object) -> bool:
        return _treap_find(self._root, self._encode_key(key)) is not None

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return (node.item for node in _treap_nodes(self._root))

    def __len__(self) -> int:
        return self._size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZMap):
            return NotImplemented
        return self.to_noun() == other.to_noun()

    def __repr__(self) -> str:
        return f"ZMap({list(self)!r})"

    def to_noun(self) -> Noun:
        """Encode as ``[[key value] [left right]]`` per node, with 0 for an empty subtree."""

        def visit(node: Optional[_TreapNode]) -> Noun:
            if node is None:
                return 0
            return cons(
                cons(node.noun, node.payload),
                cons(visit(node.left), visit(node.right)),
            )

        return visit(self._root)

    @classmethod
    def from_noun(
        cls,
        noun: Noun,
        decode_key: Optional[Callable[[Noun], Any]] = None,
        decode_value: Optional[Callable[[Noun], Any]] = None,
    ) -> ZMap:
        """Decode a map noun; the result takes nouns for any later insertions."""
        decode_key = decode_key or _identity
        decode_value = decode_value or _identity

        def visit(sub: Noun) -> Optional[_TreapNode]:
            if not isinstance(sub, Cell) and sub == 0:
                return None
            pair, left, right = decode_tuple(sub, 3)
            key_noun, value_noun = decode_tuple(pair, 2)
            return _TreapNode(
                item=(decode_key(key_noun), decode_value(value_noun)),
                noun=key_noun,
                payload=value_noun,
                left=visit(left),
                right=visit(right),
            )

        result = cls()
        result._root = visit(noun)
        result._size = sum(1 for _ in _treap_nodes(result._root))
        return result

    def hash(
        self,
        hash_key: Optional[Callable[[Any], Digest]] = None,
        hash_value: Optional[Callable[[Any], Digest]] = None,
    ) -> Digest:
        """Structural hash; keys and values hash with the given functions or by their nouns."""

        def entry_digest(node: _TreapNode) -> Digest:
            key, value = node.item
            kd = hash_of_noun(node.noun) if hash_key is None else hash_key(key)
            vd = hash_of_noun(node.payload) if hash_value is None else hash_value(value)
            return hash_pair(kd, vd)

        def visit(node: Optional[_TreapNode]) -> Digest:
            if node is None:
                return hash_u64(0)
            return hash_pair(
                entry_digest(node), hash_pair(visit(node.left), visit(node.right))
            )

        return visit(self._root)