"""Hash-ordered treap sets whose shape is fixed by the tips of their members."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Iterable, Iterator, Optional

from .hash import Digest, hash_of_noun, hash_pair, hash_u64
from .noun import Cell, Noun, cons, decode_tuple


def _identity(value: Any) -> Any:
    return value


@dataclass(eq=False)
class _TreapNode:
    """A treap node ordered by the hash of ``noun``; ``payload`` rides along."""

    item: Any
    noun: Noun
    payload: Noun = 0
    left: Optional[_TreapNode] = field(default=None, repr=False)
    right: Optional[_TreapNode] = field(default=None, repr=False)

    @cached_property
    def tip(self) -> Digest:
        return hash_of_noun(self.noun)

    @cached_property
    def tip_bytes(self) -> bytes:
        return self.tip.to_bytes()

    @cached_property
    def mor_bytes(self) -> bytes:
        return hash_pair(self.tip, self.tip).to_bytes()


def _treap_insert(
    node: Optional[_TreapNode], new: _TreapNode
) -> tuple[_TreapNode, bool]:
    """Insert ``new`` below ``node``; return the new subtree root and whether it was added."""
    if node is None:
        return new, True
    if new.tip == node.tip:
        return node, False
    if new.tip_bytes < node.tip_bytes:
        node.left, inserted = _treap_insert(node.left, new)
        if not node.mor_bytes < node.left.mor_bytes:
            top = node.left
            node.left = top.right
            top.right = node
            return top, inserted
        return node, inserted
    node.right, inserted = _treap_insert(node.right, new)
    if not node.mor_bytes < node.right.mor_bytes:
        top = node.right
        node.right = top.left
        top.left = node
        return top, inserted
    return node, inserted


def _treap_find(node: Optional[_TreapNode], noun: Noun) -> Optional[_TreapNode]:
    """Find the node whose ordering noun hashes like ``noun``."""
    tip = hash_of_noun(noun)
    tip_bytes = tip.to_bytes()
    while node is not None:
        if tip == node.tip:
            return node
        node = node.left if tip_bytes < node.tip_bytes else node.right
    return None


def _treap_nodes(root: Optional[_TreapNode]) -> Iterator[_TreapNode]:
    """Visit nodes depth-first: a node, then its right subtree, then its left."""
    stack = [root] if root is not None else []
    while stack:
        current = stack.pop()
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
        yield current


class ZSet:
    """A set of values kept in a treap ordered by the hashes of their nouns.

    ``encode`` turns a value into its noun; by default values are nouns already.
    """

    def __init__(
        self,
        values: Iterable[Any] = (),
        encode: Optional[Callable[[Any], Noun]] = None,
    ) -> None:
        self._encode = encode or _identity
        self._root: Optional[_TreapNode] = None
        self._size = 0
        for value in values:
            self.insert(value)

    def insert(self, value: Any) -> bool:
        """Add ``value``; return False if an equal-hashing member was already present."""
        node = _TreapNode(item=value, noun=self._encode(value))
        self._root, inserted = _treap_insert(self._root, node)
        if inserted:
            self._size += 1
        return inserted

    def __contains__(self, value: object) -> bool:
        return _treap_find(self._root, self._encode(value)) is not None

    def __iter__(self) -> Iterator[Any]:
        return (node.item for node in _treap_nodes(self._root))

    def __len__(self) -> int:
        return self._size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZSet):
            return NotImplemented
        return self.to_noun() == other.to_noun()

    def __repr__(self) -> str:
        return f"ZSet({list(self)!r})"

    def to_noun(self) -> Noun:
        """Encode as ``[value [left right]]`` per node, with 0 for an empty subtree."""

        def visit(node: Optional[_TreapNode]) -> Noun:
            if node is None:
                return 0
            return cons(node.noun, cons(visit(node.left), visit(node.right)))

        return visit(self._root)

    @classmethod
    def from_noun(
        cls, noun: Noun, decode: Optional[Callable[[Noun], Any]] = None
    ) -> ZSet:
        """Decode a set noun; ``decode`` maps each member noun to a value.

        The resulting set takes nouns for any later insertions.
        """
        decode = decode or _identity

        def visit(sub: Noun) -> Optional[_TreapNode]:
            if not isinstance(sub, Cell) and sub == 0:
                return None
            value_noun, left, right = decode_tuple(sub, 3)
            return _TreapNode(
                item=decode(value_noun),
                noun=value_noun,
                left=visit(left),
                right=visit(right),
            )

        result = cls()
        result._root = visit(noun)
        result._size = sum(1 for _ in _treap_nodes(result._root))
        return result

    def hash(self, hash_value: Optional[Callable[[Any], Digest]] = None) -> Digest:
        """Structural hash; members hash with ``hash_value`` or by their nouns."""

        def value_digest(node: _TreapNode) -> Digest:
            if hash_value is None:
                return hash_of_noun(node.noun)
            return hash_value(node.item)

        def visit(node: Optional[_TreapNode]) -> Digest:
            if node is None:
                return hash_u64(0)
            return hash_pair(
                value_digest(node), hash_pair(visit(node.left), visit(node.right))
            )

        return visit(self._root)