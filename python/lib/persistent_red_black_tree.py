#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
persistent_red_black_tree.py
----------------------------

An immutable ordered set built on a **persistent Red‑Black** tree.
Inserting never touches an existing tree: it returns a new tree that
shares every untouched subtree with the old one, so all earlier versions
remain valid and can be used independently.

Features
~~~~~~~~
* `tree.insert(value)` / `insert(tree, value)` – returns a *new* tree
* `tree.in_order()` / `in_order(tree)` – sorted list of the elements
* `empty()` – the empty tree
* `value in tree`, `len(tree)`, iteration in ascending order
* `tree.min_value()`, `tree.max_value()`, `tree.height()`, `tree.black_height()`
* `tree.validate()` – check the red‑black invariants (handy in tests)

Balancing follows the left‑leaning scheme: after each step back up the
insertion path a node is rotated left, rotated right and/or recoloured.
Each of those builds fresh nodes instead of rewiring old ones.

Typical usage
~~~~~~~~~~~~~
>>> from persistent_red_black_tree import empty
>>> t1 = empty().insert("pear").insert("apple")
>>> t2 = t1.insert("fig")
>>> t1.in_order()
['apple', 'pear']
>>> t2.in_order()
['apple', 'fig', 'pear']
>>> t2.insert("fig") is t2
True
"""

from __future__ import annotations

import enum
from typing import (
    Any,
    Generic,
    Iterable,
    Iterator,
    List,
    NoReturn,
    Optional,
    Tuple,
    TypeVar,
)

# ----------------------------------------------------------------------
#  Type variable (elements must support a strict total order via ``<``)
# ----------------------------------------------------------------------
T = TypeVar("T")


# ----------------------------------------------------------------------
#  Node colour tag
# ----------------------------------------------------------------------
class Color(enum.Enum):
    RED = "red"
    BLACK = "black"


RED = Color.RED
BLACK = Color.BLACK


class RedBlackInvariantError(AssertionError):
    """Raised by :meth:`PersistentRedBlackTree.validate` on a broken tree."""


def _read_only(self: Any, *args: Any) -> NoReturn:
    raise AttributeError(f"{type(self).__name__} is immutable")


class _Node(Generic[T]):
    """Internal immutable node – may be shared by many tree versions."""

    __slots__ = ("value", "color", "left", "right")

    def __init__(
        self,
        value: T,
        color: Color,
        left: Optional["_Node[T]"] = None,
        right: Optional["_Node[T]"] = None,
    ) -> None:
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "color", color)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    __setattr__ = _read_only
    __delattr__ = _read_only

    def __repr__(self) -> str:
        col = "R" if self.color is RED else "B"
        return f"<{col} {self.value!r}>"


def _is_red(node: Optional[_Node[T]]) -> bool:
    return node is not None and node.color is RED


# ----------------------------------------------------------------------
#  Rotations / recolouring – each returns a newly built subtree
# ----------------------------------------------------------------------
def _rotate_left(node: _Node[T]) -> _Node[T]:
    """Lift the right child of *node*; *node* becomes its red left child."""
    right = node.right
    if right is None:
        raise RuntimeError("rotate_left called on a node with no right child")
    return _Node(
        right.value,
        node.color,
        _Node(node.value, RED, node.left, right.left),
        right.right,
    )


def _rotate_right(node: _Node[T]) -> _Node[T]:
    """Lift the left child of *node*; *node* becomes its red right child."""
    left = node.left
    if left is None:
        raise RuntimeError("rotate_right called on a node with no left child")
    return _Node(
        left.value,
        node.color,
        left.left,
        _Node(node.value, RED, left.right, node.right),
    )


def _recolor(node: _Node[T]) -> _Node[T]:
    """Make *node* red and copies of both its children black."""
    left, right = node.left, node.right
    if left is None or right is None:
        raise RuntimeError("recolor called on a node missing a child")
    return _Node(
        node.value,
        RED,
        _Node(left.value, BLACK, left.left, left.right),
        _Node(right.value, BLACK, right.left, right.right),
    )


def _balance(node: _Node[T]) -> _Node[T]:
    if _is_red(node.right) and not _is_red(node.left):
        node = _rotate_left(node)
    if _is_red(node.left) and _is_red(node.left.left):  # type: ignore[union-attr]
        node = _rotate_right(node)
    if _is_red(node.left) and _is_red(node.right):
        node = _recolor(node)
    return node


def _insert(node: Optional[_Node[T]], value: T) -> _Node[T]:
    """
    Return the subtree rooted at *node* with *value* added.

    If *value* is already present the original *node* object is returned,
    and every ancestor sees its child unchanged and returns itself too.
    """
    if node is None:
        return _Node(value, RED)

    if value < node.value:
        child = _insert(node.left, value)
        if child is node.left:
            return node
        node = _Node(node.value, node.color, child, node.right)
    elif node.value < value:
        child = _insert(node.right, value)
        if child is node.right:
            return node
        node = _Node(node.value, node.color, node.left, child)
    else:
        return node

    return _balance(node)


class PersistentRedBlackTree(Generic[T]):
    """
    An immutable sorted set implemented with a persistent red‑black tree.

    Every instance is frozen: :meth:`insert` hands back a new tree and the
    receiver keeps its contents forever.  Because nothing is ever written
    after construction, a tree may be read from any number of threads
    without locking.
    """

    __slots__ = ("_root", "_size")

    # ------------------------------------------------------------------
    #   Construction
    # ------------------------------------------------------------------
    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        """
        Create an empty tree or one holding the elements of *items*.

        Parameters
        ----------
        items : iterable   optional
            Folded in with :meth:`insert`, left to right (O(n log n)).
        """
        root: Optional[_Node[T]] = None
        size = 0
        if items is not None:
            tree: PersistentRedBlackTree[T] = PersistentRedBlackTree()
            for item in items:
                tree = tree.insert(item)
            root, size = tree._root, tree._size
        object.__setattr__(self, "_root", root)
        object.__setattr__(self, "_size", size)

    __setattr__ = _read_only
    __delattr__ = _read_only

    @classmethod
    def _from_root(
        cls, root: Optional[_Node[T]], size: int
    ) -> "PersistentRedBlackTree[T]":
        tree = cls.__new__(cls)
        object.__setattr__(tree, "_root", root)
        object.__setattr__(tree, "_size", size)
        return tree

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, value: T) -> "PersistentRedBlackTree[T]":
        """
        Return a tree holding every element of ``self`` plus *value*.

        ``self`` is left untouched.  Inserting a value that is already
        present returns ``self`` itself.
        """
        root = _insert(self._root, value)
        if root is self._root:
            return self
        if root.color is RED:
            root = _Node(root.value, BLACK, root.left, root.right)
        return self._from_root(root, self._size + 1)

    # ------------------------------------------------------------------
    #   Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def __contains__(self, value: object) -> bool:
        node = self._root
        while node is not None:
            if value < node.value:  # type: ignore[operator]
                node = node.left
            elif node.value < value:
                node = node.right
            else:
                return True
        return False

    def __iter__(self) -> Iterator[T]:
        """Yield elements in ascending order (in‑order traversal)."""
        stack: List[_Node[T]] = []
        cur = self._root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.value
            cur = cur.right

    def in_order(self) -> List[T]:
        """Return a new list of all elements in ascending order."""
        return list(self)

    # ------------------------------------------------------------------
    #   Minimum / maximum
    # ------------------------------------------------------------------
    def min_value(self) -> T:
        """Return the smallest element."""
        node = self._root
        if node is None:
            raise ValueError("Tree is empty")
        while node.left is not None:
            node = node.left
        return node.value

    def max_value(self) -> T:
        """Return the largest element."""
        node = self._root
        if node is None:
            raise ValueError("Tree is empty")
        while node.right is not None:
            node = node.right
        return node.value

    # ------------------------------------------------------------------
    #   Shape
    # ------------------------------------------------------------------
    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        best = 0
        stack: List[Tuple[Optional[_Node[T]], int]] = [(self._root, 0)]
        while stack:
            node, depth = stack.pop()
            if node is None:
                best = max(best, depth)
                continue
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
        return best

    def black_height(self) -> int:
        """Black nodes on the leftmost root‑to‑empty path (0 when empty)."""
        count = 0
        node = self._root
        while node is not None:
            if node.color is BLACK:
                count += 1
            node = node.left
        return count

    # ------------------------------------------------------------------
    #   Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.

        Raises :class:`RedBlackInvariantError` describing the first
        violation found.
        """

        def fail(message: str) -> NoReturn:
            raise RedBlackInvariantError(message)

        def dfs(node: Optional[_Node[T]], low: Any, high: Any) -> int:
            """Return the black height of *node*, checking as we go."""
            if node is None:
                return 0

            if low is not _UNBOUNDED and not low < node.value:
                fail(f"BST order violated at {node.value!r}")
            if high is not _UNBOUNDED and not node.value < high:
                fail(f"BST order violated at {node.value!r}")

            if node.color is RED and (_is_red(node.left) or _is_red(node.right)):
                fail(f"Red node {node.value!r} has a red child")

            left_black = dfs(node.left, low, node.value)
            right_black = dfs(node.right, node.value, high)
            if left_black != right_black:
                fail(f"Black-height mismatch below {node.value!r}")

            return left_black + (1 if node.color is BLACK else 0)

        if self._root is None:
            if self._size != 0:
                fail("Empty tree reports a non-zero size")
            return
        if self._root.color is not BLACK:
            fail("Root is not black")
        dfs(self._root, _UNBOUNDED, _UNBOUNDED)
        if sum(1 for _ in self) != self._size:
            fail("Cached size does not match the number of nodes")

    # ------------------------------------------------------------------
    #   Comparison / representation
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:  # type: ignore[override]
        if not isinstance(other, PersistentRedBlackTree):
            return NotImplemented
        if self._root is other._root:
            return True
        return self._size == other._size and self.in_order() == other.in_order()

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"PersistentRedBlackTree({self.in_order()!r})"


_UNBOUNDED = object()


# ----------------------------------------------------------------------
#  Functional interface
# ----------------------------------------------------------------------
def empty() -> PersistentRedBlackTree[Any]:
    """Return the empty tree."""
    return PersistentRedBlackTree()


def insert(tree: PersistentRedBlackTree[T], value: T) -> PersistentRedBlackTree[T]:
    """Return a new tree with *value* added; *tree* is not modified."""
    return tree.insert(value)


def in_order(tree: PersistentRedBlackTree[T]) -> List[T]:
    """Return the elements of *tree* in ascending order."""
    return tree.in_order()
