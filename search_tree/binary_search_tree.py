"""Binary search tree container with explicit rebalancing.

The module provides a mutable ordered collection of unique numeric values.
A :class:`Tree` is built once from an arbitrary iterable (duplicates and
ordering are tolerated) and can then be mutated with :meth:`Tree.insert` and
:meth:`Tree.delete_item`, queried with :meth:`Tree.find`, :meth:`Tree.height`,
:meth:`Tree.depth` and :meth:`Tree.is_balanced`, and restructured with
:meth:`Tree.rebalance`.

The APIs intentionally provide:

* ``Node`` – a ``@dataclass`` holding a value and optional left/right children.
* ``Tree`` – the container enforcing the strict BST ordering invariant.
* ``TraversalCallbackError`` – raised when a traversal is invoked without a
  callable visitor.

Insertion never rebalances. Monotonic inserts degrade the tree towards a
linked list and balance is only restored by an explicit ``rebalance`` call.
Traversals, height and balance checks use explicit stacks so that such
degenerate trees never exhaust the interpreter recursion limit.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
import math
import numbers
from typing import Callable, Deque, Iterable, Iterator, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# any numbers.Real other than bool; checked at runtime by _validate_value
Value = Union[int, float]
Visitor = Callable[["Node"], object]


class TraversalCallbackError(TypeError):
    """Raised when a traversal is called without a callable visitor."""


@dataclass(slots=True)
class Node:
    """Single tree node; owns its children exclusively."""

    value: Value
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    def __post_init__(self) -> None:
        _validate_value(self.value)


def _validate_value(value: object) -> None:
    """Reject payloads that are not totally ordered real numbers."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError("Tree values must be real numbers")
    if isinstance(value, float) and math.isnan(value):
        raise ValueError("Tree values must not be NaN")


def _require_callback(callback: Optional[Visitor]) -> None:
    if not callable(callback):
        raise TraversalCallbackError("callback argument required")


class Tree:
    """Binary search tree of unique values with on-demand rebalancing."""

    __slots__ = ("_root",)

    def __init__(self, values: Optional[Iterable[Value]] = None) -> None:
        items = list(values) if values is not None else []
        for item in items:
            _validate_value(item)
        unique_sorted = sorted(set(items))
        self._root = self.build_tree(unique_sorted)
        logger.debug(
            "Built tree from %d values (%d unique)", len(items), len(unique_sorted)
        )

    @property
    def root(self) -> Optional[Node]:
        """Current root node, ``None`` when the tree is empty."""

        return self._root

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def build_tree(self, values: Sequence[Value]) -> Optional[Node]:
        """Return the root of a height-balanced tree built from *values*.

        *values* must already be sorted ascending and free of duplicates. The
        middle index of every range is ``length // 2`` so even-length ranges
        place the extra element in the right half.
        """

        def _build(low: int, high: int) -> Optional[Node]:
            if low >= high:
                return None
            middle = low + (high - low) // 2
            node = Node(values[middle])
            node.left = _build(low, middle)
            node.right = _build(middle + 1, high)
            return node

        return _build(0, len(values))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value: Value) -> None:
        """Insert *value* as a new leaf; existing values are ignored."""

        _validate_value(value)
        if self._root is None:
            self._root = Node(value)
            return

        current = self._root
        while True:
            if value == current.value:
                logger.debug("Ignoring duplicate insert of %r", value)
                return
            if value < current.value:
                if current.left is None:
                    current.left = Node(value)
                    return
                current = current.left
            else:
                if current.right is None:
                    current.right = Node(value)
                    return
                current = current.right

    def delete_item(self, value: Value) -> None:
        """Remove *value* from the tree; absent values are a no-op."""

        self._root = self.delete_node(self._root, value)

    def delete_node(self, node: Optional[Node], value: Value) -> Optional[Node]:
        """Remove *value* from the subtree rooted at *node*.

        Returns the (possibly new) root of that subtree. A node with two
        children takes the value of its in-order successor, and the
        successor's original node is unlinked from the right subtree.
        """

        parent: Optional[Node] = None
        current = node
        while current is not None and value != current.value:
            parent = current
            current = current.left if value < current.value else current.right
        if current is None:
            return node

        if current.left is not None and current.right is not None:
            successor_parent = current
            successor = current.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            current.value = successor.value
            # the successor never has a left child
            if successor_parent is current:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
            return node

        replacement = current.left if current.left is not None else current.right
        if parent is None:
            return replacement
        if parent.left is current:
            parent.left = replacement
        else:
            parent.right = replacement
        return node

    def rebalance(self) -> None:
        """Rebuild the whole tree from its in-order values."""

        values: List[Value] = []
        self.in_order(lambda node: values.append(node.value))
        self._root = self.build_tree(values)
        logger.debug("Rebalanced tree with %d nodes", len(values))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find(self, value: Value) -> Optional[Node]:
        """Return the node holding *value* or ``None``."""

        current = self._root
        while current is not None:
            if value == current.value:
                return current
            current = current.left if value < current.value else current.right
        return None

    @staticmethod
    def find_min_node(node: Optional[Node]) -> Optional[Node]:
        """Return the leftmost node of the subtree rooted at *node*."""

        if node is None:
            return None
        current = node
        while current.left is not None:
            current = current.left
        return current

    def height(self, node: Optional[Node]) -> int:
        """Return the edge count of the longest downward path from *node*.

        An absent node has height ``-1`` and a leaf has height ``0``.
        """

        if node is None:
            return -1
        return _subtree_heights(node)[id(node)]

    def depth(self, node: Optional[Node]) -> int:
        """Return the edge count from the root to the node holding ``node.value``.

        The lookup re-descends from the root by comparison, so ``-1`` is
        returned when the tree is empty or the value is not present.
        """

        if node is None:
            return -1
        current = self._root
        edges = 0
        while current is not None:
            if node.value == current.value:
                return edges
            current = current.left if node.value < current.value else current.right
            edges += 1
        return -1

    def is_balanced(self) -> bool:
        """Return ``True`` when every node's subtree heights differ by at most one."""

        if self._root is None:
            return True
        heights = _subtree_heights(self._root)
        for node in _iter_pre_order(self._root):
            left = heights[id(node.left)] if node.left is not None else -1
            right = heights[id(node.right)] if node.right is not None else -1
            if abs(left - right) > 1:
                return False
        return True

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def level_order(self, callback: Optional[Visitor] = None) -> None:
        """Visit nodes breadth-first, left to right within a level."""

        _require_callback(callback)
        if self._root is None:
            return
        queue: Deque[Node] = deque([self._root])
        while queue:
            node = queue.popleft()
            callback(node)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)

    def pre_order(self, callback: Optional[Visitor] = None) -> None:
        """Visit each node before its left and right subtrees."""

        _require_callback(callback)
        for node in _iter_pre_order(self._root):
            callback(node)

    def in_order(self, callback: Optional[Visitor] = None) -> None:
        """Visit nodes in ascending value order."""

        _require_callback(callback)
        for node in _iter_in_order(self._root):
            callback(node)

    def post_order(self, callback: Optional[Visitor] = None) -> None:
        """Visit each node after its left and right subtrees."""

        _require_callback(callback)
        for node in _iter_post_order(self._root):
            callback(node)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def values(self) -> List[Value]:
        """Return all values in ascending order."""

        return [node.value for node in _iter_in_order(self._root)]

    def __iter__(self) -> Iterator[Value]:
        for node in _iter_in_order(self._root):
            yield node.value

    def __len__(self) -> int:
        return sum(1 for _ in _iter_pre_order(self._root))

    def __contains__(self, value: object) -> bool:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
        return self.find(value) is not None

    def __repr__(self) -> str:
        return f"Tree({self.values()!r})"


def _iter_pre_order(root: Optional[Node]) -> Iterator[Node]:
    stack: List[Node] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def _iter_in_order(root: Optional[Node]) -> Iterator[Node]:
    stack: List[Node] = []
    current = root
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        yield current
        current = current.right


def _iter_post_order(root: Optional[Node]) -> Iterator[Node]:
    stack: List[tuple[Node, bool]] = [(root, False)] if root is not None else []
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))


def _subtree_heights(root: Optional[Node]) -> dict[int, int]:
    """Map ``id(node)`` to the height of every node below *root*."""

    heights: dict[int, int] = {}
    for node in _iter_post_order(root):
        left = heights[id(node.left)] if node.left is not None else -1
        right = heights[id(node.right)] if node.right is not None else -1
        heights[id(node)] = max(left, right) + 1
    return heights


__all__ = [
    "Node",
    "TraversalCallbackError",
    "Tree",
    "Value",
    "Visitor",
]
