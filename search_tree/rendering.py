"""Sideways text layout for :class:`~search_tree.binary_search_tree.Tree` shapes.

The right subtree is drawn above its parent and the left subtree below, so
reading the output top to bottom lists values in descending order. Only
``value``, ``left`` and ``right`` are read; the tree is never mutated. The walk
uses an explicit stack, so linked-list shaped trees render without hitting the
interpreter recursion limit.
"""

from __future__ import annotations

import io
import sys
from typing import List, Optional, TextIO, Tuple

from .binary_search_tree import Node

__all__ = [
    "format_tree",
    "pretty_print",
]

# (node, prefix, is_left, ready_to_write)
_Frame = Tuple[Node, str, bool, bool]


def pretty_print(
    node: Optional[Node],
    stream: Optional[TextIO] = None,
    prefix: str = "",
    is_left: bool = True,
) -> None:
    """Write the sideways layout of the subtree rooted at *node* to *stream*.

    ``stream`` defaults to :data:`sys.stdout`. An empty subtree writes nothing.
    """

    if node is None:
        return
    target = stream if stream is not None else sys.stdout

    stack: List[_Frame] = [(node, prefix, is_left, False)]
    while stack:
        current, current_prefix, current_is_left, ready = stack.pop()
        if ready:
            connector = "└── " if current_is_left else "┌── "
            target.write(f"{current_prefix}{connector}{current.value}\n")
            continue
        # pushed in reverse: right subtree, then the node, then the left subtree
        if current.left is not None:
            left_prefix = current_prefix + ("    " if current_is_left else "│   ")
            stack.append((current.left, left_prefix, True, False))
        stack.append((current, current_prefix, current_is_left, True))
        if current.right is not None:
            right_prefix = current_prefix + ("│   " if current_is_left else "    ")
            stack.append((current.right, right_prefix, False, False))


def format_tree(node: Optional[Node]) -> str:
    """Return the :func:`pretty_print` layout as a string."""

    buffer = io.StringIO()
    pretty_print(node, buffer)
    return buffer.getvalue()
