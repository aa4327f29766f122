"""Binary search tree container with explicit rebalancing."""

from .binary_search_tree import Node, TraversalCallbackError, Tree, Value, Visitor
from .config import DemoConfig, DemoConfigError, load_demo_config
from .rendering import format_tree, pretty_print

__all__ = [
    "DemoConfig",
    "DemoConfigError",
    "Node",
    "TraversalCallbackError",
    "Tree",
    "Value",
    "Visitor",
    "format_tree",
    "load_demo_config",
    "pretty_print",
]
