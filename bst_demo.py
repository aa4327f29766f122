"""Command line demonstration of the binary search tree container.

The script builds a tree from random integers, prints its traversals, inserts
a run of large values to unbalance it, confirms the imbalance, rebalances and
prints the traversals again. Parameters come from the built-in defaults, an
optional JSON/YAML configuration file, and finally command line overrides.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import argparse
import json
import logging
import random
import sys
from typing import Callable, List, Optional, Sequence, Tuple

from search_tree import (
    DemoConfig,
    DemoConfigError,
    Tree,
    Visitor,
    format_tree,
    load_demo_config,
)

logger = logging.getLogger(__name__)

TRAVERSAL_LABELS = (
    ("level_order", "Level Order"),
    ("pre_order", "Pre-order"),
    ("in_order", "In-order"),
    ("post_order", "Post-order"),
)


@dataclass(frozen=True)
class StageSnapshot:
    """State of the tree captured at one step of the demo."""

    balanced: bool
    height: int
    level_order: Tuple[int, ...]
    pre_order: Tuple[int, ...]
    in_order: Tuple[int, ...]
    post_order: Tuple[int, ...]
    shape: str


@dataclass(frozen=True)
class DemoReport:
    """Snapshots for the initial, unbalanced and rebalanced trees."""

    initial_values: Tuple[int, ...]
    unbalance_values: Tuple[int, ...]
    initial: StageSnapshot
    unbalanced: StageSnapshot
    rebalanced: StageSnapshot

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def generate_random_values(
    size: int, max_value: int, rng: Optional[random.Random] = None
) -> List[int]:
    """Return *size* integers drawn uniformly from ``[0, max_value)``."""

    generator = rng if rng is not None else random.Random()
    return [generator.randrange(max_value) for _ in range(size)]


def _collect(traversal: Callable[[Visitor], None]) -> Tuple[int, ...]:
    values: List[int] = []
    traversal(lambda node: values.append(node.value))
    return tuple(values)


def _snapshot(tree: Tree) -> StageSnapshot:
    return StageSnapshot(
        balanced=tree.is_balanced(),
        height=tree.height(tree.root),
        level_order=_collect(tree.level_order),
        pre_order=_collect(tree.pre_order),
        in_order=_collect(tree.in_order),
        post_order=_collect(tree.post_order),
        shape=format_tree(tree.root),
    )


def run_demo(config: DemoConfig) -> DemoReport:
    """Execute the build, unbalance and rebalance flow described by *config*."""

    rng = random.Random(config.seed)
    values = generate_random_values(config.size, config.max_value, rng)
    tree = Tree(values)
    initial = _snapshot(tree)
    logger.info("Initial tree: %d nodes, height %d", len(tree), initial.height)

    for value in config.unbalance_values:
        tree.insert(value)
    unbalanced = _snapshot(tree)
    logger.info(
        "After inserting %s: balanced=%s height=%d",
        config.unbalance_values,
        unbalanced.balanced,
        unbalanced.height,
    )

    tree.rebalance()
    rebalanced = _snapshot(tree)
    logger.info("Rebalanced tree: height %d", rebalanced.height)

    return DemoReport(
        initial_values=tuple(values),
        unbalance_values=tuple(config.unbalance_values),
        initial=initial,
        unbalanced=unbalanced,
        rebalanced=rebalanced,
    )


def _format_traversals(snapshot: StageSnapshot) -> List[str]:
    lines: List[str] = []
    for attribute, label in TRAVERSAL_LABELS:
        values = getattr(snapshot, attribute)
        lines.append(f"{label}: {' '.join(str(value) for value in values)}")
    return lines


def _balance_line(snapshot: StageSnapshot) -> str:
    return f"Is Balanced: {'Yes' if snapshot.balanced else 'No'}"


def format_report(report: DemoReport, *, show_tree: bool = False) -> List[str]:
    """Return the human-readable lines for *report*."""

    lines = ["Creating a balanced binary search tree..."]
    lines.append(f"Values: {' '.join(str(value) for value in report.initial_values)}")
    lines.append(_balance_line(report.initial))
    if show_tree:
        lines.append(report.initial.shape.rstrip("\n") or "<empty>")
    lines.extend(_format_traversals(report.initial))

    added = ", ".join(str(value) for value in report.unbalance_values)
    lines.append(f"Unbalancing the tree by adding {added}...")
    lines.append(_balance_line(report.unbalanced))
    if show_tree:
        lines.append(report.unbalanced.shape.rstrip("\n") or "<empty>")

    lines.append("Rebalancing the tree...")
    lines.append(_balance_line(report.rebalanced))
    if show_tree:
        lines.append(report.rebalanced.shape.rstrip("\n") or "<empty>")
    lines.extend(_format_traversals(report.rebalanced))
    return lines


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("value must be an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be non-negative")
    return parsed


def _positive_int(value: str) -> int:
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError("value must be positive")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build, unbalance and rebalance a binary search tree.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON or YAML file with size, max_value, unbalance_values and seed.",
    )
    parser.add_argument(
        "--size",
        type=_non_negative_int,
        default=None,
        help="Number of random values used to build the initial tree.",
    )
    parser.add_argument(
        "--max-value",
        type=_positive_int,
        default=None,
        help="Exclusive upper bound for the random values.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random generator to make runs reproducible.",
    )
    parser.add_argument(
        "--output-format",
        choices={"json", "text"},
        default="text",
        help="Print the report as human-readable text or JSON.",
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        help="Include the sideways tree layout after each step (text output only).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices={"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
        help="Configure logging verbosity for troubleshooting.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the demonstration flow."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_demo_config(args.config).with_overrides(
            size=args.size, max_value=args.max_value, seed=args.seed
        )
    except (DemoConfigError, FileNotFoundError) as error:
        logger.error("%s", error)
        return 2

    report = run_demo(config)

    if args.output_format == "json":
        print(json.dumps(report.to_dict()))
    else:
        for line in format_report(report, show_tree=args.show_tree):
            print(line)

    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via CLI
    sys.exit(main())
