"""Tests for the ``bst_demo`` command line driver."""

from __future__ import annotations

import json
import logging
import random
import subprocess
import sys
from pathlib import Path

import pytest

import bst_demo
from search_tree import DemoConfig


def test_generate_random_values_respects_bounds() -> None:
    values = bst_demo.generate_random_values(50, 7, random.Random(1))
    assert len(values) == 50
    assert all(0 <= value < 7 for value in values)
    assert bst_demo.generate_random_values(0, 7) == []


def test_run_demo_is_reproducible_with_seed() -> None:
    config = DemoConfig(seed=11)
    assert bst_demo.run_demo(config) == bst_demo.run_demo(config)


def test_run_demo_reports_each_stage() -> None:
    report = bst_demo.run_demo(DemoConfig(size=20, seed=5))

    unique = sorted(set(report.initial_values))
    assert report.initial.balanced is True
    assert list(report.initial.in_order) == unique
    assert report.unbalanced.balanced is False
    assert report.rebalanced.balanced is True
    assert list(report.rebalanced.in_order) == unique + [101, 102, 103, 104, 105]
    assert report.rebalanced.height == (len(unique) + 5).bit_length() - 1


def test_run_demo_with_empty_initial_tree() -> None:
    report = bst_demo.run_demo(DemoConfig(size=0, seed=1))

    assert report.initial_values == ()
    assert report.initial.height == -1
    assert report.initial.level_order == ()
    assert report.unbalanced.balanced is False
    assert report.rebalanced.in_order == (101, 102, 103, 104, 105)
    assert report.rebalanced.level_order == (103, 102, 105, 101, 104)
    assert report.rebalanced.height == 2


def test_run_demo_with_long_monotonic_unbalance_run() -> None:
    count = 2_000
    report = bst_demo.run_demo(
        DemoConfig(size=0, seed=1, unbalance_values=tuple(range(count)))
    )

    assert report.unbalanced.height == count - 1
    assert len(report.unbalanced.shape.splitlines()) == count
    assert report.rebalanced.balanced is True
    assert report.rebalanced.in_order == tuple(range(count))


def test_cli_text_output(capsys) -> None:
    assert bst_demo.main(["--seed", "7", "--size", "15"]) == 0
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "Creating a balanced binary search tree..."
    assert lines[1].startswith("Values: ")
    assert lines[2] == "Is Balanced: Yes"
    assert [line.split(":")[0] for line in lines[3:7]] == [
        "Level Order",
        "Pre-order",
        "In-order",
        "Post-order",
    ]
    assert lines[7] == "Unbalancing the tree by adding 101, 102, 103, 104, 105..."
    assert lines[8] == "Is Balanced: No"
    assert lines[9] == "Rebalancing the tree..."
    assert lines[10] == "Is Balanced: Yes"

    initial = sorted({int(value) for value in lines[1].split(":")[1].split()})
    expected = initial + [101, 102, 103, 104, 105]
    assert lines[13] == "In-order: " + " ".join(str(value) for value in expected)


def test_cli_show_tree_includes_layout(capsys) -> None:
    assert bst_demo.main(["--seed", "2", "--size", "3", "--show-tree"]) == 0
    output = capsys.readouterr().out
    assert "└── " in output
    assert "┌── 105" in output


def test_cli_reads_config_file(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "demo.yaml"
    config_path.write_text("size: 0\nunbalance_values: [3, 2, 1]\n", encoding="utf-8")

    assert bst_demo.main(["--config", str(config_path)]) == 0
    lines = capsys.readouterr().out.splitlines()

    assert lines[7] == "Unbalancing the tree by adding 3, 2, 1..."
    assert lines[8] == "Is Balanced: No"
    assert lines[-2] == "In-order: 1 2 3"


def test_cli_reports_config_errors(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_path = tmp_path / "demo.yaml"
    config_path.write_text("size: -3\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        assert bst_demo.main(["--config", str(config_path)]) == 2

    assert "size must be a non-negative integer" in caplog.text


def test_cli_rejects_invalid_flags() -> None:
    with pytest.raises(SystemExit):
        bst_demo.main(["--max-value", "0"])


def test_cli_json_output() -> None:
    script = Path(__file__).parents[1] / "bst_demo.py"
    completed = subprocess.run(
        [sys.executable, str(script), "--seed", "3", "--output-format", "json"],
        check=False,
        capture_output=True,
        text=True,
    )

    assert completed.returncode == 0
    payload = json.loads(completed.stdout)
    assert set(payload) == {
        "initial_values",
        "unbalance_values",
        "initial",
        "unbalanced",
        "rebalanced",
    }
    assert len(payload["initial_values"]) == 15
    assert payload["rebalanced"]["balanced"] is True
    assert payload["rebalanced"]["in_order"] == sorted(payload["rebalanced"]["in_order"])
