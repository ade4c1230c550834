"""Printing and display utilities for sets and their AVL trees."""

from __future__ import annotations

import sys
from typing import Any, Callable, Iterable, List, Optional, TextIO

from avl_sets.base import Node


# ANSI colour codes
PRIMARY = '\033[32m'    # green
SECONDARY = '\033[33m'  # yellow
RESET = '\033[0m'


def format_set(
    elements: Iterable[Any],
    fmt: Callable[[Any], str] = str,
    first: str = "{",
    last: str = "}",
    sep: str = ",",
) -> str:
    """Render the elements (in iteration order) between ``first`` and ``last``."""
    return first + sep.join(fmt(x) for x in elements) + last


def print_set(
    elements: Iterable[Any],
    out: Optional[TextIO] = None,
    fmt: Callable[[Any], str] = str,
    first: str = "{",
    last: str = "}",
    sep: str = ",",
) -> None:
    """Write :func:`format_set` output to ``out`` (default: ``sys.stdout``)."""
    if out is None:
        out = sys.stdout
    out.write(format_set(elements, fmt, first, last, sep))


def print_pretty(tree: Optional[Node], max_depth: int = 6, fmt: Callable[[Any], str] = str) -> str:
    """
    Prints an AVL tree so:
      • Lines go from the root (depth 0) downwards.
      • Every depth has 2**depth slots; empty subtrees leave blank slots,
        so a node is always centred above its two children.
      • Levels below ``max_depth`` are elided.
    """
    if tree is None:
        return "AVL tree: Empty"

    depth = min(tree.height, max_depth)
    layers: List[List[str]] = [[] for _ in range(depth)]
    max_len = 0

    def collect(node: Optional[Node], d: int) -> None:
        nonlocal max_len
        if d >= depth:
            return
        if node is None:
            for k in range(d, depth):
                layers[k].extend([""] * (1 << (k - d)))
            return
        text = fmt(node.value)
        max_len = max(max_len, len(text))
        layers[d].append(text)
        collect(node.left, d + 1)
        collect(node.right, d + 1)

    collect(tree, 0)

    column_width = max_len + 2
    out_lines = []
    for d, texts in enumerate(layers):
        width = column_width * (1 << (depth - 1 - d))
        line = "".join(txt.center(width) for txt in texts)
        label = f"{PRIMARY}Depth {d}{RESET}" if d == 0 else f"Depth {d}"
        out_lines.append(f"{label}: {line.rstrip()}")

    if tree.height > depth:
        hidden = tree.height - depth
        out_lines.append(f"{SECONDARY}... {hidden} deeper level(s) not shown{RESET}")

    header = f"AVL tree (height={tree.height}, size={tree.size})"
    return header + "\n" + "\n".join(out_lines) + "\n"
