from __future__ import annotations
import sys
from typing import Iterator, Optional, TextIO
from .models import DirNode
from .utils import format_bytes, percent_of, printable_path

SIZE_COLUMN_WIDTH = 10
INDENT = "  "


def format_line(node: DirNode, parent_size: int, binary: bool = False) -> str:
    size = format_bytes(node.size, binary=binary).rjust(SIZE_COLUMN_WIDTH)
    if node.depth == 0:
        return f"{node.depth}:{node.kind.value}:100%:{size} {printable_path(node.path)}"
    pct = percent_of(node.size, parent_size)
    return (INDENT * node.depth
            + f"{node.depth:3}:{node.kind.value}:{pct:3}%:{size} {printable_path(node.path)}")


def render_lines(node: DirNode,
                 show_depth: int,
                 percent_threshold: int,
                 parent_size: int = 0,
                 binary: bool = False) -> Iterator[str]:
    """Yield report lines in pre-order, largest children first.

    Nothing below ``show_depth`` is produced. A child whose share of its
    parent is under ``percent_threshold`` is dropped with its whole subtree.
    The root line is always 100%.
    """
    stack = [(node, parent_size)]
    while stack:
        n, psize = stack.pop()
        if n.depth > show_depth:
            continue
        yield format_line(n, psize, binary=binary)
        shown = [c for c in n.children
                 if percent_of(c.size, n.size) >= percent_threshold]
        stack.extend((c, n.size) for c in reversed(shown))


def render(node: DirNode,
           show_depth: int,
           percent_threshold: int,
           parent_size: int = 0,
           out: Optional[TextIO] = None,
           binary: bool = False) -> None:
    out = out or sys.stdout
    for line in render_lines(node, show_depth, percent_threshold, parent_size, binary=binary):
        print(line, file=out)
