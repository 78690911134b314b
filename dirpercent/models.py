from __future__ import annotations
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


class NodeKind(str, Enum):
    FILE = "F"
    DIRECTORY = "D"


@dataclass(frozen=True)
class DirNode:
    size: int
    kind: NodeKind
    depth: int
    path: str
    children: Tuple["DirNode", ...] = ()

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def name(self) -> str:
        return os.path.basename(self.path.rstrip("\\/")) or self.path

    def walk(self) -> Iterator["DirNode"]:
        """Pre-order traversal: this node first, then each child subtree."""
        stack = [self]
        while stack:
            n = stack.pop()
            yield n
            stack.extend(reversed(n.children))


@dataclass
class ScanStats:
    files: int = 0
    dirs: int = 0
    skipped: int = 0


@dataclass
class ScanResult:
    root: Optional[DirNode]
    scanned_path: str
    files: int
    dirs: int
    skipped: int
    elapsed_sec: float = field(default=0.0)
