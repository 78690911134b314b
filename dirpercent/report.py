from __future__ import annotations
import json
import os
import tempfile
import time
from typing import List, Optional
from .errors import ExportError
from .models import DirNode, ScanResult
from .utils import printable_path


def node_to_dict(n: DirNode, parent: Optional[str] = None) -> dict:
    return {
        "path": printable_path(n.path),
        "parent": printable_path(parent) if parent is not None else None,
        "kind": "directory" if n.is_dir else "file",
        "size": n.size,
        "depth": n.depth,
    }


def flatten(root: DirNode) -> List[dict]:
    """Pre-order list of node dicts, each pointing at its parent's path."""
    out: List[dict] = []
    stack = [(root, None)]
    while stack:
        n, parent = stack.pop()
        out.append(node_to_dict(n, parent))
        stack.extend((c, n.path) for c in reversed(n.children))
    return out


def export_report(result: ScanResult, out_path: str) -> None:
    if result.root is None:
        raise ExportError(f"Nothing to export for {result.scanned_path}")
    data = {
        "created": time.time(),
        "root": printable_path(result.scanned_path),
        "files": result.files,
        "dirs": result.dirs,
        "skipped": result.skipped,
        "nodes": flatten(result.root),
    }
    out_dir = os.path.dirname(os.path.abspath(out_path))
    tmp = None
    try:
        fd, tmp = tempfile.mkstemp(prefix=".dirpercent-", suffix=".json", dir=out_dir)
        with open(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, out_path)
        tmp = None
    except (OSError, ValueError) as e:
        raise ExportError(f"Cannot write report {out_path}: {e}") from e
    finally:
        if tmp is not None and os.path.exists(tmp):
            os.remove(tmp)
