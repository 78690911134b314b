from __future__ import annotations
import logging
import os
import stat as statmod
import time
from dataclasses import dataclass, field
from typing import List, Optional
from .models import DirNode, NodeKind, ScanResult, ScanStats

logger = logging.getLogger(__name__)


def _skip(stats: Optional[ScanStats]) -> None:
    if stats is not None:
        stats.skipped += 1


def _list_entries(dir_path: str, stats: Optional[ScanStats] = None) -> List[os.DirEntry]:
    """Read every entry of ``dir_path``, sorted by name.

    Failing to open the directory raises. An error while reading keeps the
    entries already read and stops the listing there.
    """
    entries: List[os.DirEntry] = []
    # the scandir handle is released before any child is visited
    with os.scandir(dir_path) as it:
        while True:
            try:
                entries.append(next(it))
            except StopIteration:
                break
            except OSError as e:
                logger.warning("Error access DirEntry %s. %s", dir_path, e)
                _skip(stats)
                break
    entries.sort(key=lambda e: e.name)
    return entries


@dataclass
class _DirFrame:
    path: str
    depth: int
    entries: List[os.DirEntry]
    pos: int = 0
    total: int = 0
    children: List[DirNode] = field(default_factory=list)

    def add(self, node: DirNode) -> None:
        self.total += node.size
        self.children.append(node)

    def finish(self) -> DirNode:
        # large size first; entries were name-sorted so ties stay in path order
        self.children.sort(key=lambda n: n.size, reverse=True)
        return DirNode(size=self.total, kind=NodeKind.DIRECTORY, depth=self.depth,
                       path=self.path, children=tuple(self.children))


def _open_dir(path: str, depth: int, stats: Optional[ScanStats]) -> Optional[_DirFrame]:
    try:
        entries = _list_entries(path, stats)
    except OSError as e:
        logger.warning("Error access ReadDir %s. %s", path, e)
        _skip(stats)
        return None
    return _DirFrame(path=path, depth=depth, entries=entries)


def _entry_stat(entry: os.DirEntry, stats: Optional[ScanStats]) -> Optional[os.stat_result]:
    try:
        if entry.is_symlink():
            logger.info("Ignore symlink %s", entry.path)
            _skip(stats)
            return None
        return entry.stat(follow_symlinks=False)
    except OSError as e:
        logger.warning("Error access FileType %s. %s", entry.path, e)
        _skip(stats)
        return None


def build(path: str, depth: int, stats: Optional[ScanStats] = None) -> Optional[DirNode]:
    """Scan ``path`` into a directory node placed at ``depth``.

    Returns None when the directory itself cannot be listed. Entries that
    cannot be classified or sized, and symbolic links, are logged and left
    out; they add nothing to the directory size. The whole tree below
    ``path`` is always scanned, depth-first with an explicit stack so
    nesting is not bounded by the interpreter's recursion limit.
    """
    top = _open_dir(path, depth, stats)
    if top is None:
        return None
    stack = [top]
    while True:
        frame = stack[-1]
        if frame.pos < len(frame.entries):
            entry = frame.entries[frame.pos]
            frame.pos += 1
            st = _entry_stat(entry, stats)
            if st is None:
                continue
            if statmod.S_ISDIR(st.st_mode):
                sub = _open_dir(entry.path, frame.depth + 1, stats)
                if sub is not None:
                    stack.append(sub)
            elif statmod.S_ISREG(st.st_mode):
                if stats is not None:
                    stats.files += 1
                frame.add(DirNode(size=int(st.st_size), kind=NodeKind.FILE,
                                  depth=frame.depth + 1, path=entry.path))
            else:
                logger.debug("Ignore special file %s", entry.path)
            continue

        stack.pop()
        node = frame.finish()
        if stats is not None:
            stats.dirs += 1
        if not stack:
            return node
        stack[-1].add(node)


def scan_path(path: str) -> ScanResult:
    t0 = time.time()
    stats = ScanStats()
    root = build(path, 0, stats)
    return ScanResult(
        root=root,
        scanned_path=path,
        files=stats.files,
        dirs=stats.dirs,
        skipped=stats.skipped,
        elapsed_sec=time.time() - t0,
    )
