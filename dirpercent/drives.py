from __future__ import annotations
import os
from typing import Optional
import psutil


def _mount_for(path: str):
    best = None
    for p in psutil.disk_partitions(all=False):
        mp = p.mountpoint
        if not mp:
            continue
        mp_norm = os.path.abspath(mp)
        try:
            inside = os.path.commonpath([mp_norm, path]) == mp_norm
        except ValueError:
            # different drives on Windows
            continue
        if inside and (best is None or len(mp_norm) > len(best[0])):
            best = (mp_norm, p.fstype)
    return best


def filesystem_usage(path: str) -> Optional[dict]:
    """Capacity of the filesystem holding ``path``, or None if unavailable."""
    ap = os.path.realpath(path)
    try:
        u = psutil.disk_usage(ap)
    except OSError:
        return None
    mount = _mount_for(ap)
    return {
        "mountpoint": mount[0] if mount else ap,
        "fstype": mount[1] if mount else "",
        "total": int(u.total),
        "used": int(u.used),
        "free": int(u.free),
        "percent": float(u.percent),
    }
