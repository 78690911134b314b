from __future__ import annotations
import os

DECIMAL_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]
BINARY_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_bytes(num: int, binary: bool = False) -> str:
    """Human-readable size, e.g. ``300 B``, ``1.5 KB``, ``2 GiB``.

    Decimal (1000-based) units unless ``binary`` is set. Up to two decimals,
    trailing zeros dropped.
    """
    if num < 0:
        return str(num)
    units = BINARY_UNITS if binary else DECIMAL_UNITS
    base = 1024.0 if binary else 1000.0
    x = float(num)
    for u in units:
        if u == "B":
            if x < base:
                return f"{int(x)} {u}"
        elif round(x, 2) < base or u == units[-1]:
            # 999.999 KB would print as 1000 KB, so it moves up a unit
            return f"{x:.2f}".rstrip("0").rstrip(".") + f" {u}"
        x /= base
    return f"{x:.2f} {units[-1]}"


def percent_of(size: int, parent_size: int) -> int:
    # floor in integers; an empty parent counts as 0%
    if parent_size <= 0:
        return 0
    return size * 100 // parent_size


def printable_path(path: str) -> str:
    # undecodable bytes in file names come back as \xNN escapes
    return os.fsencode(path).decode("utf-8", "backslashreplace")
