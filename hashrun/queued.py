from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
import platform

from hashrun.hasher import TIMESTAMP_FORMAT
from hashrun.io import write_text_file


def mark_queued(
    results_dir: Path,
    clock: Optional[Callable[[], datetime]] = None,
    hostname: Optional[str] = None,
) -> Path:
    """Records that a queued run reached execution, overwriting any earlier marker."""
    clock = clock if clock is not None else datetime.now
    host = hostname if hostname is not None else platform.node()

    out = results_dir / 'run.txt'
    write_text_file(out, f"queued test ran on {host} at {clock().strftime(TIMESTAMP_FORMAT)}\n")
    return out
