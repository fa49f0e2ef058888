"""
Batch hasher: validates the data set, then hashes one file at a time.

Results are written to two files in the results directory:

* ``summary.txt``: run header, file count, one line per file, total bytes.
* ``hashes.sha256``: ``<hex digest>  <path>`` per file, the format read by
  ``sha256sum -c``.

Both files are rebuilt from scratch on every run. Nothing is written or
truncated until the data set has passed validation.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional
import logging
import platform
import time

from hashrun.config import HasherConfig
from hashrun.errors import CountMismatchError, NoDataError
from hashrun.io import append_line, digest_factory, hash_file, truncate
from hashrun.messages import info
from hashrun.naming import discover

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

Pacer = Callable[[], None]
Clock = Callable[[], datetime]

################################################################################
# Pacing
################################################################################

class SleepPacer:
    """Blocks the whole process for a fixed number of seconds after each file."""

    def __init__(self, delay_secs: float, sleep: Callable[[float], None] = time.sleep) -> None:
        assert delay_secs >= 0, f"Delay must be non-negative, got {delay_secs}"
        self.delay_secs = delay_secs
        self.sleep = sleep

    def __call__(self) -> None:
        if self.delay_secs > 0:
            self.sleep(self.delay_secs)


class NoPacer:
    def __call__(self) -> None:
        pass

################################################################################
# Records
################################################################################

@dataclass(frozen=True)
class DigestRecord:
    path: Path
    size: int
    digest: str

    def manifest_line(self) -> str:
        return f"{self.digest}  {self.path.as_posix()}"


@dataclass
class HashRun:
    host: str
    started_at: datetime
    records: List[DigestRecord] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(r.size for r in self.records)


def run_header(host: str, when: datetime) -> str:
    return f"hash run on {host} at {when.strftime(TIMESTAMP_FORMAT)}"

################################################################################
# Main entry point
################################################################################

def hash_files(
    config: HasherConfig,
    pacer: Optional[Pacer] = None,
    clock: Optional[Clock] = None,
    hostname: Optional[str] = None,
) -> HashRun:
    pacer = pacer if pacer is not None else SleepPacer(config.hash_delay_secs)
    clock = clock if clock is not None else datetime.now
    host = hostname if hostname is not None else platform.node()

    files = discover(config.data_dir)
    if not files:
        raise NoDataError(f"no data files found in {config.data_dir}; run `hashrun generate` before hashing")
    if len(files) != config.expected_count:
        raise CountMismatchError(config.expected_count, len(files))

    new_digest = digest_factory('sha256')

    manifest = config.manifest_path
    summary = config.summary_path
    truncate(manifest)
    truncate(summary)

    run = HashRun(host=host, started_at=clock())
    append_line(summary, run_header(run.host, run.started_at))
    append_line(summary, f"files: {len(files)}")

    for path in files:
        size = path.stat().st_size
        append_line(summary, f"hashing {path.as_posix()} ({size} bytes)")
        info(f"Hashing {path} ({size} bytes)")

        record = DigestRecord(path=path, size=size, digest=hash_file(path, new_digest))
        append_line(manifest, record.manifest_line())
        run.records.append(record)
        logging.debug(f"{record.digest} {path}")

        pacer()

    append_line(summary, f"total_bytes: {run.total_bytes}")
    return run
