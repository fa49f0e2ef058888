"""
Data generator: writes a fresh set of fixed-size random files.

Existing output is only replaced when the configuration explicitly asks for
it, so repeated runs never silently accumulate stale files.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List
import logging

from hashrun.base import Scope
from hashrun.config import GeneratorConfig, MEBIBYTE
from hashrun.errors import PreconditionError
from hashrun.io import delete_if_exists, write_random_file
from hashrun.messages import warning
from hashrun.naming import data_file_name, discover


@dataclass(frozen=True)
class GenerationResult:
    data_dir: Path
    files: List[Path]

    # Computed from the configuration, not measured on disk.
    reported_bytes: int

    def summary_line(self) -> str:
        return f"Generated {len(self.files)} files (~{self.reported_bytes} bytes) in {self.data_dir}"


def generate(config: GeneratorConfig) -> GenerationResult:
    data_dir = config.data_dir
    if not data_dir.exists():
        logging.debug(f"Creating directory {data_dir}")
    data_dir.mkdir(parents=True, exist_ok=True)

    existing = discover(data_dir)
    if existing and not config.force:
        raise PreconditionError(f"data already exists in {data_dir}; set FORCE=1 to regenerate")
    for path in existing:
        delete_if_exists(path)
    if existing:
        warning(f"Removed {len(existing)} existing data files from {data_dir}")

    files: List[Path] = []
    for index in range(1, config.file_count + 1):
        out = data_dir / data_file_name(index, config.file_count)
        with Scope() as scope:
            scope.on_failure(lambda _e, out=out: delete_if_exists(out))
            write_random_file(out, config.file_mb, MEBIBYTE)
        logging.debug(f"Wrote {out} ({config.file_bytes} bytes)")
        files.append(out)

    return GenerationResult(
        data_dir=data_dir,
        files=files,
        reported_bytes=config.file_count * config.file_mb * MEBIBYTE,
    )
