from __future__ import annotations
from pathlib import Path
from typing import List
import logging
import re

from hashrun.errors import ConfigurationError, ManifestMismatchError, NoDataError
from hashrun.hasher import DigestRecord
from hashrun.io import digest_factory, hash_file

MANIFEST_LINE_RE = re.compile(r'^([0-9a-f]{64})  (.+)$')


def read_manifest(manifest_path: Path) -> List[DigestRecord]:
    if not manifest_path.is_file():
        raise NoDataError(f"manifest not found: {manifest_path}; run `hashrun hash` first")

    records: List[DigestRecord] = []
    with open(manifest_path, 'rt', encoding='utf-8') as f:
        for ln, line in enumerate(f, 1):
            line = line.rstrip('\n')
            if not line:
                continue
            match = MANIFEST_LINE_RE.match(line)
            if not match:
                raise ConfigurationError(f"{manifest_path}:{ln}: malformed manifest line {line!r}")
            digest, path = match.groups()
            records.append(DigestRecord(path=Path(path), size=-1, digest=digest))
    return records


def verify_manifest(manifest_path: Path, base_dir: Path = Path('.')) -> List[DigestRecord]:
    """
    Recomputes every digest listed in `manifest_path`.

    Paths are resolved against `base_dir`, the directory the hasher ran in.
    Returns the verified records; raises ManifestMismatchError listing every
    missing or changed file otherwise.
    """
    new_digest = digest_factory('sha256')
    missing: List[Path] = []
    mismatched: List[Path] = []
    verified: List[DigestRecord] = []

    for record in read_manifest(manifest_path):
        path = base_dir / record.path
        if not path.is_file():
            missing.append(record.path)
            continue
        actual = hash_file(path, new_digest)
        if actual != record.digest:
            logging.debug(f"{record.path}: expected {record.digest}, got {actual}")
            mismatched.append(record.path)
            continue
        verified.append(DigestRecord(path=record.path, size=path.stat().st_size, digest=actual))

    if missing or mismatched:
        raise ManifestMismatchError(missing, mismatched)
    return verified
