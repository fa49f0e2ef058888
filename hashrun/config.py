from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional
import os
import re

from hashrun.errors import ConfigurationError

################################################################################
# Environment keys and defaults
################################################################################

FILE_COUNT      = 'FILE_COUNT'
FILE_MB         = 'FILE_MB'
FORCE           = 'FORCE'
EXPECTED_COUNT  = 'EXPECTED_COUNT'
HASH_DELAY_SECS = 'HASH_DELAY_SECS'

SPDX_LICENSE      = 'SPDX_LICENSE'
COPYRIGHT_NOTICE  = 'COPYRIGHT_NOTICE'
HEADER_EXTENSIONS = 'HEADER_EXTENSIONS'
HEADER_EXCLUDE    = 'HEADER_EXCLUDE'

DEFAULTS: Dict[str, str] = {
    FILE_COUNT:      '10',
    FILE_MB:         '10',
    FORCE:           '0',
    EXPECTED_COUNT:  '10',
    HASH_DELAY_SECS: '3',

    SPDX_LICENSE:      'SPDX-License-Identifier: AGPL-3.0-only',
    COPYRIGHT_NOTICE:  'Copyright (C) 2026 Alex Sizykh',
    HEADER_EXTENSIONS: '.rs',
    HEADER_EXCLUDE:    'target/',
}

DEFAULT_DATA_DIR = Path('data')
DEFAULT_RESULTS_DIR = Path('results')

MEBIBYTE = 1048576

_UNSIGNED_RE = re.compile(r'^[0-9]+$')

################################################################################
# Parsing helpers
################################################################################

def _lookup(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key)
    if value is None or value == '':
        return DEFAULTS[key]
    return value


def parse_positive_int(key: str, value: str | int) -> int:
    if isinstance(value, bool) or not _UNSIGNED_RE.match(str(value)):
        raise ConfigurationError(f"{key} must be a positive integer (got {value!r})")
    result = int(value)
    if result <= 0:
        raise ConfigurationError(f"{key} must be a positive integer (got {value!r})")
    return result


def parse_non_negative_int(key: str, value: str | int) -> int:
    if isinstance(value, bool) or not _UNSIGNED_RE.match(str(value)):
        raise ConfigurationError(f"{key} must be a non-negative integer (got {value!r})")
    return int(value)


def parse_flag(key: str, value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    if value == '1': return True
    if value == '0': return False
    raise ConfigurationError(f"{key} must be 0 or 1 (got {value!r})")


def parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]

################################################################################
# Generator
################################################################################

@dataclass(frozen=True)
class GeneratorConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    file_count: int = 10
    file_mb: int = 10
    force: bool = False

    def __post_init__(self) -> None:
        parse_positive_int(FILE_COUNT, self.file_count)
        parse_positive_int(FILE_MB, self.file_mb)
        if not isinstance(self.force, bool):
            raise ConfigurationError(f"{FORCE} must be 0 or 1 (got {self.force!r})")

    @property
    def file_bytes(self) -> int:
        return self.file_mb * MEBIBYTE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, data_dir: Path = DEFAULT_DATA_DIR) -> GeneratorConfig:
        environ = os.environ if environ is None else environ
        return cls(
            data_dir=Path(data_dir),
            file_count=parse_positive_int(FILE_COUNT, _lookup(environ, FILE_COUNT)),
            file_mb=parse_positive_int(FILE_MB, _lookup(environ, FILE_MB)),
            force=parse_flag(FORCE, _lookup(environ, FORCE)),
        )

################################################################################
# Hasher
################################################################################

@dataclass(frozen=True)
class HasherConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    results_dir: Path = DEFAULT_RESULTS_DIR
    expected_count: int = 10
    hash_delay_secs: int = 3

    def __post_init__(self) -> None:
        parse_positive_int(EXPECTED_COUNT, self.expected_count)
        parse_non_negative_int(HASH_DELAY_SECS, self.hash_delay_secs)

    @property
    def manifest_path(self) -> Path:
        return self.results_dir / 'hashes.sha256'

    @property
    def summary_path(self) -> Path:
        return self.results_dir / 'summary.txt'

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        data_dir: Path = DEFAULT_DATA_DIR,
        results_dir: Path = DEFAULT_RESULTS_DIR,
    ) -> HasherConfig:
        environ = os.environ if environ is None else environ
        return cls(
            data_dir=Path(data_dir),
            results_dir=Path(results_dir),
            expected_count=parse_positive_int(EXPECTED_COUNT, _lookup(environ, EXPECTED_COUNT)),
            hash_delay_secs=parse_non_negative_int(HASH_DELAY_SECS, _lookup(environ, HASH_DELAY_SECS)),
        )

################################################################################
# Header checker
################################################################################

@dataclass(frozen=True)
class HeaderConfig:
    root: Path = Path('.')
    extensions: List[str] = field(default_factory=lambda: parse_list(DEFAULTS[HEADER_EXTENSIONS]))
    exclude: List[str] = field(default_factory=lambda: parse_list(DEFAULTS[HEADER_EXCLUDE]))
    spdx: str = DEFAULTS[SPDX_LICENSE]
    copyright: str = DEFAULTS[COPYRIGHT_NOTICE]
    max_lines: int = 5

    def __post_init__(self) -> None:
        parse_positive_int('max_lines', self.max_lines)
        if not self.extensions:
            raise ConfigurationError(f"{HEADER_EXTENSIONS} must name at least one extension")
        for ext in self.extensions:
            if not ext.startswith('.'):
                raise ConfigurationError(f"{HEADER_EXTENSIONS} entries must start with '.' (got {ext!r})")
        if not self.spdx.strip() or not self.copyright.strip():
            raise ConfigurationError("license and copyright lines must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, root: Path = Path('.')) -> HeaderConfig:
        environ = os.environ if environ is None else environ
        return cls(
            root=Path(root),
            extensions=parse_list(_lookup(environ, HEADER_EXTENSIONS)),
            exclude=parse_list(_lookup(environ, HEADER_EXCLUDE)),
            spdx=_lookup(environ, SPDX_LICENSE),
            copyright=_lookup(environ, COPYRIGHT_NOTICE),
        )
