"""
Errors raised by the pipeline commands.

Every error is fatal to the invoking command: nothing is retried, and the CLI
turns any HashrunError into a single line on stderr and exit status 1.
"""
from pathlib import Path
from typing import List


class HashrunError(Exception):
    pass


class ConfigurationError(HashrunError):
    """A configuration value is missing its required shape (e.g. not a positive integer)."""


class PreconditionError(HashrunError):
    """Proceeding would destroy existing output and no override was given."""


class NoDataError(HashrunError):
    """The data directory holds no generated files."""


class CountMismatchError(HashrunError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} data files, found {actual}")


class DigestToolUnavailableError(HashrunError):
    """The requested digest algorithm is not provided by this interpreter."""


class ManifestMismatchError(HashrunError):
    def __init__(self, missing: List[Path], mismatched: List[Path]) -> None:
        self.missing = missing
        self.mismatched = mismatched
        parts = []
        if missing:
            parts.append("missing: " + ", ".join(p.as_posix() for p in missing))
        if mismatched:
            parts.append("digest mismatch: " + ", ".join(p.as_posix() for p in mismatched))
        super().__init__("manifest verification failed (" + "; ".join(parts) + ")")
