from typing import Callable, Generator, List

import hashlib
import os
from pathlib import Path
import logging
import pathspec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from hashrun.errors import DigestToolUnavailableError

CHUNK_SIZE = 1 << 20

##################################################################################################
# Digests
##################################################################################################

def digest_factory(algorithm: str = 'sha256') -> Callable[[], 'hashlib._Hash']:
    """
    Returns a constructor for fresh digest objects of `algorithm`.

    Raises DigestToolUnavailableError when the interpreter cannot provide it,
    so callers can fail before any side effect.
    """
    try:
        hashlib.new(algorithm)
    except ValueError as e:
        raise DigestToolUnavailableError(f"{algorithm} digest is not available: {e}") from e
    return lambda: hashlib.new(algorithm)


def hash_file(path: Path, new_digest: Callable[[], 'hashlib._Hash']) -> str:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    h = new_digest()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            h.update(chunk)
    return h.hexdigest().lower()

##################################################################################################
# File Reading/Writing
##################################################################################################

def write_random_file(path: Path, blocks: int, block_size: int = CHUNK_SIZE) -> None:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    assert blocks > 0, f"Expected a positive block count, got {blocks}"
    with open(path, 'wb') as f:
        for _ in range(blocks):
            f.write(os.urandom(block_size))


def delete_if_exists(path: Path) -> None:
    if path.exists():
        logging.debug(f"Deleting {path}")
        path.unlink()


def truncate(path: Path) -> None:
    """Creates `path` empty, discarding previous content."""
    if not path.parent.exists():
        logging.debug(f"Creating directory {path.parent}")
        path.parent.mkdir(parents=True)
    with open(path, 'wb'):
        pass


def append_line(path: Path, line: str) -> None:
    assert '\n' not in line, f"Line must not contain a newline: {line!r}"
    with open(path, 'a', encoding='utf-8', newline='\n') as f:
        f.write(line + '\n')


def write_text_file(path: Path, content: str) -> None:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    assert '\r\n' not in content, "Windows line endings detected"

    if not path.parent.exists():
        logging.debug(f"Creating directory {path.parent}")
        path.parent.mkdir(parents=True)

    logging.debug(f'Writing to {path}')
    with open(path, 'wb') as f:
        f.write(content.encode('utf-8'))


def read_head(path: Path, max_lines: int) -> List[str]:
    lines: List[str] = []
    with open(path, 'rt', encoding='utf-8', errors='replace') as f:
        for line in f:
            lines.append(line.rstrip('\n'))
            if len(lines) >= max_lines:
                break
    return lines

##################################################################################################
# Walking
##################################################################################################

def walk_files(path: Path, predicate: Callable[[Path], bool] | None = None) -> Generator[Path, None, None]:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    if predicate is not None and not predicate(path):
        return

    if path.is_symlink():
        return

    if path.is_file():
        yield path

    elif path.is_dir():
        for subfile in sorted(os.listdir(path)):
            yield from walk_files(path / subfile, predicate=predicate)


class FileSet:
    """Gitignore-style exclusion rules anchored at `base_path`."""

    def __init__(self, base_path: Path, negative: List[str]):
        self.base_path = base_path
        self.path_spec = pathspec.PathSpec.from_lines(GitWildMatchPattern, negative)

    def excludes(self, path: Path) -> bool:
        if path == self.base_path:
            return False
        rel_path = path.relative_to(self.base_path).as_posix()
        if path.is_dir():
            rel_path += '/'
        return self.path_spec.match_file(rel_path)

    def __call__(self, path: Path) -> bool:
        return not self.excludes(path)


def read_ignore_file(path: Path) -> List[str]:
    """Returns the patterns of a .gitignore-style file, or nothing if it is absent."""
    if not path.is_file():
        return []
    with open(path, 'rt', encoding='utf-8') as f:
        ignore = [line.strip() for line in f]
    return [i for i in ignore if i and not i.startswith('#')]
