from pathlib import Path
from typing import List

DATA_PREFIX = 'random-'
DATA_SUFFIX = '.bin'
DATA_PATTERN = f'{DATA_PREFIX}*{DATA_SUFFIX}'

MIN_INDEX_WIDTH = 2


def index_width(count: int) -> int:
    """Zero-padding width for a set of `count` files; never narrower than two digits."""
    return max(MIN_INDEX_WIDTH, len(str(count)))


def data_file_name(index: int, count: int) -> str:
    assert 1 <= index <= count, f"Index {index} out of range 1..{count}"
    return f"{DATA_PREFIX}{index:0{index_width(count)}d}{DATA_SUFFIX}"


def discover(data_dir: Path) -> List[Path]:
    """
    Returns the data files in `data_dir`, sorted by name.

    Zero-padded indices make name order equal to numeric order within a set.
    """
    if not data_dir.is_dir():
        return []
    return sorted((p for p in data_dir.glob(DATA_PATTERN) if p.is_file()), key=lambda p: p.name)
