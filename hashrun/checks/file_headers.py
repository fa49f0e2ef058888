"""
* [x] Check for Missing Copyright/License Headers: every source file must carry the
      SPDX license identifier and the copyright notice within its first few lines.
* [x] Skip build output directories (e.g. target/) and anything matching the
      configured exclude patterns.
"""
from __future__ import annotations

from pathlib import Path
from typing import List
import logging

from git import Repo, InvalidGitRepositoryError, NoSuchPathError

from hashrun.base import Scope
from hashrun.checks.base import FileCheck, IssueType, IssueList
from hashrun.config import HeaderConfig
from hashrun.io import FileSet, read_head, read_ignore_file, walk_files


E_MISSING_SPDX = IssueType(
    "4f0b3c52-8d1e-4a67-9b0e-2f6c1d7a9e31",
    "Missing '{expected}' within the first {max_lines} lines.",
)

E_MISSING_COPYRIGHT = IssueType(
    "c2a9e7d4-5b36-4f18-8e0a-71d3b6f4a052",
    "Missing '{expected}' within the first {max_lines} lines.",
)

E_HEADER_READ_ERROR = IssueType(
    "9d64f1a8-3c27-4e5b-a1f9-0b8e2d7c6a43",
    "Could not read header: {error}.",
)


class LicenseHeaderCheck(FileCheck):
    """Requires the license identifier and copyright notice near the top of a file."""

    def __init__(self, spdx: str, copyright: str, max_lines: int = 5) -> None:
        self.spdx = spdx
        self.copyright = copyright
        self.max_lines = max_lines

    def check(self, path: Path) -> IssueList:
        issues = IssueList()
        try:
            header = '\n'.join(read_head(path, self.max_lines))
        except OSError as e:
            issues.append(E_HEADER_READ_ERROR.make(error=e).at(path))
            return issues

        if self.spdx not in header:
            issues.append(E_MISSING_SPDX.make(expected=self.spdx, max_lines=self.max_lines).at(path))
        if self.copyright not in header:
            issues.append(E_MISSING_COPYRIGHT.make(expected=self.copyright, max_lines=self.max_lines).at(path))
        return issues


def find_repo_root(path: Path) -> Path:
    """Returns the enclosing git working tree, or `path` itself outside of one."""
    try:
        repo = Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return path.resolve()
    with Scope() as scope:
        scope.defer(lambda: repo.close())
        if repo.working_tree_dir is None:
            return path.resolve()
        return Path(repo.working_tree_dir).resolve()


def check_headers(config: HeaderConfig) -> List[Path]:
    """
    Returns the source files under the repository root that lack a compliant
    header, as sorted paths relative to that root.
    """
    root = find_repo_root(config.root)
    logging.debug(f"Checking headers under {root}")

    ignore = read_ignore_file(root / ".gitignore")
    file_set = FileSet(root, [".git/"] + ignore + list(config.exclude))
    check = LicenseHeaderCheck(config.spdx, config.copyright, config.max_lines)

    missing: List[Path] = []
    for path in walk_files(root, predicate=file_set):
        if path.suffix not in config.extensions:
            continue
        issues = check.check(path)
        for issue in issues:
            logging.debug(f"{issue.location.path} > {issue.message}")
        if issues:
            missing.append(path.relative_to(root))

    return sorted(missing)


def expected_header(config: HeaderConfig, comment: str = '//') -> List[str]:
    return [f"{comment} {config.spdx}", f"{comment} {config.copyright}"]
