from pathlib import Path
import shutil

import pytest

from hashrun.checks.file_headers import (
    E_HEADER_READ_ERROR, E_MISSING_COPYRIGHT, E_MISSING_SPDX, LicenseHeaderCheck, check_headers, find_repo_root,
)
from hashrun.config import HeaderConfig

SPDX = 'SPDX-License-Identifier: AGPL-3.0-only'
COPYRIGHT = 'Copyright (C) 2026 Alex Sizykh'
GOOD = f"// {SPDX}\n// {COPYRIGHT}\n\nfn main() {{}}\n"


def write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def test_check_reports_each_missing_line(tmp_path):
    check = LicenseHeaderCheck(SPDX, COPYRIGHT)

    good = tmp_path / 'good.rs'
    write(good, GOOD)
    assert len(check.check(good)) == 0

    bare = tmp_path / 'bare.rs'
    write(bare, "fn main() {}\n")
    assert [i.issue_type for i in check.check(bare)] == [E_MISSING_SPDX, E_MISSING_COPYRIGHT]

    late = tmp_path / 'late.rs'
    write(late, "\n" * 5 + GOOD)
    assert len(check.check(late)) == 2


def test_check_headers_lists_relative_paths(tmp_path):
    write(tmp_path / 'src' / 'main.rs', GOOD)
    write(tmp_path / 'src' / 'lib.rs', f"// {SPDX}\n")
    write(tmp_path / 'cli' / 'src' / 'main.rs', "fn main() {}\n")
    write(tmp_path / 'target' / 'debug' / 'build.rs', "generated\n")
    write(tmp_path / 'cli' / 'target' / 'out.rs', "generated\n")
    write(tmp_path / 'README.md', "no header\n")

    missing = check_headers(HeaderConfig(root=tmp_path))
    assert missing == [Path('cli/src/main.rs'), Path('src/lib.rs')]


def test_check_headers_custom_extensions(tmp_path):
    write(tmp_path / 'tool.py', "print('hi')\n")
    write(tmp_path / 'main.rs', GOOD)
    missing = check_headers(HeaderConfig(root=tmp_path, extensions=['.py', '.rs']))
    assert missing == [Path('tool.py')]


def test_unreadable_file_is_reported(tmp_path):
    unreadable = tmp_path / "x.rs"
    unreadable.mkdir()

    issues = list(LicenseHeaderCheck(SPDX, COPYRIGHT).check(unreadable))
    assert [i.issue_type for i in issues] == [E_HEADER_READ_ERROR]
    assert issues[0].location.path == unreadable


def test_gitignored_files_are_skipped(tmp_path):
    write(tmp_path / ".gitignore", "# generated sources\ngen/\n*.tmp.rs\n")
    write(tmp_path / "gen" / "bindings.rs", "generated\n")
    write(tmp_path / "src" / "scratch.tmp.rs", "fn f() {}\n")
    write(tmp_path / "src" / "lib.rs", "fn f() {}\n")

    assert check_headers(HeaderConfig(root=tmp_path)) == [Path("src/lib.rs")]


@pytest.mark.skipif(shutil.which('git') is None, reason="git not installed")
def test_repo_root_is_the_git_working_tree(tmp_path):
    from git import Repo

    Repo.init(tmp_path).close()
    nested = tmp_path / 'scripts'
    nested.mkdir()
    write(tmp_path / 'src' / 'lib.rs', "fn f() {}\n")

    assert find_repo_root(nested) == tmp_path.resolve()
    assert check_headers(HeaderConfig(root=nested)) == [Path('src/lib.rs')]
