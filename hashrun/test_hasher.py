from datetime import datetime
import hashlib
import re

import pytest

from hashrun.config import HasherConfig
from hashrun.errors import CountMismatchError, DigestToolUnavailableError, NoDataError
from hashrun.hasher import SleepPacer, hash_files
from hashrun.io import digest_factory

WHEN = datetime(2026, 1, 2, 3, 4, 5)
LINE_RE = re.compile(r'^[0-9a-f]{64}  \S+$')


class RecordingPacer:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def data_dir(tmp_path):
    data = tmp_path / 'data'
    data.mkdir()
    (data / 'random-01.bin').write_bytes(b'a' * 1000)
    (data / 'random-02.bin').write_bytes(b'b' * 24)
    (data / 'random-03.bin').write_bytes(b'')
    return data


def make_config(tmp_path, data_dir, expected=3):
    return HasherConfig(data_dir=data_dir, results_dir=tmp_path / 'results', expected_count=expected, hash_delay_secs=0)


def test_writes_manifest_and_summary(tmp_path, data_dir):
    config = make_config(tmp_path, data_dir)
    pacer = RecordingPacer()
    run = hash_files(config, pacer=pacer, clock=lambda: WHEN, hostname='node1')

    lines = config.manifest_path.read_text().splitlines()
    assert len(lines) == 3
    assert all(LINE_RE.match(line) for line in lines)
    first = data_dir / 'random-01.bin'
    assert lines[0] == f"{hashlib.sha256(b'a' * 1000).hexdigest()}  {first.as_posix()}"

    summary = config.summary_path.read_text().splitlines()
    assert summary[0] == "hash run on node1 at 2026-01-02 03:04:05"
    assert summary[1] == "files: 3"
    assert summary[2] == f"hashing {first.as_posix()} (1000 bytes)"
    assert summary[-1] == "total_bytes: 1024"
    assert run.total_bytes == 1024

    # One pause per file, including after the last one
    assert pacer.calls == 3


def test_processes_files_in_name_order(tmp_path, data_dir):
    (data_dir / 'random-03.bin').unlink()
    (data_dir / 'random-00.bin').write_bytes(b'z')
    run = hash_files(make_config(tmp_path, data_dir), pacer=RecordingPacer())
    assert [r.path.name for r in run.records] == ['random-00.bin', 'random-01.bin', 'random-02.bin']


def test_no_data(tmp_path):
    config = make_config(tmp_path, tmp_path / 'missing')
    with pytest.raises(NoDataError, match="generate"):
        hash_files(config, pacer=RecordingPacer())
    assert not config.results_dir.exists()


@pytest.mark.parametrize("expected", [2, 4])
def test_count_mismatch_leaves_results_untouched(tmp_path, data_dir, expected):
    config = make_config(tmp_path, data_dir, expected=expected)
    config.results_dir.mkdir()
    config.summary_path.write_text("previous summary\n")
    config.manifest_path.write_text("previous manifest\n")

    pacer = RecordingPacer()
    with pytest.raises(CountMismatchError) as excinfo:
        hash_files(config, pacer=pacer)

    assert (excinfo.value.expected, excinfo.value.actual) == (expected, 3)
    assert str(excinfo.value) == f"expected {expected} data files, found 3"
    assert config.summary_path.read_text() == "previous summary\n"
    assert config.manifest_path.read_text() == "previous manifest\n"
    assert pacer.calls == 0


def test_rerun_produces_identical_manifest(tmp_path, data_dir):
    config = make_config(tmp_path, data_dir)
    hash_files(config, pacer=RecordingPacer(), clock=lambda: WHEN)
    first = config.manifest_path.read_bytes()
    hash_files(config, pacer=RecordingPacer(), clock=lambda: datetime(2027, 1, 1))
    assert config.manifest_path.read_bytes() == first
    assert config.summary_path.read_text().count("total_bytes:") == 1


def test_sleep_pacer():
    slept = []
    SleepPacer(3, sleep=slept.append)()
    SleepPacer(0, sleep=slept.append)()
    assert slept == [3]


def test_unknown_digest_algorithm():
    with pytest.raises(DigestToolUnavailableError):
        digest_factory('no-such-digest')


def test_missing_digest_algorithm_fails_before_writing_results(tmp_path, data_dir, monkeypatch):
    import hashrun.io

    def no_digest(name, *args, **kwargs):
        raise ValueError(f"unsupported hash type {name}")

    monkeypatch.setattr(hashrun.io.hashlib, 'new', no_digest)
    config = make_config(tmp_path, data_dir)
    pacer = RecordingPacer()

    with pytest.raises(DigestToolUnavailableError, match="sha256"):
        hash_files(config, pacer=pacer)

    assert not config.results_dir.exists()
    assert pacer.calls == 0
