import pytest

from hashrun.config import HasherConfig
from hashrun.errors import ConfigurationError, ManifestMismatchError, NoDataError
from hashrun.hasher import NoPacer, hash_files
from hashrun.queued import mark_queued
from hashrun.verify import verify_manifest


@pytest.fixture
def hashed(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    data = tmp_path / 'data'
    data.mkdir()
    for i in (1, 2):
        (data / f'random-0{i}.bin').write_bytes(bytes([i]) * 64)
    config = HasherConfig.from_env({'EXPECTED_COUNT': '2', 'HASH_DELAY_SECS': '0'})
    hash_files(config, pacer=NoPacer())
    return config


def test_fresh_manifest_verifies(tmp_path, hashed):
    records = verify_manifest(hashed.manifest_path)
    assert [r.path.as_posix() for r in records] == ['data/random-01.bin', 'data/random-02.bin']
    assert all(r.size == 64 for r in records)


def test_modified_and_missing_files_fail(tmp_path, hashed):
    (tmp_path / 'data' / 'random-01.bin').write_bytes(b'tampered')
    (tmp_path / 'data' / 'random-02.bin').unlink()

    with pytest.raises(ManifestMismatchError) as excinfo:
        verify_manifest(hashed.manifest_path)
    assert [p.as_posix() for p in excinfo.value.mismatched] == ['data/random-01.bin']
    assert [p.as_posix() for p in excinfo.value.missing] == ['data/random-02.bin']


def test_malformed_manifest(tmp_path):
    manifest = tmp_path / 'hashes.sha256'
    manifest.write_text("not a digest line\n")
    with pytest.raises(ConfigurationError, match=":1:"):
        verify_manifest(manifest)


def test_missing_manifest(tmp_path):
    with pytest.raises(NoDataError, match="hashrun hash"):
        verify_manifest(tmp_path / "results" / "hashes.sha256")


def test_queued_marker(tmp_path):
    from datetime import datetime

    out = mark_queued(tmp_path / 'results', clock=lambda: datetime(2026, 5, 6, 7, 8, 9), hostname='q1')
    assert out.read_text() == "queued test ran on q1 at 2026-05-06 07:08:09\n"
