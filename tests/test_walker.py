"""Tests for wavconvert.core.walker."""

import os
from pathlib import Path

import pytest

from wavconvert.core import walker as walker_module
from wavconvert.core.walker import TreeWalker, walk
from wavconvert.errors import ErrorCode, RootUnreadableError, SubdirectoryUnreadableError


@pytest.fixture
def audio_dir(tmp_path):
    """Create a temp directory with fake audio files."""
    (tmp_path / "a.wav").write_bytes(b"\x00" * 100)
    (tmp_path / "b.txt").write_bytes(b"not audio")
    (tmp_path / "UPPER.WAV").write_bytes(b"\x00" * 10)
    (tmp_path / "noext").write_bytes(b"\x00")
    (tmp_path / ".wav").write_bytes(b"\x00")

    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.wav").write_bytes(b"\x00" * 150)
    (sub / "notes.wav.bak").write_bytes(b"\x00")
    return tmp_path


def _recursive_reference(root: Path) -> list[Path]:
    found: list[Path] = []
    for entry in os.scandir(root):
        if entry.is_dir(follow_symlinks=False):
            found.extend(_recursive_reference(Path(entry.path)))
        elif Path(entry.path).suffix == ".wav":
            found.append(Path(entry.path))
    return found


class TestTreeWalker:
    def test_finds_only_wav_files(self, audio_dir):
        results = walk(audio_dir)
        assert set(results) == {audio_dir / "a.wav", audio_dir / "sub" / "c.wav"}
        assert len(results) == 2

    def test_extension_match_is_case_sensitive(self, audio_dir):
        names = {p.name for p in walk(audio_dir)}
        assert "UPPER.WAV" not in names

    def test_dotfile_has_no_extension(self, audio_dir):
        names = {p.name for p in walk(audio_dir)}
        assert ".wav" not in names

    def test_empty_dir(self, tmp_path):
        assert walk(tmp_path) == []

    def test_walk_iter_matches_walk(self, audio_dir):
        walker = TreeWalker(audio_dir)
        assert list(walker.walk_iter()) == walker.walk()

    def test_depth_first_listing_order(self, tmp_path):
        for rel in ["x.wav", "d1/y.wav", "d1/d2/z.wav", "d1/w.wav", "d3/v.wav", "u.wav"]:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
        assert walk(tmp_path) == _recursive_reference(tmp_path)

    def test_deep_tree(self, tmp_path):
        current = tmp_path
        for i in range(200):
            current = current / f"d{i}"
        current.mkdir(parents=True)
        (current / "deep.wav").write_bytes(b"")
        assert walk(tmp_path) == [current / "deep.wav"]

    def test_custom_extension(self, audio_dir):
        (audio_dir / "e.aif").write_bytes(b"")
        assert walk(audio_dir, extension="aif") == [audio_dir / "e.aif"]

    def test_directory_symlink_not_followed(self, audio_dir):
        os.symlink(audio_dir, audio_dir / "sub" / "loop", target_is_directory=True)
        assert len(walk(audio_dir)) == 2


class TestWalkErrors:
    def test_missing_root(self, tmp_path):
        with pytest.raises(RootUnreadableError) as excinfo:
            walk(tmp_path / "missing")
        assert excinfo.value.code is ErrorCode.ROOT_UNREADABLE
        assert excinfo.value.path == tmp_path / "missing"

    def test_file_as_root(self, audio_dir):
        with pytest.raises(RootUnreadableError):
            walk(audio_dir / "a.wav")

    @pytest.fixture
    def locked_sub(self, audio_dir, monkeypatch):
        locked = audio_dir / "locked"
        locked.mkdir()
        (locked / "hidden.wav").write_bytes(b"")
        real_list_dir = walker_module._list_dir

        def fake_list_dir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_list_dir(path)

        monkeypatch.setattr(walker_module, "_list_dir", fake_list_dir)
        return locked

    def test_unreadable_subdirectory_is_fatal_by_default(self, audio_dir, locked_sub):
        with pytest.raises(SubdirectoryUnreadableError) as excinfo:
            walk(audio_dir)
        assert excinfo.value.path == locked_sub

    def test_unreadable_subdirectory_skipped_when_lenient(self, audio_dir, locked_sub, caplog):
        results = walk(audio_dir, strict=False)
        assert set(results) == {audio_dir / "a.wav", audio_dir / "sub" / "c.wav"}
        assert "Skipping unreadable directory" in caplog.text
