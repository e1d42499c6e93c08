"""Tests for the whole-file file systems."""

import os
import stat

import pytest

from dnsdirect.core.filesystem import DirectFS, MemoryFS


@pytest.fixture
def direct_fs(tmp_path):
    (tmp_path / "etc").mkdir()
    return DirectFS(str(tmp_path))


class TestDirectFS:
    def test_path_joins_prefix(self, tmp_path):
        fs = DirectFS(str(tmp_path))
        assert fs.path("/etc/resolv.conf") == os.path.join(str(tmp_path), "etc", "resolv.conf")

    def test_path_without_prefix(self):
        assert DirectFS().path("/etc/resolv.conf") == "/etc/resolv.conf"

    def test_write_read_stat(self, direct_fs, tmp_path):
        direct_fs.write_file("/etc/resolv.conf", b"nameserver 1.1.1.1\n", 0o600)

        assert direct_fs.read_file("/etc/resolv.conf") == b"nameserver 1.1.1.1\n"
        assert direct_fs.stat("/etc/resolv.conf") is True
        mode = stat.S_IMODE(os.stat(tmp_path / "etc" / "resolv.conf").st_mode)
        assert mode & 0o077 == 0

    def test_stat_directory_is_not_regular(self, direct_fs):
        assert direct_fs.stat("/etc") is False

    def test_missing_file(self, direct_fs):
        with pytest.raises(FileNotFoundError):
            direct_fs.stat("/etc/resolv.conf")
        with pytest.raises(FileNotFoundError):
            direct_fs.read_file("/etc/resolv.conf")
        with pytest.raises(FileNotFoundError):
            direct_fs.remove("/etc/resolv.conf")

    def test_rename_and_remove(self, direct_fs, tmp_path):
        direct_fs.write_file("/etc/a", b"a", 0o644)
        direct_fs.rename("/etc/a", "/etc/b")

        assert not (tmp_path / "etc" / "a").exists()
        assert (tmp_path / "etc" / "b").read_bytes() == b"a"

        direct_fs.remove("/etc/b")
        assert not (tmp_path / "etc" / "b").exists()


class TestMemoryFS:
    def test_initial_files(self):
        fs = MemoryFS({"/etc/resolv.conf": b"nameserver 8.8.8.8\n"})
        assert fs.stat("/etc/resolv.conf") is True
        assert fs.read_file("/etc/resolv.conf") == b"nameserver 8.8.8.8\n"

    def test_missing_file_raises_like_os(self):
        fs = MemoryFS()
        for op in (fs.stat, fs.read_file, fs.remove):
            with pytest.raises(FileNotFoundError):
                op("/etc/resolv.conf")
        with pytest.raises(FileNotFoundError):
            fs.rename("/etc/resolv.conf", "/etc/other")

    def test_write_keeps_mode_of_existing_file(self):
        fs = MemoryFS()
        fs.write_file("/etc/resolv.conf", b"one", 0o600)
        fs.write_file("/etc/resolv.conf", b"two", 0o644)
        assert fs.files["/etc/resolv.conf"] == b"two"
        assert fs.modes["/etc/resolv.conf"] == 0o600

    def test_rename_overwrites_target(self):
        fs = MemoryFS({"/a": b"a", "/b": b"b"})
        fs.rename("/a", "/b")
        assert fs.files == {"/b": b"a"}

    def test_directory_entries(self):
        fs = MemoryFS()
        fs.mkdir("/etc/resolv.conf")
        assert fs.stat("/etc/resolv.conf") is False
        with pytest.raises(IsADirectoryError):
            fs.read_file("/etc/resolv.conf")
        with pytest.raises(IsADirectoryError):
            fs.write_file("/etc/resolv.conf", b"x", 0o644)


def test_implementations_satisfy_protocol():
    from dnsdirect.core.protocols import WholeFileFS

    assert isinstance(DirectFS(), WholeFileFS)
    assert isinstance(MemoryFS(), WholeFileFS)
