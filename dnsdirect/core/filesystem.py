"""Whole-file file system implementations for the direct manager."""
import errno
import os
import stat
from typing import Dict, Optional, Set


def _not_found(name: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), name)


def _is_a_directory(name: str) -> IsADirectoryError:
    return IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), name)


class DirectFS:
    """WholeFileFS implemented directly on the OS."""

    def __init__(self, prefix: str = ""):
        """
        Initialize the file system.

        Args:
            prefix: Path prefix every absolute name is placed under. Typically
                a temporary directory in tests, empty for the real root.
        """
        self.prefix = prefix

    def path(self, name: str) -> str:
        if not self.prefix:
            return name
        return os.path.join(self.prefix, name.lstrip("/"))

    def stat(self, name: str) -> bool:
        return stat.S_ISREG(os.stat(self.path(name)).st_mode)

    def read_file(self, name: str) -> bytes:
        with open(self.path(name), "rb") as f:
            return f.read()

    def write_file(self, name: str, contents: bytes, perm: int) -> None:
        fd = os.open(self.path(name), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            f.write(contents)

    def rename(self, old_name: str, new_name: str) -> None:
        os.rename(self.path(old_name), self.path(new_name))

    def remove(self, name: str) -> None:
        os.remove(self.path(name))

    def __repr__(self):
        return f"DirectFS(prefix={self.prefix!r})"


class MemoryFS:
    """In-memory WholeFileFS for deterministic tests and dry runs."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.modes: Dict[str, int] = {name: 0o644 for name in self.files}
        self.dirs: Set[str] = set()

    def mkdir(self, name: str) -> None:
        """Create a non-regular entry at name."""
        self.dirs.add(name)

    def stat(self, name: str) -> bool:
        if name in self.files:
            return True
        if name in self.dirs:
            return False
        raise _not_found(name)

    def read_file(self, name: str) -> bytes:
        if name in self.dirs:
            raise _is_a_directory(name)
        try:
            return self.files[name]
        except KeyError:
            raise _not_found(name) from None

    def write_file(self, name: str, contents: bytes, perm: int) -> None:
        if name in self.dirs:
            raise _is_a_directory(name)
        if name not in self.files:
            self.modes[name] = perm
        self.files[name] = bytes(contents)

    def rename(self, old_name: str, new_name: str) -> None:
        if old_name not in self.files:
            raise _not_found(old_name)
        if new_name in self.dirs:
            raise _is_a_directory(new_name)
        self.files[new_name] = self.files.pop(old_name)
        self.modes[new_name] = self.modes.pop(old_name, 0o644)

    def remove(self, name: str) -> None:
        if name in self.dirs:
            self.dirs.remove(name)
            return
        if name not in self.files:
            raise _not_found(name)
        del self.files[name]
        self.modes.pop(name, None)
