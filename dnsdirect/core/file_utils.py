"""File utilities for atomic writes over a WholeFileFS."""
import secrets

from loguru import logger

from dnsdirect.core.protocols import WholeFileFS

TEMP_SUFFIX_BYTES = 12


class AtomicWriteError(OSError):
    """Raised when the temporary file of an atomic write cannot be produced."""

    pass


def atomic_write_file(fs: WholeFileFS, filename: str, data: bytes, perm: int = 0o644) -> None:
    """
    Atomically replace a file's contents.

    Writes to "<filename>.<random hex>.tmp" and renames it onto filename, so
    readers see either the old or the new contents, never a partial file.

    Args:
        fs: File system to write through
        filename: Absolute target path
        data: New contents
        perm: Permission bits for the new file

    Raises:
        AtomicWriteError: If no random suffix can be generated or the
            temporary file cannot be written. The target is untouched.
        OSError: If the final rename fails.
    """
    try:
        suffix = secrets.token_hex(TEMP_SUFFIX_BYTES)
    except (OSError, NotImplementedError) as e:
        raise AtomicWriteError(f"atomic_write_file: random source unavailable: {e}") from e

    temp_path = f"{filename}.{suffix}.tmp"
    try:
        try:
            fs.write_file(temp_path, data, perm)
        except OSError as e:
            logger.error(f"Failed to write temporary file {temp_path}: {e}")
            raise AtomicWriteError(f"atomic_write_file: {e}") from e
        fs.rename(temp_path, filename)
    finally:
        _remove_quietly(fs, temp_path)


def _remove_quietly(fs: WholeFileFS, path: str) -> None:
    """Best-effort removal; the rename normally consumed the file already."""
    try:
        fs.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug(f"Could not remove {path}: {e}")
