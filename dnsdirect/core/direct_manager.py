"""Direct resolv.conf management with backup and restore."""
from enum import Enum
from typing import Optional

from loguru import logger

from dnsdirect.core.constants import (
    APP_NAME,
    RESOLV_CONF,
    RESOLV_CONF_MODE,
    backup_conf_path,
    legacy_conf_path,
)
from dnsdirect.core.file_utils import atomic_write_file
from dnsdirect.core.filesystem import DirectFS
from dnsdirect.core.protocols import WholeFileFS
from dnsdirect.core.resolv_conf import is_owned_content, read_resolv, resolv_owner, write_resolv_conf
from dnsdirect.core.resolved import ResolvedRestarter
from dnsdirect.core.types import OSConfig, ResolvOwner, ResolvSnapshot, ResolvState


class BackupAction(Enum):
    """What backing up the current resolv.conf has to do."""

    NOTHING = "nothing"
    DROP_STALE_BACKUP = "drop_stale_backup"
    MOVE_TO_BACKUP = "move_to_backup"


class RestoreAction(Enum):
    """What handing resolv.conf back to its previous owner has to do."""

    NOTHING = "nothing"
    REMOVE_OURS = "remove_ours"
    DISCARD_BACKUP = "discard_backup"
    RESTORE_BACKUP = "restore_backup"


def plan_backup(snapshot: ResolvSnapshot) -> BackupAction:
    """Decide how to protect the current resolv.conf before writing ours."""
    if snapshot.resolv is ResolvState.ABSENT:
        # Nothing to protect; an old backup must not be restored later
        return BackupAction.DROP_STALE_BACKUP
    if snapshot.resolv is ResolvState.OWNED:
        # Never overwrite a backup with our own content
        return BackupAction.NOTHING
    return BackupAction.MOVE_TO_BACKUP


def plan_restore(snapshot: ResolvSnapshot) -> RestoreAction:
    """Decide how to give up resolv.conf."""
    if not snapshot.has_backup:
        if snapshot.resolv is ResolvState.OWNED:
            # There was no resolv.conf before we took over
            return RestoreAction.REMOVE_OURS
        return RestoreAction.NOTHING
    if snapshot.resolv is ResolvState.FOREIGN:
        # Someone else wrote a newer config while our backup existed
        return RestoreAction.DISCARD_BACKUP
    return RestoreAction.RESTORE_BACKUP


class DirectManager:
    """
    OSConfigurator that replaces resolv.conf with a generated file.

    The previous file is kept as a backup and put back on teardown. This way
    of configuring DNS does not react to external changes of the file, so
    callers must call close() before exiting, also on abnormal termination.
    """

    def __init__(
        self,
        fs: Optional[WholeFileFS] = None,
        app_name: str = APP_NAME,
        resolv_conf: str = RESOLV_CONF,
        restarter: Optional[ResolvedRestarter] = None,
    ):
        """
        Initialize the manager.

        Args:
            fs: File system to operate on; the real OS by default
            app_name: Name used for the marker comment and backup file name
            resolv_conf: Absolute path of the managed file
            restarter: systemd-resolved notifier; a default one if None
        """
        self.fs = fs if fs is not None else DirectFS()
        self.app_name = app_name
        self.resolv_conf = resolv_conf
        self.backup_conf = backup_conf_path(resolv_conf, app_name)
        self.legacy_conf = legacy_conf_path(resolv_conf, app_name)
        self.restarter = restarter if restarter is not None else ResolvedRestarter()

    # ── State ────────────────────────────────────────────────

    def _exists(self, name: str) -> bool:
        try:
            self.fs.stat(name)
        except FileNotFoundError:
            return False
        return True

    def _resolv_state(self) -> ResolvState:
        try:
            is_regular = self.fs.stat(self.resolv_conf)
        except FileNotFoundError:
            return ResolvState.ABSENT
        if not is_regular:
            return ResolvState.FOREIGN

        try:
            data = self.fs.read_file(self.resolv_conf)
        except FileNotFoundError:
            return ResolvState.ABSENT
        if is_owned_content(data, self.app_name):
            return ResolvState.OWNED
        return ResolvState.FOREIGN

    def snapshot(self) -> ResolvSnapshot:
        """Observe resolv.conf ownership and backup presence."""
        return ResolvSnapshot(resolv=self._resolv_state(), has_backup=self._exists(self.backup_conf))

    def owned_by_us(self) -> bool:
        """Whether resolv.conf looks like a file we generated."""
        return self._resolv_state() is ResolvState.OWNED

    def owner(self) -> ResolvOwner:
        """Apparent foreign manager of resolv.conf, if it names one."""
        try:
            if not self.fs.stat(self.resolv_conf):
                return ResolvOwner.UNKNOWN
            return resolv_owner(self.fs.read_file(self.resolv_conf))
        except FileNotFoundError:
            return ResolvOwner.UNKNOWN

    def _remove_if_exists(self, name: str) -> None:
        try:
            self.fs.remove(name)
        except FileNotFoundError:
            pass

    # ── Transitions ──────────────────────────────────────────

    def backup_config(self) -> BackupAction:
        """Move a foreign resolv.conf aside before we write ours."""
        action = plan_backup(self.snapshot())
        if action is BackupAction.DROP_STALE_BACKUP:
            self._remove_if_exists(self.backup_conf)
        elif action is BackupAction.MOVE_TO_BACKUP:
            logger.info(f"Backing up {self.resolv_conf} to {self.backup_conf}")
            self.fs.rename(self.resolv_conf, self.backup_conf)
        return action

    def restore_backup(self) -> RestoreAction:
        """Hand resolv.conf back to whatever was there before us."""
        action = plan_restore(self.snapshot())
        if action is RestoreAction.DISCARD_BACKUP:
            logger.warning(f"{self.resolv_conf} was replaced by another program, discarding {self.backup_conf}")
            self._remove_if_exists(self.backup_conf)
        elif action is RestoreAction.RESTORE_BACKUP:
            logger.info(f"Restoring {self.resolv_conf} from {self.backup_conf}")
            self.fs.rename(self.backup_conf, self.resolv_conf)
        elif action is RestoreAction.REMOVE_OURS:
            logger.info(f"Removing generated {self.resolv_conf}, there was none before")
            self._remove_if_exists(self.resolv_conf)
        return action

    # ── OSConfigurator ───────────────────────────────────────

    def set_dns(self, config: OSConfig) -> None:
        """
        Apply config to resolv.conf.

        The zero config restores the previous file instead.

        Raises:
            OSError: If a file operation fails
        """
        if config.is_zero():
            self.restore_backup()
        else:
            self.backup_config()
            content = write_resolv_conf(config.nameservers, config.search_domains, self.app_name)
            atomic_write_file(self.fs, self.resolv_conf, content.encode("utf-8"), RESOLV_CONF_MODE)
            logger.info(
                f"Wrote {self.resolv_conf}: nameservers={[str(ns) for ns in config.nameservers]} "
                f"search={config.search_domains}"
            )

        # Best-effort fallback in case resolved was managing the file after all
        self.restarter.restart_if_needed()

    def supports_split_dns(self) -> bool:
        return False

    def get_base_config(self) -> OSConfig:
        """
        Return the configuration that applies without us.

        Reads the backup while resolv.conf is ours, resolv.conf otherwise. A
        missing file means an empty configuration.

        Raises:
            ResolvParseError: If the file holds an invalid address or domain
        """
        path = self.backup_conf if self.owned_by_us() else self.resolv_conf
        try:
            data = self.fs.read_file(path)
        except FileNotFoundError:
            logger.debug(f"{path} does not exist, base config is empty")
            return OSConfig()
        return read_resolv(data.decode("utf-8", errors="replace"))

    def close(self) -> None:
        """Restore the previous resolv.conf. Safe to call more than once."""
        # Side file older releases symlinked resolv.conf to
        try:
            self._remove_if_exists(self.legacy_conf)
        except OSError as e:
            logger.debug(f"Could not remove legacy {self.legacy_conf}: {e}")

        action = self.restore_backup()
        if action in (RestoreAction.RESTORE_BACKUP, RestoreAction.REMOVE_OURS):
            self.restarter.restart_if_needed()

    def __enter__(self) -> "DirectManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
