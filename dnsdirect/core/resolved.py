"""Best-effort systemd-resolved notification."""
import os
import platform
import shutil
import subprocess

from loguru import logger

from dnsdirect.core.constants import RESOLVED_SERVICE, SYSTEMCTL_TIMEOUT


def is_resolved_running() -> bool:
    """
    Check whether systemd-resolved is running, even if it does not manage resolv.conf.

    Returns:
        True if `systemctl is-active` reports the service active
    """
    if platform.system() != "Linux":
        return False

    # systemd-resolved is never installed without systemd
    systemctl = shutil.which("systemctl")
    if not systemctl:
        return False

    # is-active exits with code 3 if the service is not active
    try:
        result = subprocess.run(
            [systemctl, "is-active", RESOLVED_SERVICE],
            capture_output=True,
            timeout=SYSTEMCTL_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"systemctl is-active failed: {e}")
        return False
    return result.returncode == 0


def running_as_gui_desktop_user() -> bool:
    """
    Check whether we run as a regular user inside a desktop session.

    Restarting a service there makes PolicyKit pop up a password dialog.
    """
    return os.geteuid() != 0 and bool(os.environ.get("DISPLAY"))


class ResolvedRestarter:
    """Restarts systemd-resolved after resolv.conf changed under it."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def restart_if_needed(self) -> None:
        """
        Fire-and-forget restart of systemd-resolved.

        We may have taken over a configuration managed by resolved; on
        restart it notices and uses ours. The outcome is never reported:
        system DNS correctness does not depend on it.
        """
        if not self.enabled:
            return
        if not is_resolved_running() or running_as_gui_desktop_user():
            return

        systemctl = shutil.which("systemctl") or "systemctl"
        try:
            result = subprocess.run(
                [systemctl, "restart", RESOLVED_SERVICE],
                capture_output=True,
                timeout=SYSTEMCTL_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Ignoring failed restart of {RESOLVED_SERVICE}: {e}")
            return

        if result.returncode != 0:
            logger.debug(f"Ignoring {RESOLVED_SERVICE} restart exit status {result.returncode}")
        else:
            logger.info(f"Restarted {RESOLVED_SERVICE}")
