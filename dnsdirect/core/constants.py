import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")

# Application identity, also used in the resolv.conf marker and backup names
APP_NAME = os.getenv("DNSDIRECT_APP_NAME", "dnsdirect")

# Managed resolver file
RESOLV_CONF = os.getenv("DNSDIRECT_RESOLV_CONF", "/etc/resolv.conf")
RESOLV_CONF_MODE = 0o644


def backup_conf_path(resolv_conf: str = RESOLV_CONF, app_name: str = APP_NAME) -> str:
    """Path of the pre-takeover backup, in the directory of the managed file."""
    return os.path.join(os.path.dirname(resolv_conf), f"resolv.pre-{app_name}-backup.conf")


def legacy_conf_path(resolv_conf: str = RESOLV_CONF, app_name: str = APP_NAME) -> str:
    """Path of the side file older releases symlinked resolv.conf to."""
    return os.path.join(os.path.dirname(resolv_conf), f"resolv.{app_name}.conf")


# systemd-resolved
RESOLVED_SERVICE = "systemd-resolved.service"
SYSTEMCTL_TIMEOUT = float(os.getenv("DNSDIRECT_SYSTEMCTL_TIMEOUT", "10"))

# Log directory: /tmp or TMPDIR env var
TMPDIR = os.environ.get("TMPDIR", "/tmp")
LOG_DIR = os.getenv("DNSDIRECT_LOG_DIR", os.path.join(TMPDIR, APP_NAME))
LOG_FILE = os.path.join(LOG_DIR, f"{APP_NAME}.log")

# Configuration directory
CONFIG_DIR = os.getenv("DNSDIRECT_CONFIG_DIR", os.path.expanduser(f"~/.config/{APP_NAME}"))
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
