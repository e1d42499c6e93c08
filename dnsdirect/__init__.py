"""dnsdirect - direct /etc/resolv.conf management with backup and restore."""

__version__ = "0.1.0"
__author__ = "dnsdirect contributors"
__description__ = "Take over resolv.conf when no resolver daemon is available, and give it back"

from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.types import OSConfig

__all__ = ["DirectManager", "OSConfig", "__version__"]
