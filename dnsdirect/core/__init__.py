"""Core functionality for dnsdirect."""

from dnsdirect.core.direct_manager import DirectManager
from dnsdirect.core.filesystem import DirectFS, MemoryFS
from dnsdirect.core.types import OSConfig

__all__ = ["DirectFS", "DirectManager", "MemoryFS", "OSConfig"]
