"""lanbar - LAN device discovery for status bars."""

from lanbar.version.lanbar_version import LANBAR_VERSION, Version

__version__ = str(LANBAR_VERSION)
__version_info__ = LANBAR_VERSION

__all__ = [
    "LANBAR_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
