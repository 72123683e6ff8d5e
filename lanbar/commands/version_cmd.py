"""
Version command - displays lanbar version information
"""

from lanbar.version.lanbar_version import LANBAR_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display lanbar version information.

    Args:
        verbose: If True, show the source hash and release date as well
    """
    if verbose:
        print(f"lanbar version {LANBAR_VERSION.full_version()}")
        print("\nDetailed version information:")
        print(f"  Semantic Version: {LANBAR_VERSION}")
        print(f"  Release Date:     {LANBAR_VERSION.date_string()}")
        print(f"  Source Hash:      {LANBAR_VERSION.hash}")
    else:
        print(f"lanbar {LANBAR_VERSION}")
