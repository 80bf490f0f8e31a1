"""
Entry point examples for libload.

Shows where the load step belongs in an application's startup sequence and
how to handle failures when exiting is not wanted.

Run:
    LIBLOAD_ROOT_PATH=/opt/app/ python examples/startup_usage.py
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import libload


# =============================================================================
# Single Step (Recommended)
# =============================================================================


def main() -> None:
    """Load the libraries first, then import and run everything else."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    handles = libload.bootstrap(app_name="example-app")
    logging.getLogger("example-app").info("Loaded %d libraries", len(handles))

    # Anything that binds against the libraries is imported after this point


# =============================================================================
# Explicit Startup Sequence
# =============================================================================


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO)


def load_crypto() -> None:
    libload.load_openssl_libraries()


def main_with_steps() -> None:
    """Run an ordered list of startup steps; a load failure exits with status 1."""
    libload.run_startup([configure_logging, load_crypto], app_name="example-app")


# =============================================================================
# Handling Failure Without Exiting
# =============================================================================


def try_load(directory: Path) -> Optional[List[Any]]:
    """
    Load a directory, reporting failure to the caller instead of exiting.

    Returns:
        Loaded handles, or None if a library could not be loaded.
    """
    try:
        return libload.load_libraries_from_directory(directory)
    except libload.LibraryLoadError as e:
        print(f"Load error [{e.code}]: {e.message}", file=sys.stderr)
        if e.filename:
            print(f"Library: {e.filename} in {e.directory}", file=sys.stderr)
        return None


if __name__ == "__main__":
    main()
