"""
Test fixtures for libload.

Builds throwaway library directories and provides a fake load primitive, so
loader behaviour can be tested without real shared libraries.
"""

import os
import sys
import threading
from pathlib import Path
from typing import Iterable, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from libload.lib import get_library_suffix

SUFFIX = get_library_suffix()

# Bytes that no platform loader accepts as a library
INVALID_LIBRARY_BYTES = b"this is not a shared library\n"


def lib_name(stem: str) -> str:
    """Return ``stem`` with the platform library suffix."""
    return f"{stem}{SUFFIX}"


def make_library_dir(base: Path, names: Iterable[str], extra_files: Iterable[str] = ()) -> Path:
    """
    Create ``base`` and fill it with placeholder library files.

    Args:
        base: Directory to create
        names: Library file names to create
        extra_files: Non-library file names to create alongside them

    Returns:
        The created directory.
    """
    base.mkdir(parents=True, exist_ok=True)
    for name in list(names) + list(extra_files):
        (base / name).write_bytes(INVALID_LIBRARY_BYTES)
    return base


class RecordingLoader:
    """
    Fake load primitive.

    Records the file name of every load attempt and raises OSError for the
    names listed in ``fail``.

    Example:
        >>> loader = RecordingLoader(fail={"libbad.so"})
        >>> load_libraries_from_directory(path, loader)
    """

    def __init__(self, fail: Optional[Iterable[str]] = None):
        self.fail = set(fail or ())
        self.calls: List[Path] = []

    def __call__(self, path: Path) -> str:
        self.calls.append(path)
        if path.name in self.fail:
            raise OSError(f"{path}: invalid ELF header")
        return f"handle:{path.name}"

    @property
    def names(self) -> List[str]:
        return [path.name for path in self.calls]


class FakeDllDirectory:
    """Stand-in for the cookie returned by os.add_dll_directory."""

    def __init__(self, registry: "FakeDllDirectories", path: str):
        self.registry = registry
        self.path = path

    def close(self) -> None:
        self.registry.active.remove(self.path)
        self.registry.closed.append(self.path)
        self.registry.events.append(f"close:{self.path}")


class FakeDllDirectories:
    """Stand-in for os.add_dll_directory that tracks active directories."""

    def __init__(self):
        self.active: List[str] = []
        self.closed: List[str] = []
        self.events: List[str] = []

    def __call__(self, path: str) -> FakeDllDirectory:
        self.active.append(path)
        self.events.append(f"add:{path}")
        return FakeDllDirectory(self, path)


class BlockingLoader(RecordingLoader):
    """
    RecordingLoader that holds its first load until ``release`` is set.

    ``entered`` is set once the first load has started.
    """

    def __init__(self, fail: Optional[Iterable[str]] = None, timeout: float = 10.0):
        super().__init__(fail)
        self.entered = threading.Event()
        self.release = threading.Event()
        self.timeout = timeout

    def __call__(self, path: Path) -> str:
        if not self.entered.is_set():
            self.entered.set()
            self.release.wait(self.timeout)
        return super().__call__(path)
