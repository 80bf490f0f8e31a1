"""
Platform and configuration helpers for libload.

Covers the facts the loader needs about the running process: which file
suffix marks a dynamic library, whether the interpreter is 32 or 64 bit,
where the application is installed, and how to open a library file.
"""

import ctypes
import os
import struct
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from .errors import LIBLOAD_ERR_ROOT, LibraryLoadError, format_root_error

# Directory names below the root path, one per architecture
OPENSSL_32_DIRNAME = "OpenSSL_32"
OPENSSL_64_DIRNAME = "OpenSSL_64"

# Environment variable holding the root installation path
ROOT_PATH_ENV = "LIBLOAD_ROOT_PATH"


def get_library_suffix() -> str:
    """Return the file suffix of dynamic libraries on this platform."""
    if sys.platform == "darwin":
        return ".dylib"
    elif sys.platform == "win32":
        return ".dll"
    else:
        return ".so"


def is_library_file(path: Path) -> bool:
    """Check whether ``path`` names a dynamic library for this platform."""
    suffix = get_library_suffix()
    if sys.platform == "win32":
        return path.name.lower().endswith(suffix)
    return path.name.endswith(suffix)


def library_sort_key(path: Path) -> str:
    """Sort key for library files; case-insensitive on Windows."""
    if sys.platform == "win32":
        return path.name.lower()
    return path.name


def is_64bit_process() -> bool:
    """Return True when the running interpreter uses 64-bit pointers."""
    return struct.calcsize("P") * 8 == 64


def get_root_path() -> Path:
    """
    Find the root installation path.

    Searches in order:
    1. LIBLOAD_ROOT_PATH environment variable
    2. Directory containing the running program

    Returns:
        Root installation path.
    """
    env_path = os.environ.get(ROOT_PATH_ENV)
    if env_path:
        return Path(env_path)

    # Frozen executables ship their libraries next to the binary
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if program:
        return Path(program).resolve().parent
    return Path.cwd()


def resolve_library_directory(
    root: Optional[Union[str, Path]] = None,
    is_64bit: Optional[bool] = None,
) -> Path:
    """
    Compute the directory holding the OpenSSL libraries for this process.

    Args:
        root: Root installation path. Defaults to get_root_path().
        is_64bit: Architecture flag. Defaults to is_64bit_process().

    Returns:
        ``root / "OpenSSL_64"`` on 64-bit processes, ``root / "OpenSSL_32"``
        otherwise.

    The root must name a directory. An empty string, ``Path("")`` and
    ``"."`` are rejected; pass ``Path.cwd()`` to use the working directory.

    Raises:
        LibraryLoadError: If the root path is empty.
    """
    if root is None:
        root = get_root_path()
    text = str(root).strip()
    if not text or os.path.normpath(text) == os.curdir:
        raise LibraryLoadError(
            format_root_error(f"Root installation path is empty ({str(root)!r})"),
            LIBLOAD_ERR_ROOT,
        )

    if is_64bit is None:
        is_64bit = is_64bit_process()

    dirname = OPENSSL_64_DIRNAME if is_64bit else OPENSSL_32_DIRNAME
    return Path(root) / dirname


def load_library_file(path: Union[str, Path]) -> ctypes.CDLL:
    """
    Load a single dynamic library into the process.

    Symbols are made globally visible so libraries loaded later can bind
    against ones loaded earlier. ``mode`` has no effect on Windows.

    Raises:
        OSError: If the library cannot be loaded.
    """
    return ctypes.CDLL(str(path), mode=ctypes.RTLD_GLOBAL)


@contextmanager
def dll_search_path(directory: Union[str, Path]) -> Iterator[None]:
    """
    Add ``directory`` to the dependent-library search path for the block.

    Only Windows supports changing the search path of a running process;
    elsewhere this is a no-op. The directory is always removed on exit.
    """
    add_dll_directory = getattr(os, "add_dll_directory", None)
    if sys.platform != "win32" or add_dll_directory is None:
        yield
        return

    cookie = add_dll_directory(str(directory))
    try:
        yield
    finally:
        cookie.close()
