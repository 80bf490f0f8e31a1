"""
Core directory loader for libload.

STARTUP ORDERING:
================
Libraries loaded here must be resident before any code that binds against
them runs. Call the loader (or libload.startup.bootstrap) as the first step of
the application's entry point. Importing libload loads nothing.

THREAD SAFETY:
=============
A load pass holds a module-level lock for its whole duration, so concurrent
callers run one after another. Each file is opened by its absolute path, and
the Windows dependent-library search path is only extended for the length of
one pass.

RESOURCES:
=========
Loaded handles are kept in a process-wide registry and are never released.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .lib import (
    dll_search_path,
    is_library_file,
    library_sort_key,
    load_library_file,
    resolve_library_directory,
)
from .errors import (
    format_directory_error,
    LibraryLoadError,
    LIBLOAD_ERR_DIRECTORY,
)

_log = logging.getLogger(__name__)

# Serializes load passes
_load_lock = threading.Lock()

# Handles of every library loaded so far, keyed by absolute path
_resident: Dict[str, Any] = {}

Loader = Callable[[Path], Any]


class LoadResult:
    """
    Outcome of loading one library file.

    Either a success holding the library handle, or a failure holding the
    OSError raised by the load primitive.
    """

    def __init__(self, path: Path, handle: Any = None, error: Optional[BaseException] = None):
        self.path = path
        self.handle = handle
        self.error = error

    @classmethod
    def success(cls, path: Path, handle: Any) -> "LoadResult":
        return cls(path, handle=handle)

    @classmethod
    def failure(cls, path: Path, error: BaseException) -> "LoadResult":
        return cls(path, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def directory(self) -> str:
        return str(self.path.parent)

    def __repr__(self) -> str:
        state = "ok" if self.ok else f"failed: {self.error}"
        return f"LoadResult({self.filename!r}, {state})"


def discover_libraries(directory: Union[str, Path]) -> List[Path]:
    """
    List the library files directly inside ``directory``.

    Subdirectories are not searched. Files are returned sorted by name so
    the load order does not depend on the filesystem; on Windows the sort
    ignores case, matching how names are compared there.

    Raises:
        LibraryLoadError: If ``directory`` is missing, not a directory, or
            cannot be read.
    """
    directory = Path(directory)
    if not directory.exists():
        raise LibraryLoadError(
            format_directory_error(str(directory), "Directory does not exist"),
            LIBLOAD_ERR_DIRECTORY,
            directory=str(directory),
        )
    if not directory.is_dir():
        raise LibraryLoadError(
            format_directory_error(str(directory), "Path is not a directory"),
            LIBLOAD_ERR_DIRECTORY,
            directory=str(directory),
        )

    try:
        libraries = [entry for entry in directory.iterdir() if entry.is_file() and is_library_file(entry)]
    except OSError as e:
        raise LibraryLoadError(
            format_directory_error(str(directory), str(e)),
            LIBLOAD_ERR_DIRECTORY,
            directory=str(directory),
            context={"os_detail": str(e)},
        ) from e

    return sorted(libraries, key=library_sort_key)


def try_load_library(path: Union[str, Path], loader: Optional[Loader] = None) -> LoadResult:
    """
    Load one library file, capturing failure instead of raising.

    Args:
        path: Library file to load.
        loader: Load primitive. Defaults to load_library_file.

    Returns:
        LoadResult describing the outcome.
    """
    path = Path(path).absolute()
    if loader is None:
        loader = load_library_file

    try:
        handle = loader(path)
    except OSError as e:
        return LoadResult.failure(path, e)
    return LoadResult.success(path, handle)


def load_libraries_from_directory(
    directory: Union[str, Path],
    loader: Optional[Loader] = None,
) -> List[Any]:
    """
    Load every library file found directly inside ``directory``.

    Loading stops at the first failure; later files are not attempted.

    Args:
        directory: Directory containing the libraries.
        loader: Load primitive. Defaults to load_library_file.

    Returns:
        Handles of the loaded libraries, in load order.

    Raises:
        LibraryLoadError: If the directory cannot be scanned or a library
            fails to load.
    """
    directory = Path(directory).absolute()

    with _load_lock:
        libraries = discover_libraries(directory)
        if not libraries:
            _log.debug("No libraries found in %s", directory)
            return []

        handles = []
        with dll_search_path(directory):
            for path in libraries:
                result = try_load_library(path, loader)
                if not result.ok:
                    raise LibraryLoadError.from_result(result) from result.error

                _resident[str(result.path)] = result.handle
                handles.append(result.handle)
                _log.debug("Loaded library %s from %s", result.filename, directory)

    return handles


def load_openssl_libraries(
    root: Optional[Union[str, Path]] = None,
    is_64bit: Optional[bool] = None,
    loader: Optional[Loader] = None,
) -> List[Any]:
    """
    Load the OpenSSL libraries matching the process architecture.

    Args:
        root: Root installation path. Defaults to lib.get_root_path().
        is_64bit: Architecture flag. Defaults to the running interpreter's.
        loader: Load primitive. Defaults to load_library_file.

    Returns:
        Handles of the loaded libraries, in load order.

    Raises:
        LibraryLoadError: If the directory cannot be resolved or loaded.
    """
    directory = resolve_library_directory(root, is_64bit)
    return load_libraries_from_directory(directory, loader)


def loaded_libraries() -> Dict[str, Any]:
    """Return a snapshot of every library loaded so far, keyed by path."""
    with _load_lock:
        return dict(_resident)
