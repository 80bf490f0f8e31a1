"""
libload - load architecture-specific dynamic libraries at startup.

Loads every dynamic library found in ``<root>/OpenSSL_32`` or
``<root>/OpenSSL_64`` (chosen by the interpreter's pointer size) before the
rest of the application runs.

Example:
    >>> from libload import bootstrap
    >>> handles = bootstrap(app_name="myapp", root="/opt/app/")
"""

from .core import (
    LoadResult,
    discover_libraries,
    try_load_library,
    load_libraries_from_directory,
    load_openssl_libraries,
    loaded_libraries,
)

from .errors import (
    LibraryLoadError,
    LIBLOAD_OK,
    LIBLOAD_ERR_LOAD,
    LIBLOAD_ERR_DIRECTORY,
    LIBLOAD_ERR_ROOT,
)

from .lib import (
    OPENSSL_32_DIRNAME,
    OPENSSL_64_DIRNAME,
    get_library_suffix,
    get_root_path,
    is_64bit_process,
    load_library_file,
    resolve_library_directory,
)

from .startup import EXIT_LOAD_FAILURE, bootstrap, run_startup

__version__ = "1.0.0"
__all__ = [
    "LibraryLoadError",
    "LoadResult",
    "discover_libraries",
    "try_load_library",
    "load_libraries_from_directory",
    "load_openssl_libraries",
    "loaded_libraries",
    "LIBLOAD_OK",
    "LIBLOAD_ERR_LOAD",
    "LIBLOAD_ERR_DIRECTORY",
    "LIBLOAD_ERR_ROOT",
    "OPENSSL_32_DIRNAME",
    "OPENSSL_64_DIRNAME",
    "get_library_suffix",
    "get_root_path",
    "is_64bit_process",
    "load_library_file",
    "resolve_library_directory",
    "EXIT_LOAD_FAILURE",
    "bootstrap",
    "run_startup",
]
