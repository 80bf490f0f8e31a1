"""
Startup step for application entry points.

Loads the OpenSSL libraries before anything that depends on them runs, and
refuses to start the application when a library cannot be loaded:

    import sys
    from libload.startup import bootstrap

    def main():
        bootstrap(app_name="myapp")
        from myapp import server  # safe: libraries are resident
        server.run()
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, List, NoReturn, Optional, Sequence, Union

from .core import Loader, load_openssl_libraries
from .errors import LibraryLoadError

# Exit status used when a library fails to load
EXIT_LOAD_FAILURE = 1

DEFAULT_APP_NAME = "libload"

ExitFunc = Callable[[int], Any]


def _fail(error: LibraryLoadError, app_name: Optional[str], exit: ExitFunc) -> NoReturn:
    logging.getLogger(app_name or DEFAULT_APP_NAME).error("%s", error.message)
    exit(EXIT_LOAD_FAILURE)
    # Reached only when exit() returns
    raise error


def bootstrap(
    app_name: Optional[str] = None,
    root: Optional[Union[str, Path]] = None,
    is_64bit: Optional[bool] = None,
    loader: Optional[Loader] = None,
    exit: ExitFunc = sys.exit,
) -> List[Any]:
    """
    Load the OpenSSL libraries or terminate the process.

    Args:
        app_name: Application identifier; names the logger that receives
            the failure record.
        root: Root installation path. Defaults to lib.get_root_path().
        is_64bit: Architecture flag. Defaults to the running interpreter's.
        loader: Load primitive. Defaults to lib.load_library_file.
        exit: Called with EXIT_LOAD_FAILURE on failure.

    Returns:
        Handles of the loaded libraries.
    """
    try:
        return load_openssl_libraries(root, is_64bit, loader)
    except LibraryLoadError as e:
        _fail(e, app_name, exit)


def run_startup(
    steps: Sequence[Callable[[], Any]],
    app_name: Optional[str] = None,
    exit: ExitFunc = sys.exit,
) -> None:
    """
    Run startup steps in order, terminating on the first load failure.

    Steps are plain callables; other exceptions propagate unchanged.
    """
    for step in steps:
        try:
            step()
        except LibraryLoadError as e:
            _fail(e, app_name, exit)
