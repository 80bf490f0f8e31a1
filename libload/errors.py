"""
Standard error message formatting for libload.

Every error raised by this package carries a message in the standard format:

    [Component] Operation failed: {reason}. Expected: {expected}.
"""

from typing import Any, Dict, Optional


# Error code constants
LIBLOAD_OK = 0
LIBLOAD_ERR_LOAD = -1
LIBLOAD_ERR_DIRECTORY = -2
LIBLOAD_ERR_ROOT = -3


# Error code to component mapping
_ERROR_COMPONENTS: Dict[int, str] = {
    LIBLOAD_ERR_LOAD: "Loader",
    LIBLOAD_ERR_DIRECTORY: "Loader",
    LIBLOAD_ERR_ROOT: "Resolver",
}


# Error code to expected behavior mapping
_ERROR_EXPECTATIONS: Dict[int, str] = {
    LIBLOAD_ERR_LOAD: "A loadable library built for this architecture with all of its dependencies present",
    LIBLOAD_ERR_DIRECTORY: "An existing directory containing the libraries to load",
    LIBLOAD_ERR_ROOT: "A non-empty root installation path (set LIBLOAD_ROOT_PATH or pass root explicitly)",
}


def format_error(component: str, operation: str, reason: str, expected: str) -> str:
    """
    Format an error message according to the standard format.

    Args:
        component: The component that failed (Loader, Resolver)
        operation: The operation that failed
        reason: Detailed explanation of what went wrong
        expected: What was expected or how to fix the issue

    Returns:
        Formatted error message.

    Example:
        >>> format_error("Loader", "Load library libssl.so", "file too short", "A valid library")
        '[Loader] Load library libssl.so failed: file too short. Expected: A valid library.'
    """
    return f"[{component}] {operation} failed: {reason}. Expected: {expected}."


def get_component_for_error_code(code: int) -> str:
    """Get the component name for an error code."""
    return _ERROR_COMPONENTS.get(code, "libload")


def get_expectation_for_error_code(code: int) -> str:
    """Get the expected behavior for an error code."""
    return _ERROR_EXPECTATIONS.get(code, "Valid input and proper usage")


def format_load_error(filename: str, directory: str, detail: str) -> str:
    """
    Format a library load failure.

    Args:
        filename: Base name of the library that failed to load
        directory: Directory the library was loaded from
        detail: Reason reported by the operating system loader

    Returns:
        Formatted load error message.
    """
    return format_error(
        component=get_component_for_error_code(LIBLOAD_ERR_LOAD),
        operation=f"Load library {filename} from {directory}",
        reason=detail,
        expected=get_expectation_for_error_code(LIBLOAD_ERR_LOAD),
    )


def format_directory_error(directory: str, detail: str) -> str:
    """Format an error for a library directory that cannot be scanned."""
    return format_error(
        component=get_component_for_error_code(LIBLOAD_ERR_DIRECTORY),
        operation=f"Scan library directory {directory}",
        reason=detail,
        expected=get_expectation_for_error_code(LIBLOAD_ERR_DIRECTORY),
    )


def format_root_error(detail: str) -> str:
    """Format an error for an unusable root installation path."""
    return format_error(
        component=get_component_for_error_code(LIBLOAD_ERR_ROOT),
        operation="Resolve library directory",
        reason=detail,
        expected=get_expectation_for_error_code(LIBLOAD_ERR_ROOT),
    )


class LibraryLoadError(Exception):
    """
    Exception raised when a library directory cannot be loaded.

    All messages follow the standard format:
    [Component] Operation failed: {reason}. Expected: {expected}.

    Attributes:
        message: Formatted error message
        code: libload error code (e.g., LIBLOAD_ERR_LOAD)
        filename: Library that failed to load, if any
        directory: Directory being loaded, if any
        context: Additional context dictionary
    """

    def __init__(
        self,
        message: str,
        code: int = LIBLOAD_ERR_LOAD,
        filename: Optional[str] = None,
        directory: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        self.message = message
        self.code = code
        self.filename = filename
        self.directory = directory
        self.context = context or {}
        super().__init__(message)

    @classmethod
    def from_result(cls, result: Any) -> "LibraryLoadError":
        """Create an error from a failed core.LoadResult."""
        detail = str(result.error) if result.error is not None else "Unknown error"
        message = format_load_error(result.filename, result.directory, detail)
        return cls(
            message,
            LIBLOAD_ERR_LOAD,
            filename=result.filename,
            directory=result.directory,
            context={"path": str(result.path), "os_detail": detail},
        )
