#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the docweave library.

The reconciliation core is total over its inputs and raises nothing of
its own beyond argument validation; everything below surfaces at the I/O
boundary (source discovery, document store, rendering) or from explicit
policies such as the search block ceiling.

Exception Hierarchy
-------------------
- DocweaveError (base exception)

  - ValidationError (parameter/option validation)
    - SearchLimitError (block count above an explicit ceiling)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, undecodable files)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class DocweaveError(Exception):
    """Base exception class for all docweave-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocweaveError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SearchLimitError(ValidationError):
    """Exception raised when a block count exceeds the configured search ceiling.

    The ordering search is factorial in the number of blocks. Callers that
    set ``max_blocks`` get this error instead of an unbounded search.

    Parameters
    ----------
    block_count : int
        Number of blocks handed to the search
    max_blocks : int
        The configured ceiling

    """

    def __init__(self, block_count: int, max_blocks: int):
        """Initialize the error with the offending counts."""
        message = (
            f"Found {block_count} documentation blocks, more than the configured maximum of {max_blocks}; "
            "raise --max-blocks or merge related comments into fewer blocks"
        )
        super().__init__(message, parameter_name="max_blocks", parameter_value=max_blocks)
        self.block_count = block_count
        self.max_blocks = max_blocks


class FileError(DocweaveError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file cannot be read.

    This includes permission errors and files that are not valid UTF-8.

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class RenderingError(DocweaveError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing an output file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="output", original_error=original_error)
        self.file_path = file_path


class DependencyError(DocweaveError):
    """Exception raised when an optional feature's packages are not available.

    Parameters
    ----------
    feature : str
        Feature that needs the packages, also the name of its pip extra
        (``pdf``, ``rich``)
    missing_packages : list[tuple[str, str]]
        (package_name, version_spec) pairs that could not be imported
    version_mismatches : list[tuple[str, str, str]], optional
        (package_name, required_version, installed_version) triples
    message : str, optional
        Replaces the generated message
    original_import_error : ImportError, optional
        The import failure that triggered this error

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message = _dependency_message(feature, missing_packages, version_mismatches)

        super().__init__(message, original_error=original_import_error)
        self.feature = feature
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error


def _dependency_message(
    feature: str, missing_packages: list[tuple[str, str]], version_mismatches: list[tuple[str, str, str]]
) -> str:
    lines = []
    if missing_packages:
        names = ", ".join(f"{name}{spec}" for name, spec in missing_packages)
        lines.append(f"The {feature} feature needs packages that are not installed: {names}")
    for name, required, installed in version_mismatches:
        lines.append(f"The {feature} feature needs {name}{required}, found {installed}")
    lines.append(f"Install with: pip install 'docweave[{feature}]'")
    return "\n".join(lines)
