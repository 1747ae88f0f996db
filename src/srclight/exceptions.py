#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the srclight library.

This module defines specialized exception classes for the error conditions
that can occur while highlighting source blocks. These exceptions provide
more specific error information than generic built-ins.

Exception Hierarchy
-------------------
- SrclightError (base exception)

  - ValidationError (parameter/option validation)
    - LineRangeError (highlight range parsing errors)

  - HighlighterError (adapter contract violations)
    - UnsupportedOperationError (highlight called on a pass-through adapter)

  - RenderingError (output generation failures)
    - CalloutRestorationError (sentinel not found exactly once)
    - OutputWriteError (stylesheet write failures)

  - DependencyError (missing/incompatible packages)

Fail-open situations (unknown highlighter, unknown style, a highlighter
attribute removed by the security gate) never raise.

"""

from typing import Any


class SrclightError(Exception):
    """Base exception class for all srclight-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(SrclightError):
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


class LineRangeError(ValidationError):
    """Exception raised for a malformed term in a line range specification.

    Parameters
    ----------
    message : str
        Description of the range error
    term : str, optional
        The offending term, exactly as it appeared in the specification
    parameter_value : any, optional
        The complete range specification
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    term : str or None
        The term that could not be parsed

    """

    def __init__(
        self,
        message: str,
        term: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the line range error."""
        super().__init__(
            message, parameter_name="highlight", parameter_value=parameter_value, original_error=original_error
        )
        self.term = term


class HighlighterError(SrclightError):
    """Base exception for highlighter adapter failures.

    Parameters
    ----------
    message : str
        Description of the failure
    highlighter_name : str, optional
        Name of the adapter involved
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, highlighter_name: str | None = None, original_error: Exception | None = None):
        """Initialize the highlighter error."""
        super().__init__(message, original_error)
        self.highlighter_name = highlighter_name


class UnsupportedOperationError(HighlighterError, NotImplementedError):
    """Exception raised when a pass-through adapter is asked to highlight.

    Callers must check ``supports_highlighting()`` before calling
    ``format()``; reaching this error means that check was skipped.

    Parameters
    ----------
    highlighter_name : str
        Name of the adapter
    operation : str, default "format"
        Name of the operation that is not supported
    message : str, optional
        Custom error message

    """

    def __init__(self, highlighter_name: str, operation: str = "format", message: str | None = None):
        """Initialize the unsupported operation error."""
        if message is None:
            message = (
                f"Highlighter '{highlighter_name}' does not support the '{operation}' operation; "
                f"check supports_highlighting() before calling it"
            )
        super().__init__(message, highlighter_name=highlighter_name)
        self.operation = operation


class RenderingError(SrclightError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    Attributes
    ----------
    rendering_stage : str or None
        Where in the rendering process the error occurred

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class CalloutRestorationError(RenderingError):
    """Exception raised when a sentinel is not found exactly once after highlighting.

    Zero matches mean the highlighter destroyed or split the sentinel;
    more than one means a collision. Either way the output would be corrupt.

    Parameters
    ----------
    sentinel : str
        The sentinel token that failed to resolve
    match_count : int
        Number of occurrences found in the highlighted output
    highlighter_name : str, optional
        Name of the adapter that produced the output
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        sentinel: str,
        match_count: int,
        highlighter_name: str | None = None,
        message: str | None = None,
    ):
        """Initialize the restoration error."""
        if message is None:
            source = f" from highlighter '{highlighter_name}'" if highlighter_name else ""
            message = f"Expected exactly one occurrence of sentinel {sentinel!r} in output{source}, found {match_count}"
        super().__init__(message, rendering_stage="callout_restoration")
        self.sentinel = sentinel
        self.match_count = match_count
        self.highlighter_name = highlighter_name


class OutputWriteError(RenderingError):
    """Exception raised when writing an output file fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


class DependencyError(SrclightError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name} highlighter requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name} highlighter has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
