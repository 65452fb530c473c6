#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the glfm_markdown library.

This module defines specialized exception classes for the error conditions
that can occur while parsing Markdown and rendering it to HTML.

Exception Hierarchy
-------------------
- GlfmError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class or invalid option values)

  - ConfigError (configuration file loading)

  - ParsingError (Markdown parsing failures)

  - RenderingError (output generation failures)
    - OutputWriteError (writing to the output sink failed)
    - NodeKindError (a handler received a node of the wrong kind)

"""

from typing import Any


class GlfmError(Exception):
    """Base exception class for all glfm_markdown-specific errors.

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


class ValidationError(GlfmError):
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


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object has the wrong type or bad values.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type, original_error=original_error)
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigError(GlfmError):
    """Exception raised when a configuration file cannot be read or parsed.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error)
        self.config_path = config_path


class ParsingError(GlfmError):
    """Exception raised when Markdown parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(GlfmError):
    """Exception raised when HTML rendering fails.

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
    """Exception raised when writing to the output sink fails.

    The render is aborted at the first failed write and no HTML is returned.

    Parameters
    ----------
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The I/O error raised by the sink

    """

    def __init__(self, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = "Failed to write rendered HTML to the output sink"
        super().__init__(message, rendering_stage="sink_write", original_error=original_error)


class NodeKindError(RenderingError):
    """Exception raised when a render handler is invoked for the wrong node kind.

    This signals broken dispatch wiring and is never expected at runtime.

    Parameters
    ----------
    expected_kind : str
        Node kind the handler renders
    received_kind : str
        Node kind it was handed

    """

    def __init__(self, expected_kind: str, received_kind: str):
        """Initialize the node kind error."""
        super().__init__(
            f"Attempt to render invalid node as {expected_kind} (got {received_kind})",
            rendering_stage="dispatch",
        )
        self.expected_kind = expected_kind
        self.received_kind = received_kind


__all__ = [
    "GlfmError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "NodeKindError",
]
