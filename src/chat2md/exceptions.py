#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by chat2md's outer surfaces.

Serialization never fails: any markup tree converts to some Markdown. Errors
come from resolving site profiles, reading configuration, and reading or
writing files on the command line.

Exception Hierarchy
-------------------
- Chat2MdError

  - ValidationError (bad option or setting value)
    - UnknownProfileError (profile name not registered)
    - ConfigError (configuration file unreadable or invalid)

  - FileError (input/output files)
    - InputFileNotFoundError
    - FileAccessError

"""

from typing import Any, Sequence


class Chat2MdError(Exception):
    """Root of all chat2md errors.

    Parameters
    ----------
    message : str
        Text shown to the user
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Chat2MdError):
    """An option, setting or argument has an unusable value.

    Parameters
    ----------
    message : str
        Text shown to the user
    parameter_name : str, optional
        Option or setting the value was given for (e.g. ``"profile"``)
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record which parameter was rejected and why."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class UnknownProfileError(ValidationError):
    """A site profile name does not match any registered profile.

    Parameters
    ----------
    profile_name : str
        The requested name
    available : sequence of str
        Names that would have been accepted

    """

    def __init__(self, profile_name: str, available: Sequence[str]):
        """Build the message from the requested and available names."""
        self.available = tuple(sorted(available))
        super().__init__(
            f"Unknown site profile '{profile_name}'. Available profiles: {', '.join(self.available)}",
            parameter_name="profile",
            parameter_value=profile_name,
        )


class ConfigError(ValidationError):
    """A configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        Parser or I/O exception this error wraps

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Record the configuration file the problem was found in."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class FileError(Chat2MdError):
    """Reading an input file or writing the output failed.

    Parameters
    ----------
    message : str
        Text shown to the user
    file_path : str, optional
        The file involved
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Record the file involved."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class InputFileNotFoundError(FileError):
    """An input HTML file does not exist."""

    def __init__(self, file_path: str):
        """Build the message from the missing path."""
        super().__init__(f"Input file not found: {file_path}", file_path=file_path)


class FileAccessError(FileError):
    """A file exists but cannot be read, decoded or written."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Use ``message`` when given, else a generic access message."""
        super().__init__(message or f"Cannot access file: {file_path}", file_path=file_path, original_error=original_error)
