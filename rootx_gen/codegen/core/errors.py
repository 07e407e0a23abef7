"""
Exceptions raised while generating data-access code.

Every fatal condition derives from GeneratorError so the CLI can report
them uniformly. Template expansion defects are deliberately absent: they
are reported inline in the generated body instead of being raised.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class DirectiveError(GeneratorError):
    """A directive block is structurally malformed."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        self.message = message
        self.source = source
        self.line_number = line_number
        super().__init__(self._format())

    def _format(self) -> str:
        if self.source and self.line_number:
            return f"{self.source}:{self.line_number}: {self.message}"
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class UnknownCommandError(DirectiveError):
    """A directive names a command that is not registered."""

    pass


class RegistryError(GeneratorError):
    """Exception raised for command or driver registry errors."""

    pass


class DriverStateError(GeneratorError):
    """A driver lifecycle method was called out of order."""

    pass


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


class SourceError(GeneratorError):
    """A query source file or directory could not be read."""

    pass


class OutputError(GeneratorError):
    """Formatting or writing the generated code failed."""

    pass
