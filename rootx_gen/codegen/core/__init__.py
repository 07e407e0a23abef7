"""
Core code generation components.

Provides the command table, directive parser, invocation model and the
driver base class used by every generation mode.
"""

from .commands import Capability, Command, CommandRegistry, DEFAULT_COMMANDS
from .config import ConfigManager, GeneratorConfig, load_config
from .errors import (
    ConfigError,
    DirectiveError,
    DriverStateError,
    GeneratorError,
    OutputError,
    RegistryError,
    SourceError,
    UnknownCommandError,
)
from .expander import BodyExpander, Expansion
from .generator import (
    DriverState,
    GenerationResult,
    QueryDriver,
    generate_code,
    validate_invocations,
)
from .invocation import Invocation, Param, Role
from .parser import DirectiveParser, parse_directive
from .templates import TemplateEngine, TemplateError, create_template_engine, validate_template

__all__ = [
    # Command table
    "Capability",
    "Command",
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    # Intermediate representation
    "Invocation",
    "Param",
    "Role",
    # Parsing and expansion
    "DirectiveParser",
    "parse_directive",
    "BodyExpander",
    "Expansion",
    # Drivers
    "QueryDriver",
    "DriverState",
    "GenerationResult",
    "generate_code",
    "validate_invocations",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    "validate_template",
    # Errors
    "GeneratorError",
    "DirectiveError",
    "UnknownCommandError",
    "RegistryError",
    "DriverStateError",
    "ConfigError",
    "SourceError",
    "OutputError",
]
