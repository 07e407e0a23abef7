"""
Command vocabulary for query directives.

A Command describes one kind of data-access operation: whether it may run
against a read-only handle, which extra argument it injects ahead of the
directive's own parameters, what it returns, and the two body templates
(implementation and mock) used to emit methods for it.
"""

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional

from ...logging_config import get_logger
from .errors import RegistryError, UnknownCommandError
from .templates import validate_template

logger = get_logger(__name__)


class Capability(Enum):
    """Which role a command may be emitted for."""

    READ = "read"  # emitted for both read and write roles
    WRITE_ONLY = "write"  # emitted for the write role only


@dataclass(frozen=True)
class Command:
    """A single directive command and its emission templates."""

    name: str
    capability: Capability
    injected_param: Optional[str]
    return_type: str
    code_template: str
    mock_template: str

    @property
    def write_only(self) -> bool:
        return self.capability is Capability.WRITE_ONLY


# Implementation template that reads the generated id from a RETURNING
# clause instead of LastInsertId.
PSQL_INSERT_TEMPLATE = 'return rootx.InsertPsql({{ var }}, "{{ file }}", {{ params }})'

DEFAULT_COMMANDS = (
    Command(
        "exists",
        Capability.READ,
        None,
        "(bool, error)",
        'return rootx.Exists({{ var }}, "{{ file }}", {{ params }})',
        "return {{ var }}.Bool, {{ var }}.Error",
    ),
    Command(
        "selectOne",
        Capability.READ,
        "instance",
        "error",
        'return rootx.SelectOne({{ var }}, "{{ file }}", instance, {{ params }})',
        "instance = {{ var }}.Thing\nreturn {{ var }}.Error",
    ),
    Command(
        "selectAll",
        Capability.READ,
        "instances",
        "error",
        'return rootx.SelectAll({{ var }}, "{{ file }}", instances, {{ params }})',
        "instances = {{ var }}.Slice\nreturn {{ var }}.Error",
    ),
    Command(
        "insert",
        Capability.WRITE_ONLY,
        None,
        "(int64, error)",
        'return rootx.Insert({{ var }}, "{{ file }}", {{ params }})',
        "return {{ var }}.Int64, {{ var }}.Error",
    ),
    Command(
        "updateOne",
        Capability.WRITE_ONLY,
        None,
        "error",
        'return rootx.UpdateOne({{ var }}, "{{ file }}", {{ params }})',
        "return {{ var }}.Error",
    ),
    Command(
        "deleteOne",
        Capability.WRITE_ONLY,
        None,
        "error",
        'return rootx.DeleteOne({{ var }}, "{{ file }}", {{ params }})',
        "return {{ var }}.Error",
    ),
    Command(
        "exec",
        Capability.READ,
        None,
        "error",
        'return rootx.Exec({{ var }}, "{{ file }}", {{ params }})',
        "return {{ var }}.Error",
    ),
)


class CommandRegistry:
    """Table of supported commands, frozen once built."""

    def __init__(self, commands=DEFAULT_COMMANDS):
        """
        Initialize a mutable registry from a sequence of commands.

        Use CommandRegistry.initialize() to obtain a configured, frozen
        registry; a bare instance only exists while it is being built.
        """
        self._commands: Dict[str, Command] = {}
        for command in commands:
            if command.name in self._commands:
                raise RegistryError(f"Command '{command.name}' is defined twice")
            self._commands[command.name] = command
        self._frozen = False

    @classmethod
    def initialize(cls, config=None) -> "CommandRegistry":
        """
        Build the command table for a generation run.

        Args:
            config: GeneratorConfig (or None for defaults). ``psql`` selects the
                RETURNING-id insert strategy; ``template_overrides`` maps command
                names to replacement implementation templates.

        Returns:
            Frozen registry
        """
        registry = cls()

        psql = True if config is None else config.psql
        if psql:
            registry.alter("insert", PSQL_INSERT_TEMPLATE)

        overrides = {} if config is None else config.template_overrides
        for name, template in overrides.items():
            registry.alter(name, template)

        registry.freeze()
        for problem in registry.check_templates():
            logger.warning(f"Command template problem: {problem}")
        logger.debug(
            f"Command registry initialized with {len(registry)} commands (psql={psql})"
        )
        return registry

    def alter(self, name: str, code_template: str):
        """
        Replace the implementation template of one command.

        Signature, capability and mock template are left untouched so every
        driver keeps emitting the same method shapes.

        Raises:
            RegistryError: If the registry is frozen or the command is unknown
        """
        if self._frozen:
            raise RegistryError(
                f"Cannot alter command '{name}': registry is already frozen"
            )
        if name not in self._commands:
            raise RegistryError(f"Cannot alter unknown command '{name}'")

        self._commands[name] = replace(self._commands[name], code_template=code_template)
        logger.info(f"Implementation template for '{name}' replaced")

    def check_templates(self) -> List[str]:
        """Slot and syntax problems in every command template."""
        problems = []
        for command in self._commands.values():
            for kind, template in (
                ("code", command.code_template),
                ("mock", command.mock_template),
            ):
                for problem in validate_template(template):
                    problems.append(f"{command.name} ({kind}): {problem}")
        return problems

    def freeze(self):
        """Make the registry read-only."""
        if not self._frozen:
            self._commands = MappingProxyType(self._commands)
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Command:
        """
        Get a command by name.

        Raises:
            UnknownCommandError: If no command has this name
        """
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(
                f"Command {name} is not defined "
                f"(available: {', '.join(self.names())})"
            ) from None

    def names(self) -> List[str]:
        """Command names in table order."""
        return list(self._commands)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)
