"""
Intermediate representation shared by the parser and all drivers.

An Invocation is one parsed, resolved directive: the command it uses, the
key its query is looked up by, the name of the method to generate and the
ordered parameter list.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .commands import Command


class Role(Enum):
    """Emission variant of an invocation."""

    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class Param:
    """A single positional query parameter."""

    name: str
    type: str

    def declaration(self) -> str:
        return f"{self.name} {self.type}"


@dataclass(frozen=True)
class Invocation:
    """One directive ready for emission."""

    command: Command
    key: str
    name: str
    params: Tuple[Param, ...] = ()

    def param_names(self) -> str:
        """Comma-joined parameter names, in declaration order."""
        return ", ".join(p.name for p in self.params)

    def signature(self) -> str:
        """
        Go method signature without the ``func`` keyword and receiver.

        The command's injected argument (if any) always comes first.
        """
        arguments: List[str] = []
        if self.command.injected_param:
            arguments.append(f"{self.command.injected_param} interface{{}}")
        arguments.extend(p.declaration() for p in self.params)
        return f"{self.name}({', '.join(arguments)}) {self.command.return_type}"

    def roles(self) -> List[Role]:
        """Roles this invocation is emitted for, read role first."""
        if self.command.write_only:
            return [Role.WRITE]
        return [Role.READ, Role.WRITE]
