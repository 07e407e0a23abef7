"""
Mock driver.

Same methods and signatures as the implementation driver, with bodies that
return canned values from fields on the receiver.
"""

from ..core.commands import Command
from .code import CodeDriver


class MockDriver(CodeDriver):
    """Driver producing test doubles."""

    @property
    def mode_name(self) -> str:
        return "mock"

    def body_template(self, command: Command) -> str:
        return command.mock_template
