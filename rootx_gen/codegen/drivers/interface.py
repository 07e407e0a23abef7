"""
Interface driver.

Collects method signatures and emits one read-role and one write-role
interface declaration.
"""

from typing import List

from ..core.generator import QueryDriver
from ..core.invocation import Invocation, Role


class InterfaceDriver(QueryDriver):
    """Driver producing the read and write interface declarations."""

    def __init__(self, config=None, template_engine=None):
        super().__init__(config, template_engine)
        self.read_signatures: List[str] = []
        self.write_signatures: List[str] = []

    @property
    def mode_name(self) -> str:
        return "interface"

    def on_handle(self, invocation: Invocation):
        # Encounter order is kept; signatures are never sorted.
        if invocation.command.write_only:
            self.write_signatures.append(invocation.signature())
        else:
            self.read_signatures.append(invocation.signature())

    def on_finish(self):
        self.emit(self.render_interface(Role.READ, self.read_signatures))
        self.emit(self.render_interface(Role.WRITE, self.write_signatures))
