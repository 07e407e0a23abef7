"""
Generation drivers.

Each driver turns the invocation stream into one kind of Go artifact.
"""

from .code import CodeDriver
from .interface import InterfaceDriver
from .mock import MockDriver

__all__ = ["CodeDriver", "MockDriver", "InterfaceDriver"]
