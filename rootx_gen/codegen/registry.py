"""
Driver registry for generation modes.

Provides registration and instantiation of the drivers behind
``--mode code | mock | interface``.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.errors import RegistryError
from .core.generator import QueryDriver


class DriverRegistry:
    """Registry for managing available generation drivers."""

    def __init__(self):
        """Initialize empty registry."""
        self._drivers: Dict[str, Type[QueryDriver]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        mode: str,
        driver_class: Type[QueryDriver],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a driver for a mode.

        Args:
            mode: Primary mode name (e.g., 'code', 'mock')
            driver_class: Driver class implementing QueryDriver
            aliases: Alternative names for this mode
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If driver class is invalid or conflicts exist
        """
        if not issubclass(driver_class, QueryDriver):
            raise RegistryError("Driver class must inherit from QueryDriver")

        mode_key = mode.lower()

        if mode_key in self._drivers and not replace:
            return

        self._drivers[mode_key] = driver_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == mode_key:
                continue

            if not replace:
                if alias_key in self._drivers:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary mode"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != mode_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = mode_key

    def get_driver_class(self, mode: str) -> Type[QueryDriver]:
        """
        Get driver class for a mode.

        Raises:
            RegistryError: If mode not found
        """
        mode_key = mode.lower()

        if mode_key in self._drivers:
            return self._drivers[mode_key]

        if mode_key in self._aliases:
            return self._drivers[self._aliases[mode_key]]

        raise RegistryError(
            f"No driver registered for mode: {mode}. "
            f"Available: {', '.join(self.list_modes())}"
        )

    def create_driver(
        self,
        mode: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> QueryDriver:
        """
        Create driver instance for a mode.

        Args:
            mode: Mode name or alias
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured driver instance
        """
        driver_class = self.get_driver_class(mode)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return driver_class(final_config)

    def supports(self, mode: str) -> bool:
        """Whether a mode name or alias is registered."""
        mode_key = mode.lower()
        return mode_key in self._drivers or mode_key in self._aliases

    def list_modes(self) -> List[str]:
        """Get list of registered primary mode names."""
        return sorted(self._drivers.keys())


# Global registry instance - created once
_global_registry: Optional[DriverRegistry] = None


def get_registry() -> DriverRegistry:
    """Get the global driver registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = DriverRegistry()
        _register_builtin_drivers(_global_registry)
    return _global_registry


def _register_builtin_drivers(registry: DriverRegistry):
    """Register the three built-in drivers with their aliases."""
    from .drivers import CodeDriver, InterfaceDriver, MockDriver

    registry.register("code", CodeDriver, aliases=["impl"])
    registry.register("mock", MockDriver, aliases=["mocks"])
    registry.register("interface", InterfaceDriver, aliases=["iface"])


def get_driver(
    mode: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> QueryDriver:
    """Get driver instance from global registry."""
    return get_registry().create_driver(mode, config)


def list_supported_modes() -> List[str]:
    """List all supported modes from global registry."""
    return get_registry().list_modes()
