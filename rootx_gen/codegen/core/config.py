"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError
from .naming import is_go_identifier

_BOOL_FIELDS = {"psql", "dry_run"}
_STR_FIELDS = {"file_suffix", "directive_marker", "package_name", "mode", "read_type", "write_type"}
_OPTIONAL_STR_FIELDS = {"directory", "output_file", "formatter", "template_dir"}


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    # Input settings
    directory: Optional[str] = None
    file_suffix: str = ".sql"
    directive_marker: str = "--!"

    # Output settings
    output_file: Optional[str] = None
    package_name: str = ""
    mode: str = "code"
    formatter: Optional[str] = "goimports"
    dry_run: bool = False

    # Role types, e.g. "(r *Reader)"
    read_type: str = ""
    write_type: str = ""

    # Command table settings
    psql: bool = True
    template_overrides: Dict[str, str] = field(default_factory=dict)

    # Directory of .go.j2 files replacing the built-in layout templates
    template_dir: Optional[str] = None

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "file_suffix": ".sql",
            "directive_marker": "--!",
            "mode": "code",
            "formatter": "goimports",
            "psql": True,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration, file values under custom overrides
        """
        base_config = self._defaults.copy()

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in GeneratorConfig.__dataclass_fields__.values()}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        self._check_types(config_args)
        return GeneratorConfig(**config_args)

    def _check_types(self, config_args: Dict[str, Any]):
        """Reject values whose JSON type does not match the field."""
        for key, value in config_args.items():
            if key in _BOOL_FIELDS and not isinstance(value, bool):
                raise ConfigError(
                    f"{key} must be true or false, got {type(value).__name__}: {value!r}"
                )
            if key in _STR_FIELDS and not isinstance(value, str):
                raise ConfigError(f"{key} must be a string, got {type(value).__name__}")
            if key in _OPTIONAL_STR_FIELDS and not (value is None or isinstance(value, str)):
                raise ConfigError(
                    f"{key} must be a string or null, got {type(value).__name__}"
                )

        overrides = config_args.get("template_overrides", {})
        if not isinstance(overrides, dict):
            raise ConfigError("template_overrides must be an object of command: template")
        for name, template in overrides.items():
            if not isinstance(template, str):
                raise ConfigError(f"template_overrides['{name}'] must be a string")

        if not isinstance(config_args.get("custom", {}), dict):
            raise ConfigError("custom must be a JSON object")

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration for a generation run.

        Returns:
            List of validation errors (empty if the config is usable)
        """
        errors = []

        if not config.package_name:
            errors.append("Package must be specified with --pkg name")
        elif not is_go_identifier(config.package_name):
            errors.append(f"Invalid Go package name: {config.package_name}")

        if not config.directory:
            errors.append("Directory must be specified with --dir path/to/dir")

        # Deferred: the registry imports this module.
        from ..registry import get_registry

        drivers = get_registry()
        if not drivers.supports(config.mode):
            errors.append(
                f"Mode must be one of {' | '.join(drivers.list_modes())} "
                f"(got {config.mode})"
            )

        if not config.dry_run and not config.output_file:
            errors.append("Output file must be specified with -o path/to/file")

        if not config.read_type:
            errors.append("Read type must be specified with --read-type")
        if not config.write_type:
            errors.append("Write type must be specified with --write-type")

        if config.template_dir and not Path(config.template_dir).is_dir():
            errors.append(f"Template directory not found: {config.template_dir}")

        if not config.directive_marker.strip():
            errors.append("directive_marker must not be empty")

        return errors


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
