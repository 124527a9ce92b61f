'''
Configuration management system for the MatLib kernel.

This module lets users tune the numerical policy of the kernel (pivot and
convergence tolerances, iteration caps), switch JIT acceleration on or off,
and configure logging, without modifying source code.

The configuration system follows a layered approach:
1. Default configurations built into the package
2. An optional user configuration file (JSON)
3. Environment variables
4. Runtime modifications

Environment variables take the form MATLIB_<SECTION>_<OPTION>, for example
MATLIB_NUMERICAL_JACOBI_TOLERANCE=1e-8. The user configuration file defaults
to ~/.matlib/matlib_config.json and may be relocated with MATLIB_CONFIG_FILE.
It is only read if it exists; nothing is written unless save_config() is
called.
'''

import json
import logging
import os
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .types import LogLevel
from .validation import is_valid_pivot_tolerance

# Set up module-level logger
logger = logging.getLogger("matlib.core.config")

# Constants for configuration paths and environment variables
CONFIG_ENV_PREFIX = "MATLIB_"
CONFIG_FILE_ENV = "MATLIB_CONFIG_FILE"
DEFAULT_CONFIG_FILENAME = "matlib_config.json"
DEFAULT_CONFIG_DIR = Path.home() / ".matlib"


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    NUMERICAL = "numerical"
    PERFORMANCE = "performance"
    LOGGING = "logging"


@dataclass
class NumericalConfig:
    """
    Numerical policy of the kernel.

    Attributes:
        pivot_tolerance: Pivots with magnitude at or below this are treated as zero
        jacobi_tolerance: Largest off-diagonal magnitude at which Jacobi stops
        jacobi_max_iterations: Hard cap on Jacobi rotations
        power_tolerance: Residual L1 norm, relative to max(1, |lambda|), at which power iteration stops
        power_max_iterations: Hard cap on power iteration steps
        symmetry_tolerance: Tolerance used to check Jacobi input for symmetry
    """
    pivot_tolerance: float = 1e-12
    jacobi_tolerance: float = 1e-4
    jacobi_max_iterations: int = 1000
    power_tolerance: float = 1e-10
    power_max_iterations: int = 1000
    symmetry_tolerance: float = 1e-8


@dataclass
class PerformanceConfig:
    """
    Performance settings.

    Attributes:
        enable_numba: Run the JIT-compiled kernels; when False the identical
            pure-Python functions behind them are called instead
    """
    enable_numba: bool = True


@dataclass
class LoggingConfig:
    """
    Logging configuration settings.

    Attributes:
        log_level: Default logging level
        log_file: Path to log file (None for no file logging)
        log_format: Format string for log messages
        log_date_format: Format string for log message timestamps
        console_logging: Whether to log to console
        file_logging: Whether to log to file
    """
    log_level: LogLevel = "WARNING"
    log_file: Optional[Path] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    console_logging: bool = True
    file_logging: bool = False


@dataclass
class MatLibConfig:
    """
    Complete configuration, one attribute per section.
    """
    numerical: NumericalConfig = field(default_factory=NumericalConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_DEFAULTS = MatLibConfig()


def _coerce(option: str, value: Any, current_value: Any, default_value: Any) -> Any:
    """Convert value to the type of the option it is assigned to."""
    value_type = type(default_value if default_value is not None else current_value)
    if option == "log_level" and isinstance(value, str):
        return value.upper()
    if isinstance(value, str):
        if value_type is bool:
            return value.lower() in ('true', 'yes', '1', 'y')
        if value_type is type(None) or isinstance(default_value, type(None)):
            return Path(value) if value else None
    if value_type is bool and not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    if value_type is int and isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    if value_type is type(None):
        return value
    return value_type(value)


class ConfigManager:
    """
    Configuration manager for the MatLib kernel.

    Attributes:
        _config: The current configuration object
        _initialized: Whether the configuration manager has been initialized
        _config_file: Path to the user configuration file
        _modified_keys: Options changed at runtime, as "section.option"
    """

    def __init__(self):
        """Initialize the configuration manager with default settings."""
        self._config = MatLibConfig()
        self._initialized = False
        self._config_file: Optional[Path] = None
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Initialize the configuration manager.

        This method:
        1. Loads the user configuration file if one exists
        2. Applies environment variable overrides
        3. Validates the configuration
        4. Sets up logging based on configuration
        """
        if self._initialized:
            return

        env_file = os.environ.get(CONFIG_FILE_ENV)
        self._config_file = Path(env_file) if env_file else DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILENAME

        self._load_user_config()
        self._apply_env_overrides()
        self._validate_config()
        self._setup_logging()

        self._initialized = True
        logger.debug("Configuration manager initialized")

    def _load_user_config(self) -> None:
        """Load the user configuration file, if present."""
        if not self._config_file or not self._config_file.exists():
            logger.debug("No user configuration file found")
            return

        try:
            with open(self._config_file, 'r') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load user configuration from {self._config_file}: {e}")
            return

        self._update_from_dict(user_config)
        logger.debug(f"Loaded user configuration from {self._config_file}")

    def _apply_env_overrides(self) -> None:
        """Apply MATLIB_<SECTION>_<OPTION> environment variable overrides."""
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX) or env_var == CONFIG_FILE_ENV:
                continue

            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, option = parts
            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            try:
                typed_value = _coerce(option, value, getattr(section_obj, option),
                                      getattr(getattr(_DEFAULTS, section), option))
            except (TypeError, ValueError) as e:
                logger.warning(f"Failed to apply environment override {env_var}: {e}")
                continue

            setattr(section_obj, option, typed_value)
            logger.debug(f"Applied environment override: {env_var}={value}")

        # Shorthand used by the package logger
        level = os.environ.get("MATLIB_LOG_LEVEL")
        if level:
            self._config.logging.log_level = level.upper()

    def _setup_logging(self) -> None:
        """Configure the package logger from the logging section."""
        root_logger = logging.getLogger("matlib")

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        root_logger.setLevel(getattr(logging, self._config.logging.log_level))

        formatter = logging.Formatter(
            fmt=self._config.logging.log_format,
            datefmt=self._config.logging.log_date_format
        )

        if self._config.logging.console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if self._config.logging.file_logging and self._config.logging.log_file:
            try:
                log_file = Path(self._config.logging.log_file)
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Failed to set up file logging: {e}")

    def _validate_config(self) -> None:
        """Validate every section, resetting invalid values to their defaults."""
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            for option in fields(section_obj):
                self._validate_constraint(section_obj, option.name,
                                          getattr(section_obj, option.name),
                                          section.value)

    def _validate_constraint(self, section: Any, attr_name: str, value: Any, section_name: str) -> None:
        """
        Validate a specific constraint on a configuration value.

        Args:
            section: The configuration section
            attr_name: The attribute name
            value: The attribute value
            section_name: The name of the section
        """
        default = getattr(getattr(_DEFAULTS, section_name), attr_name)

        if attr_name == "pivot_tolerance" and not is_valid_pivot_tolerance(value):
            logger.warning(f"Invalid pivot_tolerance: {value}, must be in [0, 1)")
            setattr(section, attr_name, default)

        elif attr_name in ("jacobi_tolerance", "power_tolerance", "symmetry_tolerance") and \
                not (isinstance(value, (int, float)) and value > 0):
            logger.warning(f"Invalid {attr_name}: {value}, must be positive")
            setattr(section, attr_name, default)

        elif attr_name in ("jacobi_max_iterations", "power_max_iterations") and \
                not (isinstance(value, int) and value > 0):
            logger.warning(f"Invalid {attr_name}: {value}, must be a positive integer")
            setattr(section, attr_name, default)

        elif attr_name == "log_level" and value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            logger.warning(f"Invalid log level: {value}, using {default}")
            setattr(section, attr_name, default)

        elif attr_name == "log_file" and isinstance(value, str):
            setattr(section, attr_name, Path(value))

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """
        Update the configuration from a dictionary.

        Args:
            config_dict: Dictionary of {section: {option: value}}
        """
        for section_name, section_dict in config_dict.items():
            if not hasattr(self._config, section_name) or not isinstance(section_dict, dict):
                logger.warning(f"Unknown configuration section: {section_name}")
                continue

            section = getattr(self._config, section_name)

            for option_name, option_value in section_dict.items():
                if not hasattr(section, option_name):
                    logger.warning(f"Unknown configuration option: {section_name}.{option_name}")
                    continue

                if option_name == "log_file" and isinstance(option_value, str):
                    option_value = Path(option_value)

                setattr(section, option_name, option_value)

    def save_user_config(self) -> Path:
        """
        Save the current configuration to the user configuration file.

        Returns:
            Path of the written file

        Raises:
            ConfigurationError: If the file cannot be written
        """
        if self._config_file is None:
            env_file = os.environ.get(CONFIG_FILE_ENV)
            self._config_file = Path(env_file) if env_file else DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILENAME

        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                "Failed to save user configuration",
                setting=str(self._config_file),
                issue=str(e)
            ) from e

        logger.debug(f"Saved user configuration to {self._config_file}")
        return self._config_file

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a JSON-serializable dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        result = {}
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            section_dict = {}
            for option in fields(section_obj):
                value = getattr(section_obj, option.name)
                if isinstance(value, Path):
                    value = str(value)
                section_dict[option.name] = value
            result[section.value] = section_dict
        return result

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            default: Default value if the option is not found

        Returns:
            The configuration value, or the default if not found
        """
        self.initialize()
        section_obj = getattr(self._config, section, None)
        if section_obj is None or not hasattr(section_obj, option):
            return default
        return getattr(section_obj, option)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            value: The value to set

        Raises:
            ConfigurationError: If the section or option is not found, or the
                value cannot be converted or violates the option's constraint
        """
        self.initialize()
        section_obj = self.get_section(section)

        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Option not found"
            )

        try:
            typed_value = _coerce(option, value, getattr(section_obj, option),
                                  getattr(getattr(_DEFAULTS, section), option))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to set configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue=str(e)
            ) from e

        previous = getattr(section_obj, option)
        setattr(section_obj, option, typed_value)
        self._validate_constraint(section_obj, option, typed_value, section)

        if getattr(section_obj, option) != typed_value:
            setattr(section_obj, option, previous)
            raise ConfigurationError(
                f"Invalid value for configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Value violates the option's constraint"
            )

        self._modified_keys.add(f"{section}.{option}")
        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

        logger.debug(f"Set configuration option: {section}.{option}={typed_value}")

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration to default values.

        Args:
            section: The configuration section to reset, or None to reset all
            option: The configuration option to reset, or None to reset the entire section

        Raises:
            ConfigurationError: If the section or option is not found
        """
        if section is None:
            self._config = MatLibConfig()
            self._modified_keys.clear()
            if self._initialized:
                self._setup_logging()
            logger.debug("Reset all configuration to defaults")
            return

        section_obj = self.get_section(section)

        if option is None:
            setattr(self._config, section, type(section_obj)())
            self._modified_keys = {k for k in self._modified_keys if not k.startswith(f"{section}.")}
            if section == ConfigSection.LOGGING.value and self._initialized:
                self._setup_logging()
            logger.debug(f"Reset configuration section {section} to defaults")
            return

        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                issue="Option not found"
            )

        setattr(section_obj, option, getattr(getattr(_DEFAULTS, section), option))
        self._modified_keys.discard(f"{section}.{option}")
        logger.debug(f"Reset configuration option {section}.{option} to default")

    def get_modified_options(self) -> List[str]:
        """Return the options changed at runtime, as "section.option" keys."""
        return sorted(self._modified_keys)

    def get_sections(self) -> List[str]:
        """Return the names of all configuration sections."""
        return [section.value for section in ConfigSection]

    def get_section(self, section: str) -> Any:
        """
        Get a configuration section dataclass.

        Raises:
            ConfigurationError: If the section is not found
        """
        if section not in self.get_sections():
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )
        return getattr(self._config, section)

    def get_config_file(self) -> Optional[Path]:
        """Return the path of the user configuration file."""
        return self._config_file

    def get_full_config(self) -> MatLibConfig:
        """Return the complete configuration object."""
        self.initialize()
        return self._config


# Global configuration manager instance
_config_manager = ConfigManager()


def initialize_config() -> None:
    """Initialize the global configuration manager."""
    _config_manager.initialize()


def get_config(section: str, option: str, default: Any = None) -> Any:
    """
    Get a configuration value from the global manager.

    Args:
        section: The configuration section
        option: The configuration option
        default: Default value if the option is not found
    """
    return _config_manager.get(section, option, default)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value in the global manager.

    Raises:
        ConfigurationError: If the section or option is not found or the value is invalid
    """
    _config_manager.set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """Reset configuration to defaults (all, one section, or one option)."""
    _config_manager.reset(section, option)


def save_config() -> Path:
    """Save the current configuration to the user configuration file."""
    return _config_manager.save_user_config()


def get_config_manager() -> ConfigManager:
    """Return the global configuration manager."""
    return _config_manager


def get_numerical_config() -> NumericalConfig:
    """Return the numerical configuration section."""
    return _config_manager.get_full_config().numerical


def to_dict() -> Dict[str, Any]:
    """Return the current configuration as a dictionary."""
    _config_manager.initialize()
    return _config_manager.to_dict()
