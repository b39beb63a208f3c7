"""TOML configuration loader for asyncdoc."""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, cast

from asyncdoc.core.config.models import AsyncDocConfig, LoggingConfig
from asyncdoc.core.document.models import DEFAULT_TITLE, DEFAULT_VERSION
from asyncdoc.core.exceptions import ConfigurationError
from asyncdoc.core.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

CONFIG_FILE_NAMES = ("asyncdoc.toml", "pyproject.toml", ".asyncdoc.toml")

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


def _parse_bool_setting(component: str, value: Any) -> bool:
    """Read a boolean setting that may arrive as a string after ${VAR} substitution.

    Raises
    ------
    ConfigurationError
        If value is neither a boolean nor a recognized boolean string
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return _parse_bool_env(value)
        except ValueError as e:
            raise ConfigurationError(component, str(e)) from e
    raise ConfigurationError(component, f"expected a boolean, got {value!r}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> AsyncDocConfig:
    """Cached configuration loader."""
    return ConfigLoader()._load_and_parse(Path(path_str))


class ConfigLoader:
    """Loads and processes asyncdoc configuration from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_from_toml(self, path: str | Path | None = None) -> AsyncDocConfig:
        """Load configuration from TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches for asyncdoc.toml or a
            pyproject.toml with a ``[tool.asyncdoc]`` section

        Returns
        -------
        AsyncDocConfig
            Parsed configuration with environment variables substituted
        """
        config_path = self._find_config_file(path)
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> AsyncDocConfig:
        """Load and parse configuration file."""
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        if "tool" in data and "asyncdoc" in data.get("tool", {}):
            section = data["tool"]["asyncdoc"]
        elif config_path.name == "pyproject.toml":
            logger.warning("No [tool.asyncdoc] section found in pyproject.toml, using defaults")
            section = {}
        else:
            # Flat format (top-level keys)
            section = data

        section = self._substitute_env_vars(section)
        return self._parse_config(section)

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("ASYNCDOC_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug(f"Using config from ASYNCDOC_CONFIG_PATH: {config_path}")
                return config_path
            logger.warning(f"ASYNCDOC_CONFIG_PATH set but file not found: {config_path}")

        for name in CONFIG_FILE_NAMES:
            candidate = Path(name)
            if candidate.exists() and (name != "pyproject.toml" or _has_tool_section(candidate)):
                return candidate

        # Also check parent directories for pyproject.toml
        current = Path.cwd()
        while current != current.parent:
            pyproject = current / "pyproject.toml"
            if pyproject.exists() and _has_tool_section(pyproject):
                return pyproject
            current = current.parent

        raise FileNotFoundError(
            f"No configuration file found. Searched for: {', '.join(CONFIG_FILE_NAMES)}"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` with environment values.

        Unset variables keep their placeholder.
        """
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        f"Environment variable ${{{var_name}}} not found, keeping placeholder"
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> AsyncDocConfig:
        """Parse raw ``[tool.asyncdoc]`` data into AsyncDocConfig."""
        strict = _parse_bool_setting("strict", data.get("strict", False))
        if env_strict := os.getenv("ASYNCDOC_STRICT"):
            try:
                strict = _parse_bool_env(env_strict)
            except ValueError as e:
                logger.warning(f"Invalid ASYNCDOC_STRICT value: {e}")

        config = AsyncDocConfig(
            title=str(data.get("title", DEFAULT_TITLE)),
            version=str(data.get("version", DEFAULT_VERSION)),
            senders=self._parse_bindings("senders", data.get("senders", {})),
            receivers=self._parse_bindings("receivers", data.get("receivers", {})),
            output=data.get("output"),
            output_format=data.get("format", "yaml"),
            strict=strict,
            logging=self._parse_logging_config(data.get("logging", {})),
        )
        logger.debug(
            "Loaded {senders} senders and {receivers} receivers",
            senders=len(config.senders),
            receivers=len(config.receivers),
        )
        return config

    @staticmethod
    def _parse_bindings(section: str, raw: Any) -> dict[str, str]:
        if not isinstance(raw, dict):
            raise ConfigurationError(section, "must be a table of channel = \"module.Type\"")
        bindings: dict[str, str] = {}
        for channel, path in raw.items():
            if not isinstance(path, str) or not path:
                raise ConfigurationError(
                    section, f"channel '{channel}' must map to a type path string"
                )
            bindings[str(channel)] = path
        return bindings

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over TOML configuration:
        - ASYNCDOC_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - ASYNCDOC_LOG_FORMAT: Output format (console, json, structured, rich)
        - ASYNCDOC_LOG_FILE: Optional file path for log output
        - ASYNCDOC_LOG_COLOR: Use color output (true/false)
        - ASYNCDOC_LOG_TIMESTAMP: Include timestamp (true/false)
        """
        level = logging_data.get("level", "WARNING")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = _parse_bool_setting("logging.use_color", logging_data.get("use_color", True))
        include_timestamp = _parse_bool_setting(
            "logging.include_timestamp", logging_data.get("include_timestamp", True)
        )

        if env_level := os.getenv("ASYNCDOC_LOG_LEVEL"):
            level = env_level.upper()
            logger.debug(f"Overriding log level from env: {level}")

        if env_format := os.getenv("ASYNCDOC_LOG_FORMAT"):
            format_type = env_format.lower()
            logger.debug(f"Overriding log format from env: {format_type}")

        if env_file := os.getenv("ASYNCDOC_LOG_FILE"):
            output_file = env_file
            logger.debug(f"Overriding log file from env: {output_file}")

        if env_color := os.getenv("ASYNCDOC_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning(f"Invalid ASYNCDOC_LOG_COLOR value: {e}")

        if env_timestamp := os.getenv("ASYNCDOC_LOG_TIMESTAMP"):
            try:
                include_timestamp = _parse_bool_env(env_timestamp)
            except ValueError as e:
                logger.warning(f"Invalid ASYNCDOC_LOG_TIMESTAMP value: {e}")

        return LoggingConfig(
            level=cast("Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']", level),
            format=cast("Literal['console', 'json', 'structured', 'rich']", format_type),
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


def _has_tool_section(pyproject: Path) -> bool:
    with pyproject.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError:
            return False
    return "asyncdoc" in data.get("tool", {})


def load_config(path: str | Path | None = None) -> AsyncDocConfig:
    """Load configuration from TOML file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search

    Returns
    -------
    AsyncDocConfig
        Loaded configuration, or defaults if no file was found and no
        explicit path was given

    Raises
    ------
    FileNotFoundError
        If an explicit ``path`` does not exist
    """
    loader = ConfigLoader()
    if path:
        return loader.load_from_toml(path)
    try:
        return loader.load_from_toml(None)
    except FileNotFoundError:
        logger.info("No configuration file found, using defaults")
        return get_default_config()


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when configuration files have been modified.
    """
    _load_and_parse_cached.cache_clear()


def get_default_config() -> AsyncDocConfig:
    """Default configuration: no bindings, YAML to stdout."""
    return AsyncDocConfig()
