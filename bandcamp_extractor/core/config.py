"""
Configuration management for bandcamp-extractor.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Network settings for page fetching (user agent, timeout, retries)
    - Optional log directory for file logs
    - Number of pages extracted in parallel by the CLI

Configuration File Location:
    An explicit path may be passed with --config. Otherwise config.yaml
    in the current working directory is used when present, and built-in
    defaults apply when it is not.

Example config.yaml:
    network:
      user_agent: "Mozilla/5.0 ..."
      timeout: 15
      retries: 3
      retry_delay: 1.0

    output:
      log_directory: "~/.local/state/bandcamp-extractor"

    extraction:
      threads: 4
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bandcamp_extractor.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

# Browser-like User-Agent; Bandcamp answers 403 to many library defaults
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 15.0
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_THREADS = 4


@dataclass(frozen=True)
class NetworkConfig:
    """
    Page fetching configuration.

    Attributes:
        user_agent: User-Agent header sent with every request.
        timeout: Per-request timeout in seconds.
        retries: Total number of attempts for a retryable failure.
                 1 means no retry.
        retry_delay: Delay before the first retry in seconds.
                     Doubled after every further failed attempt.
    """
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY


@dataclass(frozen=True)
class OutputConfig:
    """
    Output configuration.

    Attributes:
        log_directory: Directory for log files, or None to log to console only.
                       Path expansion is performed (~ is expanded to home directory).
    """
    log_directory: Path | None = None


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Extraction behavior configuration.

    Attributes:
        threads: Number of pages fetched in parallel when several URLs
                 are given on the command line. Each page still gets its
                 own extractor instance.
    """
    threads: int = DEFAULT_THREADS


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable (frozen dataclass).

    Attributes:
        network: Page fetching settings.
        output: Log output settings.
        extraction: CLI parallelism settings.
    """
    network: NetworkConfig = field(default_factory=NetworkConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory
                     and falls back to defaults when it does not exist.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, has invalid YAML
                     syntax, is not a dictionary, or contains invalid values.

    Example:
        try:
            config = load_config()
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
            sys.exit(1)
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return Config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "use defaults" config
    if raw_config is None:
        return Config()

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return Config(
        network=_parse_network_config(_section(raw_config, "network")),
        output=_parse_output_config(_section(raw_config, "output")),
        extraction=_parse_extraction_config(_section(raw_config, "extraction"))
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return an optional top-level section, validating its type."""
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful timeout
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_network_config(section: dict[str, Any]) -> NetworkConfig:
    """
    Parse and validate the network configuration section.

    Args:
        section: The 'network' section from config.yaml (may be empty).

    Returns:
        NetworkConfig: Validated settings with defaults applied.

    Raises:
        ConfigError: If any value has the wrong type or range.
    """
    user_agent = section.get("user_agent", DEFAULT_USER_AGENT)
    if not isinstance(user_agent, str) or not user_agent.strip():
        raise ConfigError(
            "'network.user_agent' must be a non-empty string",
            details={"field": "network.user_agent"}
        )

    timeout = section.get("timeout", DEFAULT_TIMEOUT)
    if not _is_number(timeout) or timeout <= 0:
        raise ConfigError(
            "'network.timeout' must be a positive number",
            details={"field": "network.timeout", "value": timeout}
        )

    retries = section.get("retries", DEFAULT_RETRIES)
    if not isinstance(retries, int) or isinstance(retries, bool) or retries < 1:
        raise ConfigError(
            "'network.retries' must be a positive integer",
            details={"field": "network.retries", "value": retries}
        )

    retry_delay = section.get("retry_delay", DEFAULT_RETRY_DELAY)
    if not _is_number(retry_delay) or retry_delay < 0:
        raise ConfigError(
            "'network.retry_delay' must be a non-negative number",
            details={"field": "network.retry_delay", "value": retry_delay}
        )

    return NetworkConfig(
        user_agent=user_agent.strip(),
        timeout=float(timeout),
        retries=retries,
        retry_delay=float(retry_delay)
    )


def _parse_output_config(section: dict[str, Any]) -> OutputConfig:
    """
    Parse and validate the output configuration section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (that happens when logging is set up).
    """
    raw_dir = section.get("log_directory")
    if raw_dir is None:
        return OutputConfig()

    if not isinstance(raw_dir, str) or not raw_dir.strip():
        raise ConfigError(
            "'output.log_directory' must be a non-empty string or null",
            details={"field": "output.log_directory"}
        )

    return OutputConfig(log_directory=Path(raw_dir.strip()).expanduser().resolve())


def _parse_extraction_config(section: dict[str, Any]) -> ExtractionConfig:
    threads = section.get("threads", DEFAULT_THREADS)
    if not isinstance(threads, int) or isinstance(threads, bool) or threads < 1:
        raise ConfigError(
            "'extraction.threads' must be a positive integer",
            details={"field": "extraction.threads", "value": threads}
        )
    return ExtractionConfig(threads=threads)
