"""
Configuration management for the Playwright dashboard generator.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()

DEFAULT_INPUT_FILE = "test-results.json"
DEFAULT_OUTPUT_DIR = "dashboard"
DEFAULT_RERUN_COMMAND = "npx playwright test"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class FooterLink:
    """A link shown in the dashboard footer."""

    label: str
    url: str


@dataclass
class DashboardConfig:
    """Main configuration for the dashboard generator."""

    # Input / output
    input_file: str = DEFAULT_INPUT_FILE
    output_dir: str = DEFAULT_OUTPUT_DIR
    json_summary: Optional[str] = None

    # Presentation
    title: str = "Test Dashboard"
    footer_links: List[FooterLink] = field(
        default_factory=lambda: [FooterLink("Playwright", "https://playwright.dev")]
    )

    # Shown in diagnostics when the results document is missing or broken
    rerun_command: str = DEFAULT_RERUN_COMMAND

    def __post_init__(self) -> None:
        """Convert footer link dicts loaded from YAML into FooterLink objects."""
        links = self.footer_links or []
        if not isinstance(links, list):
            raise ConfigurationError(
                f"footer_links must be a list of {{label, url}} mappings, "
                f"got {type(links).__name__}"
            )
        converted = []
        for link in links:
            if isinstance(link, FooterLink):
                converted.append(link)
            elif isinstance(link, dict):
                try:
                    converted.append(FooterLink(**link))
                except TypeError as e:
                    raise ConfigurationError(f"Invalid footer link {link!r}: {e}")
            else:
                raise ConfigurationError(
                    f"Invalid footer link {link!r}: expected a mapping with label and url"
                )
        self.footer_links = converted


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - DASHBOARD_INPUT: Path of the Playwright JSON results file
    - DASHBOARD_OUTPUT_DIR: Directory the dashboard is written to
    - DASHBOARD_TITLE: Dashboard title
    - DASHBOARD_RERUN_COMMAND: Command suggested when results are missing
    - DASHBOARD_JSON_SUMMARY: Path of an optional JSON summary file

    Returns:
        Dictionary of configuration values from environment
    """
    env_config: Dict[str, Any] = {}

    mapping = {
        "DASHBOARD_INPUT": "input_file",
        "DASHBOARD_OUTPUT_DIR": "output_dir",
        "DASHBOARD_TITLE": "title",
        "DASHBOARD_RERUN_COMMAND": "rerun_command",
        "DASHBOARD_JSON_SUMMARY": "json_summary",
    }
    for var_name, key in mapping.items():
        if var_name in os.environ:
            env_config[key] = os.environ[var_name]

    return env_config


def load_config(config_file: Optional[str] = None) -> DashboardConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        DashboardConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or unknown keys
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")

            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping at the top level"
                )
            config_data.update(file_config)

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        try:
            return DashboardConfig(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def _validate_link_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        # e.g. an unterminated IPv6 host
        return False
    if parsed.scheme in ("http", "https"):
        return bool(parsed.netloc)
    # Relative links are fine for statically hosted dashboards
    return not parsed.scheme and not parsed.netloc


def validate_config(config: DashboardConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: DashboardConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    for name in ("input_file", "output_dir", "title", "rerun_command"):
        value = getattr(config, name)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{name} must be a non-empty string")

    if config.json_summary is not None and (
        not isinstance(config.json_summary, str) or not config.json_summary.strip()
    ):
        errors.append("json_summary must be a non-empty string when set")

    for i, link in enumerate(config.footer_links):
        if not link.label:
            errors.append(f"footer_links[{i}] is missing label")
        elif not isinstance(link.label, str):
            errors.append(f"footer_links[{i}].label must be a string")
        if not link.url:
            errors.append(f"footer_links[{i}] is missing url")
        elif not isinstance(link.url, str):
            errors.append(f"footer_links[{i}].url must be a string")
        elif not _validate_link_url(link.url):
            errors.append(f"footer_links[{i}].url must be http(s) or relative: {link.url}")

    return errors
