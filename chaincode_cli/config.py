import os
import yaml
from pathlib import Path
from typing import Any, Dict
from dotenv import dotenv_values, find_dotenv
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variables that override individual settings
ENV_OVERRIDES = {
    "CHAINCODE_CLI_REGISTRY_URL": ("registry", "url"),
    "CHAINCODE_CLI_PACKAGE_MANAGER": ("manifest", "package_manager"),
}


def get_package_root() -> Path:
    """Get the directory of the installed chaincode_cli package.

    Returns:
        Path to the package directory, which holds config.yaml and the templates
    """
    return Path(__file__).parent


def get_templates_dir() -> Path:
    """Get the directory holding the static init templates."""
    return get_package_root() / "templates" / "init"


def get_config() -> Dict[str, Any]:
    """Get configuration by merging config.yaml and environment variables.
    Values from .env and the process environment take precedence over config.yaml values.

    Returns:
        Dictionary containing merged configuration
    """
    # Load config file
    config_path = Path(
        os.getenv("CHAINCODE_CLI_CONFIG_PATH", str(get_package_root() / "config.yaml"))
    )
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse config file {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    # Load environment variables from .env file
    env_vars: Dict[str, Any] = {}
    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        logger.debug("No .env file found")
    else:
        env_vars.update(dotenv_values(dotenv_path))

    # Process environment wins over .env
    env_vars.update({k: v for k, v in os.environ.items() if k in ENV_OVERRIDES})

    for name, (section, key) in ENV_OVERRIDES.items():
        value = env_vars.get(name)
        if value:
            config.setdefault(section, {})[key] = value

    return config  # type: ignore[no-any-return]


def get_registry_params(config: dict) -> dict:
    """Get npm registry parameters from config with defaults.

    Args:
        config: Config dictionary containing a `registry` section

    Returns:
        Dictionary of registry parameters with the following keys:
        - url: Base URL of the registry (default: https://registry.npmjs.org)
        - timeout: Request timeout in seconds, None disables it (default: 30)
    """
    registry = config.get("registry", {}) or {}
    return {
        "url": str(registry.get("url", "https://registry.npmjs.org")).rstrip("/"),
        "timeout": registry.get("timeout", 30),
    }
