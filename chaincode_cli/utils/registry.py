"""npm registry utilities."""

import asyncio
import logging
import requests
from typing import Any, Dict

from ..errors import DependencyResolutionFailure

logger = logging.getLogger(__name__)

# Abbreviated package metadata, same header npm itself sends
ABBREVIATED_ACCEPT = (
    "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8, */*"
)


def package_url(registry_url: str, name: str) -> str:
    """Build the metadata URL for a package.

    Args:
        registry_url: Base URL of the registry.
        name: Package name, optionally scoped (e.g. "@scope/pkg").

    Returns:
        The metadata URL with the scope separator escaped.
    """
    if not name or name.strip() != name:
        raise ValueError(f"Invalid package name: {name!r}")
    return f"{registry_url.rstrip('/')}/{name.replace('/', '%2F')}"


def fetch_latest_version(
    name: str, registry_url: str, timeout: float | None = None
) -> str:
    """Fetch the latest published version of a package.

    Args:
        name: Package name.
        registry_url: Base URL of the registry.
        timeout: Request timeout in seconds, or None to wait indefinitely.

    Returns:
        The version tagged `latest`, e.g. "29.7.0".

    Raises:
        DependencyResolutionFailure: If the version cannot be resolved.
    """
    try:
        api_url = package_url(registry_url, name)
    except ValueError as e:
        raise DependencyResolutionFailure(str(e)) from e

    logger.debug(f"Fetching latest version from registry: {api_url}")
    try:
        response = requests.get(
            api_url, headers={"Accept": ABBREVIATED_ACCEPT}, timeout=timeout
        )
        response.raise_for_status()
        data: Dict[str, Any] = response.json()
    except Exception as e:
        raise DependencyResolutionFailure(
            f"Error fetching package metadata from {api_url}: {str(e)}"
        ) from e

    if not isinstance(data, dict):
        raise DependencyResolutionFailure(
            f"Invalid response format from registry: {api_url}"
        )
    version = (data.get("dist-tags") or {}).get("latest")
    if not isinstance(version, str) or not version:
        raise DependencyResolutionFailure(f"No latest version published for {name}")
    return version


class RegistryClient:
    """Resolves package names to their latest version without blocking the event loop."""

    def __init__(self, registry_url: str, timeout: float | None = None):
        self.registry_url = registry_url
        self.timeout = timeout

    async def latest_version(self, name: str) -> str:
        return await asyncio.to_thread(
            fetch_latest_version, name, self.registry_url, self.timeout
        )
