"""Filling in missing dev-dependency version constraints."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List

from .errors import CorruptManifest, DependencyResolutionFailure

logger = logging.getLogger(__name__)

VersionLookup = Callable[[str], Awaitable[str]]


def _dependency_section(manifest: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = manifest.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise CorruptManifest(
            f"Expected '{key}' to be an object, got {type(section).__name__}"
        )
    return section


def missing_dependencies(
    manifest: Dict[str, Any], required: Iterable[str]
) -> List[str]:
    """Return the required names declared in neither dependency mapping.

    Any non-null value counts as a declaration, even an empty string.
    """
    declared = set()
    for key in ("devDependencies", "dependencies"):
        section = _dependency_section(manifest, key)
        declared.update(name for name, value in section.items() if value is not None)

    missing = []
    for name in required:
        if name in declared:
            logger.debug(f"Keeping declared version of {name}")
        elif name not in missing:
            missing.append(name)
    return missing


async def add_dependencies(
    manifest: Dict[str, Any], required: Iterable[str], lookup: VersionLookup
) -> Dict[str, Any]:
    """Add a caret constraint on the latest version of every missing dependency.

    All lookups run concurrently and are awaited to completion. If any of them
    fails, nothing is added to the manifest.

    Args:
        manifest: Manifest to update in place
        required: Names that must be declared
        lookup: Coroutine function returning the latest version of a package

    Returns:
        The updated manifest

    Raises:
        DependencyResolutionFailure: If at least one lookup failed
    """
    missing = missing_dependencies(manifest, required)
    if missing:
        logger.info(f"Resolving latest versions for: {', '.join(missing)}")

    results = await asyncio.gather(
        *(lookup(name) for name in missing), return_exceptions=True
    )

    failed: Dict[str, BaseException] = {}
    resolved: Dict[str, str] = {}
    for name, result in zip(missing, results):
        if isinstance(result, BaseException):
            failed[name] = result
        else:
            resolved[name] = f"^{result}"

    if failed:
        details = "; ".join(f"{name}: {error}" for name, error in failed.items())
        raise DependencyResolutionFailure(
            f"Could not resolve {len(failed)} dependencies: {details}", failed
        )

    dev_dependencies = _dependency_section(manifest, "devDependencies")
    for name, constraint in resolved.items():
        if dev_dependencies.get(name) is None:
            dev_dependencies[name] = constraint
    manifest["devDependencies"] = dev_dependencies
    return manifest
