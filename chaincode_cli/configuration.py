"""Default npm scripts and tool configuration merged into the manifest.

Both merges use the same shallow policy:

- parent key missing or null: created with the whole default table
- parent key is an object: only children that are missing or null are filled
- parent key of any other type: CorruptManifest
"""

import copy
import logging
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CorruptManifest

logger = logging.getLogger(__name__)


class ChaincodeConfig(BaseModel):
    """Tool configuration block stored in the manifest."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    chaincodes: List[str] = Field(default_factory=list)
    source_path: str = Field("./src", alias="sourcePath")
    build_path: str = Field("./build", alias="buildPath")
    test_path: str = Field("./test", alias="testPath")


def default_configuration() -> Dict[str, Any]:
    return ChaincodeConfig().model_dump(by_alias=True)


def fill_defaults(
    manifest: Dict[str, Any], key: str, defaults: Mapping[str, Any]
) -> Dict[str, Any]:
    """Add each default under manifest[key] unless it is already set.

    Returns:
        The (possibly new) section stored under `key`
    """
    section = manifest.get(key)
    if section is None:
        section = {}
    elif not isinstance(section, dict):
        raise CorruptManifest(
            f"Expected '{key}' to be an object, got {type(section).__name__}"
        )

    for name, value in defaults.items():
        if section.get(name) is None:
            logger.debug(f"Adding default {key}.{name}")
            section[name] = copy.deepcopy(value)

    manifest[key] = section
    return section


def add_scripts(
    manifest: Dict[str, Any], scripts: Mapping[str, str]
) -> Dict[str, Any]:
    fill_defaults(manifest, "scripts", scripts)
    return manifest


def load_chaincode_config(manifest: Dict[str, Any], key: str) -> ChaincodeConfig:
    """Validate the configuration block of a manifest.

    Raises:
        CorruptManifest: If the block is missing or a field has the wrong type
    """
    section = manifest.get(key)
    if not isinstance(section, dict):
        raise CorruptManifest(f"Missing '{key}' configuration in manifest")
    try:
        return ChaincodeConfig.model_validate(section)
    except ValidationError as e:
        raise CorruptManifest(f"Invalid '{key}' configuration: {e}") from e


def add_configuration(manifest: Dict[str, Any], key: str) -> Dict[str, Any]:
    fill_defaults(manifest, key, default_configuration())
    load_chaincode_config(manifest, key)
    return manifest
