"""Init pipeline for chaincode projects.

Stages run strictly in order, each one settling before the next starts:

1. read or create package.json
2. add missing dev dependencies at their latest version
3. add default npm scripts
4. add the default configuration block
5. save package.json (the only write of the manifest)
6. create the directory layout

A failure at any stage stops the run. Since the manifest is written once in
stage 5, failing earlier leaves an existing package.json untouched.
"""

import asyncio
import logging
from typing import Optional

from .config import get_registry_params
from .configuration import add_configuration, add_scripts, load_chaincode_config
from .context import InitContext
from .dependencies import VersionLookup, add_dependencies
from .manifest import (
    Manifest,
    read_or_create_manifest,
    save_manifest,
    serialize_manifest,
)
from .scaffold import create_structure
from .utils.registry import RegistryClient

logger = logging.getLogger(__name__)


class InitPipeline:
    """Runs the init stages against one project directory."""

    def __init__(self, ctx: InitContext, lookup: Optional[VersionLookup] = None):
        """Initialize the pipeline.

        Args:
            ctx: Context of the run
            lookup: Coroutine function resolving a package to its latest version.
                If None, the npm registry from the config is queried.
        """
        self.ctx = ctx
        if lookup is None:
            params = get_registry_params(ctx.config)
            lookup = RegistryClient(params["url"], params["timeout"]).latest_version
        self.lookup = lookup

    async def run(self) -> Manifest:
        settings = self.ctx.manifest_settings

        manifest = await read_or_create_manifest(self.ctx)
        manifest = await add_dependencies(
            manifest, settings.get("dev_dependencies") or [], self.lookup
        )
        manifest = add_scripts(manifest, settings.get("scripts") or {})
        manifest = add_configuration(manifest, self.ctx.config_key)

        logger.info(f"Saving {self.ctx.manifest_path.name}")
        logger.info(serialize_manifest(manifest).rstrip())
        await save_manifest(self.ctx, manifest)

        config = load_chaincode_config(manifest, self.ctx.config_key)
        await create_structure(self.ctx, config)
        logger.info("Done initializing!")
        return manifest


def run_init(ctx: InitContext, lookup: Optional[VersionLookup] = None) -> Manifest:
    """Run the init pipeline to completion on a fresh event loop."""
    return asyncio.run(InitPipeline(ctx, lookup).run())
