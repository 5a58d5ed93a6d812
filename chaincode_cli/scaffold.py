"""Directory layout of a chaincode project.

Every operation here is safe to repeat: directories are created only when
missing, the shared `common` package files are copied only when absent, and the
configuration templates are simply reapplied over the project root.
"""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from .config import get_templates_dir
from .configuration import ChaincodeConfig
from .context import InitContext
from .utils.probe import file_exists_with_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaffoldPlan:
    """Destinations derived from the configuration paths of one run."""

    root: Path
    source_dir: Path
    test_dir: Path
    chaincode_dir: Path
    common_dir: Path
    templates_dir: Path

    @property
    def common_package(self) -> Path:
        return self.common_dir / "package.json"

    @property
    def common_constants(self) -> Path:
        return self.common_dir / "constants"

    @classmethod
    def from_config(
        cls,
        root: Path,
        config: ChaincodeConfig,
        chaincode_dir_name: str = "chaincode",
        common_dir_name: str = "common",
        templates_dir: Path | None = None,
    ) -> "ScaffoldPlan":
        source_dir = (root / config.source_path).resolve()
        return cls(
            root=root,
            source_dir=source_dir,
            test_dir=(root / config.test_path).resolve(),
            chaincode_dir=source_dir / chaincode_dir_name,
            common_dir=source_dir / common_dir_name,
            templates_dir=templates_dir or get_templates_dir(),
        )


def _copy(src: Path, dst: Path) -> None:
    if src.is_dir():
        shutil.copytree(src, dst, dirs_exist_ok=True)
    else:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)


async def ensure_dir(path: Path) -> None:
    await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    logger.debug(f"Ensured directory {path}")


async def copy_template(src: Path, dst: Path) -> None:
    await asyncio.to_thread(_copy, src, dst)
    logger.info(f"Copied {src.name} to {dst}")


async def copy_if_absent(src: Path, dst: Path) -> bool:
    """Copy a template unless a readable file already sits at the destination.

    Returns:
        True if the template was copied
    """
    if await file_exists_with_mode(dst, os.R_OK):
        logger.info(f"Keeping existing {dst}")
        return False
    await copy_template(src, dst)
    return True


async def _build_common(plan: ScaffoldPlan) -> None:
    await ensure_dir(plan.common_dir)
    await asyncio.gather(
        copy_if_absent(plan.templates_dir / "commonPackage.json", plan.common_package),
        copy_if_absent(plan.templates_dir / "constants", plan.common_constants),
    )


async def _build_source(plan: ScaffoldPlan) -> None:
    await ensure_dir(plan.source_dir)
    await asyncio.gather(
        copy_template(plan.templates_dir / "configuration", plan.root),
        ensure_dir(plan.chaincode_dir),
        _build_common(plan),
    )


async def build_scaffold(plan: ScaffoldPlan) -> None:
    await asyncio.gather(ensure_dir(plan.test_dir), _build_source(plan))


async def create_structure(ctx: InitContext, config: ChaincodeConfig) -> ScaffoldPlan:
    """Create the project layout described by the configuration block.

    Args:
        ctx: Current run context
        config: Validated configuration from the manifest

    Returns:
        The plan that was applied
    """
    settings = ctx.scaffold_settings
    plan = ScaffoldPlan.from_config(
        ctx.target_path,
        config,
        chaincode_dir_name=settings.get("chaincode_dir", "chaincode"),
        common_dir_name=settings.get("common_dir", "common"),
    )
    await build_scaffold(plan)
    return plan
