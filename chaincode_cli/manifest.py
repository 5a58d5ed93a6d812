"""Reading, creating and saving the project manifest (package.json)."""

import asyncio
import json
import logging
import os
from contextlib import suppress
from typing import Any, Dict, cast

from .context import InitContext
from .errors import CorruptManifest, PersistenceFailure, SubprocessFailure
from .utils.probe import file_exists_with_mode

logger = logging.getLogger(__name__)

Manifest = Dict[str, Any]

# Upper bound for a single stderr read from the init tool
STDERR_CHUNK_SIZE = 4096


async def run_init_tool(ctx: InitContext) -> None:
    """Run `<package_manager> init` interactively in the target directory.

    The tool shares the context's stdin/stdout so the user can answer its
    prompts. Its stderr is captured: any output there fails the run at once,
    regardless of the exit code.

    Raises:
        SubprocessFailure: If the tool cannot be started, writes to stderr or exits non-zero
    """
    command = [str(ctx.manifest_settings.get("package_manager", "npm")), "init"]
    await asyncio.to_thread(ctx.target_path.mkdir, parents=True, exist_ok=True)

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(ctx.target_path),
            stdin=ctx.stdin,
            stdout=ctx.stdout,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise SubprocessFailure(f"Could not start {' '.join(command)}: {e}") from e

    stderr = cast(asyncio.StreamReader, process.stderr)
    try:
        error_output = await stderr.read(STDERR_CHUNK_SIZE)
        if error_output:
            message = error_output.decode("utf-8", errors="replace").strip()
            raise SubprocessFailure(f"{command[0]} init error {message}")
        code = await process.wait()
    except BaseException:
        # The tool owns the terminal's stdin; never leave it running
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        raise

    if code != 0:
        raise SubprocessFailure(f"Exited with code {code}")


def parse_manifest(text: str, source: str = "package.json") -> Manifest:
    """Parse manifest text into a dictionary.

    Raises:
        CorruptManifest: If the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise CorruptManifest(f"Could not parse {source}: {e}") from e
    if not isinstance(data, dict):
        raise CorruptManifest(
            f"Expected a JSON object in {source}, got {type(data).__name__}"
        )
    return data


async def read_or_create_manifest(ctx: InitContext) -> Manifest:
    """Load the manifest, creating it with the interactive init tool if needed.

    Args:
        ctx: Current run context

    Returns:
        The parsed manifest. When it was just created, `scripts.test` is set to
        None so the default test script can take its place.
    """
    manifest_path = ctx.manifest_path
    was_created = False

    if await file_exists_with_mode(manifest_path, os.W_OK):
        logger.info(f"{manifest_path.name} found, reading content.")
    else:
        logger.info(f"No {manifest_path.name} found, initialize a new one.")
        await run_init_tool(ctx)
        was_created = True

    try:
        text = await asyncio.to_thread(manifest_path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorruptManifest(f"Could not read {manifest_path}: {e}") from e

    manifest = parse_manifest(text, str(manifest_path))

    if was_created and isinstance(manifest.get("scripts"), dict):
        # npm init writes a placeholder test script
        manifest["scripts"]["test"] = None

    return manifest


def serialize_manifest(manifest: Manifest) -> str:
    return json.dumps(manifest, indent=4, ensure_ascii=False) + "\n"


async def save_manifest(ctx: InitContext, manifest: Manifest) -> Manifest:
    """Write the manifest over the existing file.

    This is the only place the manifest file is written.

    Raises:
        PersistenceFailure: If the file cannot be written
    """
    manifest_path = ctx.manifest_path
    try:
        content = serialize_manifest(manifest)
        logger.debug(f"Storing manifest at {manifest_path}")
        await asyncio.to_thread(manifest_path.write_text, content, encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceFailure(f"Failed to store {manifest_path}: {e}") from e
    return manifest
