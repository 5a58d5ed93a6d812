"""Filesystem existence checks that never raise for a missing path."""

import asyncio
import logging
import os
from pathlib import Path

from ..errors import ProbeIOFailure

logger = logging.getLogger(__name__)


def _exists_with_mode(path: Path, mode: int) -> bool:
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except PermissionError:
        logger.debug(f"{path} exists but cannot be inspected")
        return False
    except OSError as e:
        raise ProbeIOFailure(f"Could not check {path}: {e}") from e
    return os.access(path, mode)


async def file_exists_with_mode(path: str | Path, mode: int) -> bool:
    """Check whether a path exists and is accessible with the given mode.

    Args:
        path: Path to check
        mode: os.R_OK, os.W_OK or a combination of them

    Returns:
        True if the path exists and grants the mode, False if it is missing or inaccessible

    Raises:
        ProbeIOFailure: If the filesystem reports any other error
    """
    return await asyncio.to_thread(_exists_with_mode, Path(path), mode)
