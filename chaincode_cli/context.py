import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, TextIO

from .config import get_config


@dataclass
class InitContext:
    """Everything a pipeline stage needs to know about the current run.

    Args:
        target_path: Resolved project directory being initialized
        config: Merged settings from get_config()
        stdin: Stream handed to the interactive manifest creation tool
        stdout: Stream handed to the interactive tool and used for user notices
    """

    target_path: Path
    config: Dict[str, Any] = field(default_factory=get_config)
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> "InitContext":
        return cls(target_path=Path(path).expanduser().resolve(), **kwargs)

    @property
    def manifest_settings(self) -> Dict[str, Any]:
        return self.config.get("manifest", {}) or {}

    @property
    def scaffold_settings(self) -> Dict[str, Any]:
        return self.config.get("scaffold", {}) or {}

    @property
    def manifest_path(self) -> Path:
        return self.target_path / self.manifest_settings.get("file_name", "package.json")

    @property
    def config_key(self) -> str:
        return str(self.manifest_settings.get("config_key", "config"))
