"""
Data models and enums for Remote Database Backup.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class DumpScope(Enum):
    """Dump scope sentinel: every database on the server."""
    ALL = "*"


@dataclass
class CommandResult:
    """Outcome of a single shell command."""
    exit_status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_status == 0


@dataclass
class PipelineResult:
    """Aggregate outcome of a connected pipeline."""
    success: bool
    error_messages: str = ""
    exit_statuses: list[int] = field(default_factory=list)


@dataclass
class SourceResult:
    """Result of performing one source."""
    name: str
    file_path: str = ""
    success: bool = False
    error: Optional[str] = None


@dataclass
class BackupStats:
    """Overall statistics for one backup run."""
    sources: list[SourceResult] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.sources if s.success)


@dataclass
class SourceSettings:
    """Merged settings for one configured source."""
    type: str = "mysql"
    database_id: Optional[str] = None
    remote_path: Optional[str] = None
    ssh_host: Optional[str] = None
    ssh_port: int = 22
    ssh_user: Optional[str] = None
    additional_ssh_options: Any = None
    name: Any = None
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Any = None
    socket: Optional[str] = None
    skip_tables: list[str] = field(default_factory=list)
    only_tables: list[str] = field(default_factory=list)
    additional_options: Any = None

    @classmethod
    def from_configs(
        cls,
        defaults: dict[str, Any],
        db_config: dict[str, Any]
    ) -> "SourceSettings":
        """
        Create SourceSettings by merging configs with priority: database > defaults.

        Unknown keys are ignored.
        """
        settings = {}
        for key in cls.__dataclass_fields__:
            if key in defaults:
                settings[key] = defaults[key]
            if key in db_config:
                settings[key] = db_config[key]
        return cls(**settings)
