"""
Remote Database Backup
======================
Dumps databases straight to a remote host over SSH with support for:
- Multiple sources of the same type with distinct output filenames
- Single database or all databases per source
- Table include/skip filters
- Compression through gzip, bzip2 or a custom filter
"""

from .backup_model import BackupModel
from .command_runner import CommandRunner, Pipeline
from .compressors import Bzip2, Compressor, Custom, Gzip, build_compressor
from .config import ConfigLoader
from .connection import ConnectivityProbe
from .dump_pipeline import DumpPipeline
from .errors import (
    BackupError,
    ConfigurationError,
    ConnectivityValidationError,
    PipelineError,
    RemoteExecutionError,
    UtilityNotFoundError,
)
from .main import main
from .models import (
    BackupStats,
    CommandResult,
    DumpScope,
    PipelineResult,
    SourceResult,
    SourceSettings,
)
from .mysql_source import MySQLSource
from .naming import NamingRegistry
from .remote_source import RemoteSource
from .utilities import UtilityLocator
from .utils import mask_sensitive, print_dry_run_info, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "BackupModel",
    "CommandRunner",
    "ConfigLoader",
    "ConnectivityProbe",
    "DumpPipeline",
    "MySQLSource",
    "NamingRegistry",
    "Pipeline",
    "RemoteSource",
    "UtilityLocator",
    # Compressors
    "Bzip2",
    "Compressor",
    "Custom",
    "Gzip",
    "build_compressor",
    # Errors
    "BackupError",
    "ConfigurationError",
    "ConnectivityValidationError",
    "PipelineError",
    "RemoteExecutionError",
    "UtilityNotFoundError",
    # Models
    "BackupStats",
    "CommandResult",
    "DumpScope",
    "PipelineResult",
    "SourceResult",
    "SourceSettings",
    # Utilities
    "mask_sensitive",
    "print_dry_run_info",
    "setup_logging",
]
