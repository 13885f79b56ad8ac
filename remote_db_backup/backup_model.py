"""
Backup model: owns the configured sources for one run.
"""

import logging
from typing import Any, Optional

from .command_runner import CommandRunner
from .compressors import Compressor, build_compressor
from .config import ConfigLoader
from .connection import ConnectivityProbe
from .errors import BackupError, ConfigurationError
from .models import BackupStats, DumpScope, SourceResult, SourceSettings
from .mysql_source import MySQLSource
from .naming import NamingRegistry
from .remote_source import RemoteSource
from .utilities import UtilityLocator

SOURCE_TYPES: dict[str, type] = {
    'mysql': MySQLSource,
}

# Old per-source keys that used to set the mysqldump path.
DEPRECATED_UTILITY_KEYS = {
    'utility_path': '3.0.21',
    'mysqldump_utility': '3.3.0',
}


class BackupModel:
    """Main class for remote backup operations."""

    def __init__(
        self,
        compressor: Optional[Compressor] = None,
        runner: Optional[CommandRunner] = None,
        utility: Optional[UtilityLocator] = None,
        registry: Optional[NamingRegistry] = None
    ):
        self.compressor = compressor
        self.runner = runner or CommandRunner()
        self.utility = utility or UtilityLocator()
        self.registry = registry or NamingRegistry()
        self.sources: list[RemoteSource] = []
        self._naming_finalized = False

    @classmethod
    def from_config(cls, config: ConfigLoader, **kwargs) -> "BackupModel":
        """Build a model and all its sources from a loaded configuration."""
        utility = kwargs.pop('utility', None) or UtilityLocator(config.get_utilities())
        compressor = build_compressor(config.get_compressor_settings(), utility)
        model = cls(compressor=compressor, utility=utility, **kwargs)

        defaults = config.get_defaults()
        for db_config in config.get_databases():
            model.add_source(model.build_source(db_config, defaults))
        return model

    def build_source(
        self,
        db_config: dict[str, Any],
        defaults: Optional[dict[str, Any]] = None
    ) -> RemoteSource:
        """Create a source from its config entry merged over ``defaults``."""
        self._apply_deprecated_options(db_config)
        settings = SourceSettings.from_configs(defaults or {}, db_config)

        source_class = SOURCE_TYPES.get(str(settings.type).lower())
        if source_class is None:
            raise ConfigurationError(
                f"Unknown database type '{settings.type}'. "
                f"Expected one of: {', '.join(SOURCE_TYPES)}"
            )

        name = settings.name
        if name is None or name == DumpScope.ALL.value:
            name = DumpScope.ALL

        return source_class(
            database_id=settings.database_id,
            remote_path=settings.remote_path,
            ssh_host=settings.ssh_host,
            ssh_port=settings.ssh_port,
            ssh_user=settings.ssh_user,
            additional_ssh_options=settings.additional_ssh_options,
            remote_name=name,
            remote_username=settings.username,
            remote_password=settings.password,
            remote_host=settings.host,
            remote_port=settings.port,
            remote_socket=settings.socket,
            skip_tables=settings.skip_tables,
            only_tables=settings.only_tables,
            additional_options=settings.additional_options,
            runner=self.runner,
            utility=self.utility
        )

    def _apply_deprecated_options(self, db_config: dict[str, Any]) -> None:
        for key, version in DEPRECATED_UTILITY_KEYS.items():
            if key in db_config:
                logging.warning(
                    f"Option '{key}' has been deprecated as of version {version}. "
                    f"Set 'mysqldump' under 'utilities' instead."
                )
                self.utility.configure({'mysqldump': db_config[key]})

    def add_source(self, source: RemoteSource) -> None:
        if self._naming_finalized:
            raise ConfigurationError("Cannot add a source after naming was finalized")
        self.sources.append(source)
        self.registry.register(source)

    def finalize_naming(self) -> None:
        """Fix every source's dump filename. Run once all sources are added."""
        for source in self.sources:
            source.finalize_naming(self.registry)
        self._naming_finalized = True

    def select(self, database_id: Optional[str] = None) -> list[RemoteSource]:
        """Sources to process, optionally only the one with ``database_id``."""
        if not database_id:
            return list(self.sources)
        wanted = RemoteSource.sanitize_id(database_id)
        selected = [s for s in self.sources if s.database_id == wanted]
        if not selected:
            logging.warning(f"No database with id '{database_id}' found in configuration")
        return selected

    def perform(self, database_id: Optional[str] = None) -> BackupStats:
        """Back up each source in turn. A failing source does not stop the others."""
        if not self._naming_finalized:
            self.finalize_naming()

        stats = BackupStats()
        sources = self.select(database_id)
        logging.info(f"Starting backup of {len(sources)} database(s)")

        for source in sources:
            result = SourceResult(name=source.database_name)
            try:
                result.file_path = source.perform(self.compressor)
                result.success = True
            except (BackupError, OSError) as e:
                result.error = str(e)
                logging.error(f"Error backing up {source.database_name}: {e}")
                stats.errors.append({
                    'database': source.database_name,
                    'error': str(e)
                })
            stats.sources.append(result)

        return stats

    def check(self, probe: bool = False, database_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Validate configuration without running a backup.

        With ``probe``, also open a live connection to each MySQL source.
        """
        if not self._naming_finalized:
            self.finalize_naming()

        problems = []
        for source in self.select(database_id):
            try:
                source.validate()
                pipeline = source.build_pipeline(self.compressor)
                if probe and isinstance(source, MySQLSource):
                    version = ConnectivityProbe.for_source(source).check()
                    logging.info(f"{source.database_name}: MySQL server {version}")
                logging.info(f"{source.database_name}: OK -> {pipeline.output_path}")
            except BackupError as e:
                logging.error(f"{source.database_name}: {e}")
                problems.append({'database': source.database_name, 'error': str(e)})
        return problems
