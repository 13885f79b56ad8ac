"""
Base class for databases dumped straight to a remote host over SSH.
"""

import logging
import re
from typing import Any, Optional, Union

from .command_runner import CommandRunner
from .dump_pipeline import DumpPipeline
from .errors import ConfigurationError, RemoteExecutionError
from .naming import NamingRegistry
from .utilities import UtilityLocator


class RemoteSource:
    """One configured remote database backup unit.

    Subclasses set ``engine_name`` and implement ``dump_command()``.
    ``finalize_naming()`` must run, with every sibling already registered,
    before ``perform()``; the owning model takes care of that.
    """

    engine_name = "Database"
    DEFAULT_SSH_PORT = 22

    def __init__(
        self,
        database_id: Optional[Any] = None,
        remote_path: Optional[str] = None,
        ssh_host: Optional[str] = None,
        ssh_port: int = DEFAULT_SSH_PORT,
        ssh_user: Optional[str] = None,
        additional_ssh_options: Union[str, list[str], None] = None,
        runner: Optional[CommandRunner] = None,
        utility: Optional[UtilityLocator] = None
    ):
        self.database_id = self.sanitize_id(database_id)

        self.remote_path = remote_path
        self.ssh_host = ssh_host
        self.ssh_port = ssh_port if ssh_port is not None else self.DEFAULT_SSH_PORT
        self.ssh_user = ssh_user
        self.additional_ssh_options = additional_ssh_options

        self.runner = runner or CommandRunner()
        self.utility = utility or UtilityLocator()

        self._dest_path: Optional[str] = None
        self._dump_filename: Optional[str] = None

    @staticmethod
    def sanitize_id(database_id: Optional[Any]) -> Optional[str]:
        """Replace non-word characters with ``_``. Empty ids become None."""
        if database_id is None or str(database_id) == '':
            return None
        return re.sub(r'\W', '_', str(database_id))

    def identity(self) -> tuple[str, Optional[str]]:
        return self.engine_name, self.database_id

    @property
    def database_name(self) -> str:
        """Display name used in log lines, e.g. ``MySQL (app)``."""
        if self.database_id:
            return f"{self.engine_name} ({self.database_id})"
        return self.engine_name

    # ------------------------------------------------------------------
    # Naming

    def finalize_naming(self, registry: NamingRegistry) -> str:
        """Fix the dump filename for the rest of the run.

        Safe to call repeatedly: only the first call can generate an id,
        sleep or warn.
        """
        if self._dump_filename is not None:
            return self._dump_filename

        if self.database_id is None and registry.count(type(self)) > 1:
            self.database_id = registry.generate_id()
            logging.warning(
                f"ConfigurationError: Database Identifier Missing\n"
                f"  When multiple databases of the same type ({self.engine_name}) are "
                f"configured in a single backup model, each must set 'database_id' "
                f"to uniquely identify its dump file, e.g. {self.engine_name}-database_id.sql\n"
                f"  An identifier ({self.database_id}) has been auto-generated for this "
                f"database dump and the backup will now continue."
            )

        if self.database_id is not None:
            registry.assign_id(type(self), self.database_id)
            self._dump_filename = f"{self.engine_name}-{self.database_id}"
        else:
            self._dump_filename = self.engine_name
        return self._dump_filename

    @property
    def dump_filename(self) -> str:
        if self._dump_filename is None:
            raise ConfigurationError(
                f"{self.database_name}: dump filename requested before naming was finalized"
            )
        return self._dump_filename

    # ------------------------------------------------------------------
    # Transport

    def ssh_transport_args(self) -> str:
        args = f"-p {self.ssh_port} "
        if self.ssh_user:
            args += f"-l {self.ssh_user} "
        args += ' '.join(self._as_list(self.additional_ssh_options))
        return args.rstrip()

    def ssh_command(self) -> str:
        """``<ssh> <transport args> <host>``, ready for a quoted remote command."""
        return f"{self.utility('ssh')} {self.ssh_transport_args()} {self.ssh_host}"

    @property
    def dest_path(self) -> str:
        """``remote_path`` relative to the remote login directory."""
        if self._dest_path is None:
            path = re.sub(r'^~/', '', self.remote_path or '')
            self._dest_path = re.sub(r'/$', '', path)
        return self._dest_path

    def prepare_command(self) -> str:
        return f"{self.ssh_command()} \"mkdir -p '{self.dest_path}'\""

    def ensure_remote_directory(self) -> None:
        """Create ``dest_path`` on the remote host."""
        result = self.runner.run(self.prepare_command())
        if not result.success:
            raise RemoteExecutionError(
                f"{self.database_name}: could not create '{self.dest_path}' on "
                f"{self.ssh_host} (exit code {result.exit_status})\n{result.stderr}",
                exit_status=result.exit_status,
                stderr=result.stderr
            )

    # ------------------------------------------------------------------
    # Dump

    def validate(self) -> None:
        """Reject configurations that cannot produce a remote command."""
        if not self.ssh_host:
            raise ConfigurationError(f"{self.database_name}: 'ssh_host' is required")
        if not self.remote_path:
            raise ConfigurationError(f"{self.database_name}: 'remote_path' is required")

    def dump_command(self) -> str:
        raise NotImplementedError

    def build_pipeline(self, compressor: Any = None) -> DumpPipeline:
        return DumpPipeline(
            dump_command=self.dump_command(),
            writer=self.ssh_command(),
            dest_path=self.dest_path,
            dump_filename=self.dump_filename,
            compressor=compressor
        )

    def perform(self, compressor: Any = None) -> str:
        """Dump this source to the remote host.

        Returns the remote path of the dump file.
        """
        self.log('started')
        self.validate()
        self.ensure_remote_directory()

        pipeline = self.build_pipeline(compressor)
        pipeline.run(self.runner, self.database_name)

        self.log('finished')
        return pipeline.output_path

    def log(self, action: str) -> None:
        messages = {'started': 'Started...', 'finished': 'Finished!'}
        logging.info(f"{self.database_name} {messages[action]}")

    @staticmethod
    def _as_list(value: Union[str, list, None]) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        return [str(value)]
