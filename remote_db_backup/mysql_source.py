"""
MySQL remote source: builds the mysqldump invocation.
"""

from typing import Any, Optional, Union

from .errors import ConnectivityValidationError
from .models import DumpScope
from .remote_source import RemoteSource


class MySQLSource(RemoteSource):
    """Dumps one MySQL database, or all of them, with ``mysqldump``.

    Output lands on the remote host as ``MySQL[-<database_id>].sql[<ext>]``.

    Values are wrapped in single quotes on the command line but embedded
    single quotes are not escaped.
    """

    engine_name = "MySQL"

    def __init__(
        self,
        database_id: Optional[Any] = None,
        remote_name: Union[str, DumpScope, None] = DumpScope.ALL,
        remote_username: Optional[str] = None,
        remote_password: Optional[str] = None,
        remote_host: Optional[str] = None,
        remote_port: Optional[Union[int, str]] = None,
        remote_socket: Optional[str] = None,
        skip_tables: Optional[list[str]] = None,
        only_tables: Optional[list[str]] = None,
        additional_options: Union[str, list[str], None] = None,
        **kwargs
    ):
        super().__init__(database_id, **kwargs)
        self.remote_name = remote_name if remote_name is not None else DumpScope.ALL
        self.remote_username = remote_username
        self.remote_password = remote_password
        self.remote_host = remote_host
        self.remote_port = remote_port
        self.remote_socket = remote_socket
        self.skip_tables = skip_tables or []
        self.only_tables = only_tables or []
        self.additional_options = additional_options

    @property
    def dump_all(self) -> bool:
        return self.remote_name is DumpScope.ALL

    def validate(self) -> None:
        super().validate()
        if not self.connectivity_options:
            raise ConnectivityValidationError(
                f"{self.database_name}: no connection target. "
                f"Set 'socket', or 'host' and/or 'port'."
            )

    def dump_command(self) -> str:
        fragments = [
            self.utility('mysqldump'),
            self.credential_options,
            self.connectivity_options,
            self.user_options,
            self.name_option,
            self.tables_to_dump,
            self.tables_to_skip,
        ]
        return ' '.join(f for f in fragments if f)

    @property
    def credential_options(self) -> str:
        opts = []
        if self.remote_username:
            opts.append(f"--user='{self.remote_username}'")
        if self.remote_password:
            opts.append(f"--password='{self.remote_password}'")
        return ' '.join(opts)

    @property
    def connectivity_options(self) -> str:
        if self.remote_socket:
            return f"--socket='{self.remote_socket}'"

        opts = []
        if self.remote_host:
            opts.append(f"--host='{self.remote_host}'")
        if self.remote_port:
            opts.append(f"--port='{self.remote_port}'")
        return ' '.join(opts)

    @property
    def user_options(self) -> str:
        return ' '.join(self._as_list(self.additional_options))

    @property
    def name_option(self) -> str:
        return '--all-databases' if self.dump_all else str(self.remote_name)

    @property
    def tables_to_dump(self) -> str:
        if self.dump_all:
            return ''
        return ' '.join(self._as_list(self.only_tables))

    @property
    def tables_to_skip(self) -> str:
        opts = []
        for table in self._as_list(self.skip_tables):
            if not (self.dump_all or '.' in table):
                table = f"{self.remote_name}.{table}"
            opts.append(f"--ignore-table='{table}'")
        return ' '.join(opts)
