"""
Live connectivity check for MySQL sources.
"""

import logging
from typing import Any, Optional

import mysql.connector
from mysql.connector import Error as MySQLError

from .errors import ConnectivityValidationError


class ConnectivityProbe:
    """Opens a short-lived MySQL connection with a source's settings.

    Uses the same target rules as mysqldump: a socket wins over host/port.
    """

    DEFAULT_PORT = 3306
    CONNECT_TIMEOUT = 10

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[Any] = None,
        socket: Optional[str] = None,
        database: Optional[str] = None
    ):
        self.user = user
        self.password = password
        self.host = host
        self.port = port
        self.socket = socket
        self.database = database
        self.connection = None

    @classmethod
    def for_source(cls, source: Any) -> "ConnectivityProbe":
        """Build a probe from a MySQLSource."""
        return cls(
            user=source.remote_username,
            password=source.remote_password,
            host=source.remote_host,
            port=source.remote_port,
            socket=source.remote_socket,
            database=None if source.dump_all else str(source.remote_name)
        )

    def __enter__(self) -> "ConnectivityProbe":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    def connection_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {'connection_timeout': self.CONNECT_TIMEOUT}
        if self.socket:
            kwargs['unix_socket'] = self.socket
        else:
            kwargs['host'] = self.host or 'localhost'
            kwargs['port'] = int(self.port or self.DEFAULT_PORT)
        if self.user:
            kwargs['user'] = self.user
        if self.password:
            kwargs['password'] = self.password
        if self.database:
            kwargs['database'] = self.database
        return kwargs

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(**self.connection_kwargs())
        except MySQLError as e:
            raise ConnectivityValidationError(f"Connection failed: {e}") from e
        target = self.socket or f"{self.host or 'localhost'}:{self.port or self.DEFAULT_PORT}"
        logging.info(f"Connected to {target}/{self.database or 'N/A'}")

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def check(self) -> str:
        """Connect, return the server version, and disconnect."""
        with self:
            return self.connection.get_server_info()
