"""
Error types for Remote Database Backup.
"""


class BackupError(Exception):
    """Base class for all backup errors."""


class ConfigurationError(BackupError):
    """Raised or logged when a source is misconfigured."""


class ConnectivityValidationError(ConfigurationError):
    """Raised when a source has no usable connection target."""


class RemoteExecutionError(BackupError):
    """Raised when a command run on the remote host exits non-zero."""

    def __init__(self, message: str, exit_status: int = 1, stderr: str = ""):
        super().__init__(message)
        self.exit_status = exit_status
        self.stderr = stderr


class PipelineError(BackupError):
    """Raised when any stage of a dump pipeline fails."""

    def __init__(self, database_name: str, error_messages: str):
        super().__init__(f"{database_name} Dump Failed!\n{error_messages}")
        self.database_name = database_name
        self.error_messages = error_messages


class UtilityNotFoundError(BackupError):
    """Raised when a required system utility cannot be located."""
