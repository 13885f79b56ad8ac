"""
Compressors that can be inserted into a dump pipeline.
"""

from typing import Any, Callable, Optional

from .errors import ConfigurationError


class Compressor:
    """Base compressor. Subclasses build the stage command and extension."""

    EXTENSION = ""

    def __init__(self, utility: Callable[[str], str]):
        self.utility = utility
        self.extension = self.EXTENSION

    def compress_with(self) -> tuple[str, str]:
        """Return (stage_command, filename_extension_fragment)."""
        return self.command(), self.extension

    def command(self) -> str:
        raise NotImplementedError


class Gzip(Compressor):
    EXTENSION = ".gz"

    def __init__(self, utility, level: Optional[int] = None, rsyncable: bool = False):
        super().__init__(utility)
        self.level = level
        self.rsyncable = rsyncable

    def command(self) -> str:
        parts = [self.utility('gzip')]
        if self.level:
            parts.append(f"-{self.level}")
        if self.rsyncable:
            parts.append("--rsyncable")
        return ' '.join(parts)


class Bzip2(Compressor):
    EXTENSION = ".bz2"

    def __init__(self, utility, level: Optional[int] = None):
        super().__init__(utility)
        self.level = level

    def command(self) -> str:
        parts = [self.utility('bzip2')]
        if self.level:
            parts.append(f"-{self.level}")
        return ' '.join(parts)


class Custom(Compressor):
    """Any filter command, e.g. ``xz -T0`` with extension ``.xz``."""

    def __init__(self, utility, command: str, extension: str):
        super().__init__(utility)
        if not command:
            raise ConfigurationError("Custom compressor requires a 'command'")
        self._command = command
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        self.extension = extension or ""

    def command(self) -> str:
        return self._command


COMPRESSORS = {
    'gzip': Gzip,
    'bzip2': Bzip2,
    'custom': Custom,
}


def build_compressor(
    settings: dict[str, Any],
    utility: Callable[[str], str]
) -> Optional[Compressor]:
    """Create a compressor from its config section, or None when unset."""
    if not settings:
        return None

    settings = dict(settings)
    kind = str(settings.pop('type', 'gzip')).lower()
    if kind not in COMPRESSORS:
        raise ConfigurationError(
            f"Unknown compressor '{kind}'. Expected one of: {', '.join(COMPRESSORS)}"
        )
    try:
        return COMPRESSORS[kind](utility, **settings)
    except TypeError as e:
        raise ConfigurationError(f"Invalid settings for compressor '{kind}': {e}") from e
