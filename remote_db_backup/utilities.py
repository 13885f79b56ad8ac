"""
System utility lookup for Remote Database Backup.
"""

import logging
import shutil
from typing import Optional

from .errors import UtilityNotFoundError


class UtilityLocator:
    """Resolves utility names (ssh, mysqldump, gzip, ...) to absolute paths.

    Explicitly configured paths win over a ``PATH`` search. Lookups are cached.
    """

    def __init__(self, overrides: Optional[dict[str, str]] = None):
        self._paths: dict[str, str] = {}
        self.configure(overrides or {})

    def configure(self, overrides: dict[str, str]) -> None:
        """Set explicit paths for utilities."""
        for name, path in overrides.items():
            if not path:
                raise UtilityNotFoundError(f"Empty path configured for utility '{name}'")
            self._paths[name] = str(path)
            logging.debug(f"Utility '{name}' configured as {path}")

    def __call__(self, name: str) -> str:
        return self.path_for(name)

    def path_for(self, name: str) -> str:
        """Return the absolute path for a utility."""
        if name in self._paths:
            return self._paths[name]

        path = shutil.which(name)
        if not path:
            raise UtilityNotFoundError(
                f"Could not locate '{name}'. Make sure it is installed "
                f"or set its path under 'utilities' in the configuration."
            )
        self._paths[name] = path
        return path
