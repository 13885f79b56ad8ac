"""
Sibling tracking used to give each source a distinct dump filename.
"""

import time
from collections import defaultdict
from typing import Any, Callable


class NamingRegistry:
    """Counts the sources of each concrete type registered with one model.

    The model owns the registry for the length of a run. Sources consult it
    when their dump filename is finalized, after every sibling is registered.
    """

    AUTO_ID_DIGITS = 5

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep
    ):
        self._clock = clock
        self._sleep = sleep
        self._sources: dict[type, list[Any]] = defaultdict(list)
        self._ids: dict[type, list[str]] = defaultdict(list)

    def register(self, source: Any) -> None:
        """Record a source as a sibling of its concrete type."""
        self._sources[type(source)].append(source)

    def count(self, source_type: type) -> int:
        """Number of registered sources of exactly this type."""
        return len(self._sources[source_type])

    def assign_id(self, source_type: type, database_id: str) -> None:
        """Record an id as used by a source of this type."""
        self._ids[source_type].append(database_id)

    def assigned_ids(self, source_type: type) -> list[str]:
        return list(self._ids[source_type])

    def generate_id(self) -> str:
        """Build a best-effort unique id from the clock.

        Waits one second first so ids generated back to back in the same run
        come from different seconds. Uniqueness is not guaranteed.
        """
        self._sleep(1)
        return str(int(self._clock()))[-self.AUTO_ID_DIGITS:]
