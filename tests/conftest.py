"""
Shared fixtures.
"""

from unittest import mock

import pytest

from remote_db_backup.command_runner import CommandRunner
from remote_db_backup.models import CommandResult, PipelineResult
from remote_db_backup.naming import NamingRegistry
from remote_db_backup.utilities import UtilityLocator


class FakeClock:
    """Clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1700012345.0):
        self.now = start
        self.sleeps = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def utility():
    """Utility locator with fixed paths."""
    return UtilityLocator({
        "ssh": "/usr/bin/ssh",
        "mysqldump": "/usr/bin/mysqldump",
        "gzip": "/bin/gzip",
        "bzip2": "/bin/bzip2",
    })


@pytest.fixture
def runner():
    """Command runner whose commands all succeed."""
    runner = mock.MagicMock(spec=CommandRunner)
    runner.run.return_value = CommandResult(exit_status=0)
    runner.run_pipeline.return_value = PipelineResult(success=True, exit_statuses=[0, 0])
    return runner


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return NamingRegistry(clock=clock.time, sleep=clock.sleep)
