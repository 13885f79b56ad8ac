"""
Shell command execution for Remote Database Backup.

``CommandRunner.run`` executes a single command and captures its output.
``Pipeline`` connects several commands by their standard streams so large
dumps are streamed instead of buffered.
"""

import contextlib
import logging
import subprocess
import tempfile
from typing import IO, Optional

from .models import CommandResult, PipelineResult
from .utils import mask_sensitive


class Pipeline:
    """A chain of shell commands connected stdout -> stdin."""

    def __init__(self, commands: Optional[list[str]] = None):
        self.commands: list[str] = list(commands or [])
        self.exit_statuses: list[int] = []
        self.errors: list[str] = []
        self.stderr = ""
        self.stdout = ""

    def add(self, command: str) -> "Pipeline":
        """Append a stage to the pipeline."""
        self.commands.append(command)
        return self

    def run(self) -> None:
        """Run every stage concurrently and wait for all of them to exit."""
        if not self.commands:
            raise ValueError("Pipeline has no commands to run")

        with contextlib.ExitStack() as stack:
            processes, stderr_files, stdout_file = self._launch(stack)
            self.exit_statuses = [process.wait() for process in processes]

            stderr_messages = []
            for command, status, stderr_file in zip(self.commands, self.exit_statuses, stderr_files):
                stderr_file.seek(0)
                text = stderr_file.read().decode('utf-8', errors='replace').strip()
                if status != 0:
                    if text:
                        stderr_messages.append(text)
                    self.errors.append(
                        f"'{mask_sensitive(command)}' returned exit code: {status}"
                    )

            stdout_file.seek(0)
            self.stdout = stdout_file.read().decode('utf-8', errors='replace')
            self.stderr = "\n".join(stderr_messages)

    def _launch(
        self,
        stack: contextlib.ExitStack
    ) -> tuple[list[subprocess.Popen], list[IO[bytes]], IO[bytes]]:
        """Start every stage. Temp files are closed when ``stack`` exits."""
        processes: list[subprocess.Popen] = []
        stderr_files: list[IO[bytes]] = []
        stdout_file = stack.enter_context(tempfile.TemporaryFile())
        previous: Optional[IO[bytes]] = None

        try:
            for i, command in enumerate(self.commands):
                is_last = i == len(self.commands) - 1
                stderr_file = stack.enter_context(tempfile.TemporaryFile())
                stderr_files.append(stderr_file)

                logging.debug(f"Pipeline stage {i}: {mask_sensitive(command)}")
                process = subprocess.Popen(
                    command,
                    shell=True,
                    stdin=previous if previous is not None else subprocess.DEVNULL,
                    stdout=stdout_file if is_last else subprocess.PIPE,
                    stderr=stderr_file,
                )
                # Only the child may hold the read end, or upstream never sees SIGPIPE.
                if previous is not None:
                    previous.close()
                previous = process.stdout
                processes.append(process)
        except OSError:
            for process in processes:
                process.kill()
                process.wait()
            raise
        finally:
            if previous is not None:
                previous.close()
        return processes, stderr_files, stdout_file

    @property
    def success(self) -> bool:
        return bool(self.exit_statuses) and all(s == 0 for s in self.exit_statuses)

    @property
    def error_messages(self) -> str:
        """Failing stages' stderr followed by their exit codes."""
        if self.success:
            return ""
        parts = []
        if self.stderr:
            parts.append(
                "Pipeline STDERR Messages:\n"
                "(Note: may be interleaved if multiple commands returned error messages)\n\n"
                f"{self.stderr}"
            )
        parts.append(
            "The following system errors were returned:\n" + "\n".join(self.errors)
        )
        return "\n".join(parts)


class CommandRunner:
    """Runs shell commands synchronously."""

    def run(self, command: str) -> CommandResult:
        """Run a single shell command and capture its output."""
        logging.debug(f"Running: {mask_sensitive(command)}")
        completed = subprocess.run(
            command,
            shell=True,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors='replace',
        )
        return CommandResult(
            exit_status=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr.strip(),
        )

    def run_pipeline(self, stages: list[str]) -> PipelineResult:
        """Run stages as one connected pipeline."""
        pipeline = Pipeline(stages)
        pipeline.run()
        return PipelineResult(
            success=pipeline.success,
            error_messages=pipeline.error_messages,
            exit_statuses=list(pipeline.exit_statuses),
        )
