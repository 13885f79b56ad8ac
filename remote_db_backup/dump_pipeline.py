"""
Dump -> compress -> remote write pipeline.
"""

import logging
import posixpath
from typing import Any, Optional

from .errors import PipelineError
from .models import PipelineResult


class DumpPipeline:
    """Streams a dump command into a file on the remote host.

    The dump and optional compressor run locally; the final stage is
    ``<ssh ...> "cat > '<file>'"`` so the file is written remotely.
    """

    BASE_EXTENSION = "sql"

    def __init__(
        self,
        dump_command: str,
        writer: str,
        dest_path: str,
        dump_filename: str,
        compressor: Optional[Any] = None
    ):
        self.dump_command = dump_command
        self.writer = writer
        self.dest_path = dest_path
        self.dump_filename = dump_filename

        self.extension = self.BASE_EXTENSION
        self.compress_command: Optional[str] = None
        if compressor is not None:
            self.compress_command, ext = compressor.compress_with()
            self.extension += ext

    @property
    def output_path(self) -> str:
        return posixpath.join(self.dest_path, f"{self.dump_filename}.{self.extension}")

    def write_command(self) -> str:
        return f"{self.writer} \"cat > '{self.output_path}'\""

    def stages(self) -> list[str]:
        stages = [self.dump_command]
        if self.compress_command:
            stages.append(self.compress_command)
        stages.append(self.write_command())
        return stages

    def run(self, runner: Any, database_name: str) -> PipelineResult:
        """Run all stages; raise PipelineError unless every stage exits 0."""
        result = runner.run_pipeline(self.stages())
        if not result.success:
            raise PipelineError(database_name, result.error_messages)
        logging.debug(f"{database_name} written to {self.output_path}")
        return result
