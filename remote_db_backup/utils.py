"""
Utility functions for Remote Database Backup.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

# Runs to the quote that ends the argument, so embedded quotes stay hidden.
PASSWORD_PATTERN = re.compile(r"(--password=)'.*?'(?=\s|$)")


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def mask_sensitive(command: str) -> str:
    """Hide password values in a command line before it is logged."""
    return PASSWORD_PATTERN.sub(r"\1'****'", command)


def print_dry_run_info(sources: list[Any], compressor: Any = None) -> None:
    """Log the commands each source would run, without running them."""
    for source in sources:
        logging.info(f"Would back up: {source.database_name}")
        logging.info(f"  Prepare: {source.prepare_command()}")

        pipeline = source.build_pipeline(compressor)
        for stage in pipeline.stages():
            logging.info(f"  | {mask_sensitive(stage)}")
        logging.info(f"  Output: {pipeline.output_path}")
