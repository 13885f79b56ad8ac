#!/usr/bin/env python3
"""
Remote Database Backup - CLI Entry Point
========================================
Dumps configured databases straight to a remote host over SSH:
- Per-source SSH transport settings
- Single database or all databases per source
- Table include/skip filters
- Optional gzip/bzip2/custom compression
- Distinct output filenames for multiple sources of one type
"""

import argparse
import logging
import sys

import yaml

from .backup_model import BackupModel
from .config import ConfigLoader
from .errors import BackupError
from .utils import print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Remote Database Backup - dump databases to a remote host over SSH'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show the commands that would run without running them'
    )
    parser.add_argument(
        '--check',
        action='store_true',
        help='Validate the configuration and report problems'
    )
    parser.add_argument(
        '--probe',
        action='store_true',
        help='With --check, also open a live connection to each MySQL server'
    )
    parser.add_argument(
        '-d', '--database-id',
        help='Back up only the source with this database_id'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except (yaml.YAMLError, BackupError) as e:
        print(f"Error: Invalid configuration file: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    try:
        model = BackupModel.from_config(config)
        model.finalize_naming()

        if args.database_id and not model.select(args.database_id):
            sys.exit(1)

        if args.check:
            problems = model.check(probe=args.probe, database_id=args.database_id)
            if problems:
                logging.warning(f"Configuration check found {len(problems)} problem(s)")
                sys.exit(1)
            logging.info("Configuration check passed")
            sys.exit(0)

        if args.dry_run:
            logging.info("DRY RUN MODE - No commands will be run")
            print_dry_run_info(model.select(args.database_id), model.compressor)
            sys.exit(0)

        stats = model.perform(database_id=args.database_id)
    except BackupError as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    # Print summary
    logging.info("=" * 50)
    logging.info("BACKUP COMPLETE")
    logging.info(f"Databases: {stats.succeeded}/{len(stats.sources)} succeeded")
    for result in stats.sources:
        if result.success:
            logging.info(f"  ✓ {result.name}: {result.file_path}")

    if stats.errors:
        logging.warning(f"Errors: {len(stats.errors)}")
        for err in stats.errors:
            logging.warning(f"  - {err['database']}: {(err['error'].splitlines() or [''])[0]}")
        sys.exit(1)


if __name__ == '__main__':
    main()
