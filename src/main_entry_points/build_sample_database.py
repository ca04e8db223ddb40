"""Build the sample health-narrative database from the JSON fixture.

This script creates an SQLite database with sample documents, timeline events
and the links between them. Any existing database at the output location is
replaced.

Usage:
    python -m src.main_entry_points.build_sample_database [options]

Options:
    --fixture: Sample data JSON (default: bundled sample_data/sarah-chen-data.json)
    --output-file: Database file (default: ./assets/sample-data/sample-health-narrative.db)
    --strict-counts: Fail when row counts differ from the fixture's declared totals
    --staged: Build into a staging file and swap it in only after verification
    --log-level: Logging level (debug, info, warning, error - default: info)

Examples:
    # Build with the default fixture and output
    python -m src.main_entry_points.build_sample_database

    # Build to a custom location, keeping the old file until the new one is verified
    python -m src.main_entry_points.build_sample_database --output-file /tmp/demo.db --staged

License:
    See LICENSE.md in the repository root.
"""

import argparse
import sys
from pathlib import Path

from src.config import BuildConfig
from src.exceptions import SampleDatabaseException
from src.logging_config import LoggerManager
from src.modules.sample_database_module.database_builder import build_database
from src.utils.logging_decorators import configure_logging
from src.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build the sample health-narrative SQLite database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --output-file /tmp/demo.db --staged
  %(prog)s --fixture custom-data.json --strict-counts
        """
    )

    parser.add_argument(
        "--fixture",
        type=Path,
        default=None,
        help="Sample data JSON (default: $SAMPLE_DB_FIXTURE or the bundled sarah-chen-data.json)"
    )

    parser.add_argument(
        "--output-file",
        type=Path,
        default=None,
        help="Output database file (default: $SAMPLE_DB_OUTPUT or ./assets/sample-data/sample-health-narrative.db)"
    )

    parser.add_argument(
        "--strict-counts",
        action="store_true",
        help="Fail when inserted rows differ from the totals declared in the fixture"
    )

    parser.add_argument(
        "--staged",
        action="store_true",
        help="Build into a staging file and replace the output only after verification"
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)"
    )

    return parser.parse_args(argv)


@configure_logging()
def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    LoggerManager.set_level(args.log_level)

    config = BuildConfig.from_env(
        fixture_path=args.fixture,
        output_path=args.output_file,
        strict_counts=args.strict_counts,
        staged=args.staged,
    )
    logger.debug(f"Build configuration: {config}")

    try:
        build_database(config)
    except KeyboardInterrupt:
        logger.info("Build process interrupted by user")
        sys.exit(1)
    except SampleDatabaseException as e:
        logger.error(f"Error building database: {e}", exc_info=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
