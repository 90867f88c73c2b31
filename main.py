#!/usr/bin/env python3
"""
audio-tag-sorter: copy audio files into an artist/album/title tree.

Every file is placed at ``<target>/<album artist>/<album>/<title>.<ext>``
based on its embedded tags. Problems are reported per file; one bad file
never stops the rest of the batch.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from utils.logging_config import setup_logging
from utils.config_loader import load_config, write_config_template
from utils.exceptions import ConfigurationError, TagSorterError
from utils.status_reporter import StatusReporter
from pipeline.orchestrator import SortingPipeline

DEFAULT_CONFIG_NAME = "audio-tag-sorter.yaml"
NO_FILES_EXIT_CODE = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sort audio files into an artist/album/title directory tree using their tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -t ~/Music *.mp3          # Copy files into ~/Music/<artist>/<album>/
  %(prog)s -t ~/Music -r *.mp3       # Same, deleting each source once copied
  %(prog)s --create-config sorter.yaml  # Write a commented config template
        """
    )

    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Audio files to sort"
    )

    parser.add_argument(
        "--target-directory", "-t",
        type=Path,
        metavar="DIRECTORY",
        help="Directory where to put audio files"
    )

    parser.add_argument(
        "--remove-source-file", "-r",
        action="store_true",
        help="Delete the original file after successful copying"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to config file (default: ./{DEFAULT_CONFIG_NAME})"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--create-config",
        type=Path,
        metavar="PATH",
        help="Write a configuration template to PATH and exit"
    )

    args = parser.parse_args(argv)
    if args.create_config is None and args.target_directory is None:
        parser.error("the following arguments are required: --target-directory/-t")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        args = parse_arguments(argv)

        if args.create_config is not None:
            write_config_template(args.create_config)
            print(f"Config template written to: {args.create_config}")
            return 0

        if not args.files:
            StatusReporter(1, console=Console(highlight=False)).error(
                "You must specify at least one file!"
            )
            return NO_FILES_EXIT_CODE

        if args.config is not None and not args.config.is_file():
            raise ConfigurationError(f"Config file not found: {args.config}")
        config_path = args.config or Path.cwd() / DEFAULT_CONFIG_NAME
        config = load_config(config_path)

        log_level = "DEBUG" if args.verbose else config['logging']['level']
        logger = setup_logging(log_level, config['logging']['format'])

        remove_source = args.remove_source_file or config['organizer']['remove_source_file']
        logger.info(f"Target directory: {args.target_directory}")
        logger.info(f"Remove source files: {remove_source}")

        console = Console(highlight=False, no_color=not config['output']['color'])
        reporter = StatusReporter.for_files(
            args.files,
            console=console,
            dot_gap=config['output']['dot_gap']
        )

        pipeline = SortingPipeline(
            target_dir=args.target_directory,
            remove_source=remove_source
        )
        pipeline.process_files(args.files, on_outcome=reporter.report)

        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except TagSorterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
