"""Main CLI entry point for the water sort solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='water-sort',
        description='Water sort solver - shortest pour sequences via A* search',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  water-sort solve puzzle.json                  # Solve single puzzle
  water-sort solve puzzle.json --show-states    # Print every intermediate state
  water-sort batch puzzles/ --timeout 10        # Solve every puzzle in a folder
  water-sort generate --colors 5 --seed 7 p.json  # Write a random puzzle
  water-sort config show                        # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration overrides (e.g., search.astar.max_nodes_expanded=50000)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single puzzle',
        description='Solve a single puzzle from a JSON file'
    )

    solve_parser.add_argument(
        'puzzle_file',
        type=str,
        help='Path to puzzle JSON file'
    )

    solve_parser.add_argument(
        '--timeout', '-t',
        type=float,
        default=None,
        help='Timeout in seconds (default: from configuration)'
    )

    solve_parser.add_argument(
        '--max-nodes',
        type=int,
        default=None,
        help='Maximum number of states to expand (default: unlimited)'
    )

    solve_parser.add_argument(
        '--show-states',
        action='store_true',
        help='Print the puzzle after every move'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Solve multiple puzzles',
        description='Solve multiple puzzles from a directory or file list'
    )

    batch_parser.add_argument(
        'input_path',
        type=str,
        help='Directory containing JSON files or file with list of paths'
    )

    batch_parser.add_argument(
        '--timeout', '-t',
        type=float,
        default=None,
        help='Timeout per puzzle in seconds (default: from configuration)'
    )

    batch_parser.add_argument(
        '--max-nodes',
        type=int,
        default=None,
        help='Maximum number of states to expand per puzzle'
    )

    batch_parser.add_argument(
        '--max-tasks',
        type=int,
        help='Maximum number of puzzles to process'
    )

    batch_parser.add_argument(
        '--report-interval',
        type=int,
        default=10,
        help='Progress report interval, 0 reports only at the end (default: 10)'
    )

    # Generate command
    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate a random puzzle',
        description='Deal shuffled colors into beakers and write a puzzle file'
    )

    generate_parser.add_argument(
        'output_file',
        type=str,
        help='Path of the puzzle JSON file to write'
    )

    generate_parser.add_argument(
        '--colors',
        type=int,
        default=None,
        help='Number of colors (default: from configuration)'
    )

    generate_parser.add_argument(
        '--empty',
        type=int,
        default=None,
        help='Number of empty beakers (default: from configuration)'
    )

    generate_parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible puzzles'
    )

    generate_parser.add_argument(
        '--name',
        type=str,
        default=None,
        help='Puzzle name stored in the file'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration (written as YAML with --output)'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'batch':
            return commands.batch_command(parsed_args)
        if parsed_args.command == 'generate':
            return commands.generate_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
