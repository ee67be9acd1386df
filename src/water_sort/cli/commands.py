"""CLI command implementations."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from water_sort import __version__
from water_sort.config import ConfigManager, get_parameter, load_config, validate_config, ConfigValidationError
from water_sort.config.validators import check_config_consistency
from water_sort.core.data_models import Palette, Puzzle
from water_sort.integration.generator import generate_puzzle_specs
from water_sort.integration.io import (
    find_puzzle_files, format_move, format_puzzle, load_puzzle_file, result_to_dict,
    save_puzzle_file, save_results
)
from water_sort.search.astar import AStarSearcher, SearchConfig, SearchResult
from water_sort.search.moves import replay_moves

from .utils import create_result_summary, format_duration, print_summary, ProgressReporter

logger = logging.getLogger(__name__)


class WaterSortSolver:
    """Solver front end that wires configuration into the A* searcher."""

    def __init__(self, config_overrides: Optional[List[str]] = None):
        """Initialize solver.

        Args:
            config_overrides: List of configuration overrides
        """
        self.config = load_config(overrides=config_overrides or [])

        # An explicit search budget wins over the overall solver timeout
        time_budget = get_parameter('search.astar.max_computation_time',
                                    get_parameter('solver.timeout_seconds', cfg=self.config),
                                    cfg=self.config)

        self.searcher = AStarSearcher(SearchConfig(
            max_nodes_expanded=get_parameter('search.astar.max_nodes_expanded', cfg=self.config),
            max_computation_time=time_budget,
            progress_interval=get_parameter('search.astar.progress_interval', 10000, cfg=self.config),
        ))

        logger.debug("Water sort solver initialized")

    def solve_puzzle(self, puzzle: Puzzle, palette: Palette) -> Dict[str, Any]:
        """Solve a single puzzle.

        Args:
            puzzle: Puzzle to solve
            palette: Color names for the result

        Returns:
            Dictionary with solution results
        """
        return result_to_dict(self.solve(puzzle), palette)

    def solve(self, puzzle: Puzzle) -> SearchResult:
        """Run the configured search on a puzzle."""
        return self.searcher.search(puzzle)


def _merge_overrides(args, options: Dict[str, Any]) -> List[str]:
    """Combine ``--config`` overrides with values from dedicated options.

    Dedicated options replace a ``--config`` override of the same key, since
    Hydra rejects a key given twice.
    """
    explicit = {key: value for key, value in options.items() if value is not None}
    raw = getattr(args, 'config', None) or ''
    overrides = [item for item in raw.split() if item.split('=', 1)[0] not in explicit]
    overrides.extend(f"{key}={value}" for key, value in explicit.items())
    return overrides


def _config_overrides(args) -> List[str]:
    """Translate solver command line options into Hydra overrides."""
    timeout = getattr(args, 'timeout', None)
    return _merge_overrides(args, {
        'solver.timeout_seconds': timeout,
        # --timeout also bounds the search itself, so it wins over a configured budget
        'search.astar.max_computation_time': timeout,
        'search.astar.max_nodes_expanded': getattr(args, 'max_nodes', None),
    })


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a solution was found)
    """
    try:
        logger.info(f"Loading puzzle from {args.puzzle_file}")
        name, puzzle, palette = load_puzzle_file(args.puzzle_file)

        solver = WaterSortSolver(_config_overrides(args))

        logger.info(f"Solving puzzle '{name}'...")
        start_time = time.perf_counter()
        search_result = solver.solve(puzzle)
        result = result_to_dict(search_result, palette)
        total_time = time.perf_counter() - start_time

        result.update({
            'puzzle': name,
            'puzzle_file': str(args.puzzle_file),
            'solver_version': __version__,
            'total_time': total_time,
        })

        if args.output:
            save_results(result, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print(f"Puzzle: {name}")
            print(format_puzzle(puzzle, palette))
            print()
            if result['success']:
                moves = search_result.moves
                print(f"Solved in {len(moves)} moves:")
                states = replay_moves(puzzle, moves) if args.show_states else None
                for step, move in enumerate(moves, start=1):
                    print(f"{step:3d}. {format_move(move, palette)}")
                    if states is not None:
                        print(format_puzzle(states[step], palette))
                        print()
            elif result['termination_reason'] == 'search_exhausted':
                print("No solution exists.")
            else:
                print(f"No solution found ({result['termination_reason']}).")
            print(f"States expanded: {result['search_stats'].get('nodes_expanded', 0)}")
            print(f"Computation time: {format_duration(result['computation_time'])}")
        elif not args.output:
            print(json.dumps(result, indent=2))

        return 0 if result['success'] else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def batch_command(args) -> int:
    """Handle batch command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when every puzzle got a definitive answer)
    """
    try:
        logger.info(f"Finding puzzle files in {args.input_path}")
        puzzle_files = find_puzzle_files(args.input_path, args.max_tasks)

        if not puzzle_files:
            logger.error("No puzzle files found")
            return 1

        logger.info(f"Found {len(puzzle_files)} puzzle files")

        solver = WaterSortSolver(_config_overrides(args))

        results = []
        progress = ProgressReporter(len(puzzle_files), args.report_interval) if not args.quiet else None

        def process_single_puzzle(puzzle_file: Path) -> Dict[str, Any]:
            """Process a single puzzle file."""
            try:
                name, puzzle, palette = load_puzzle_file(puzzle_file)
                result = solver.solve_puzzle(puzzle, palette)
                result['puzzle'] = name
                result['puzzle_file'] = str(puzzle_file)
                return result
            except Exception as e:
                logger.error(f"Failed to process {puzzle_file}: {e}")
                return {
                    'success': False,
                    'error': str(e),
                    'termination_reason': 'error',
                    'puzzle_file': str(puzzle_file),
                    'computation_time': 0.0
                }

        start_time = time.perf_counter()
        for puzzle_file in puzzle_files:
            result = process_single_puzzle(puzzle_file)
            results.append(result)
            if progress is not None:
                progress.update(result['success'])
        total_time = time.perf_counter() - start_time

        summary = create_result_summary(results)
        summary.update({
            'batch_settings': {
                'input_path': str(args.input_path),
                'timeout': args.timeout,
                'max_nodes': args.max_nodes,
                'max_tasks': args.max_tasks,
            },
            'solver_version': __version__,
            'timestamp': time.time(),
            'wall_clock_time': total_time
        })

        if args.output:
            save_results({'summary': summary, 'results': results}, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_summary(summary)

        return 0 if summary['failed_puzzles'] == 0 else 1

    except Exception as e:
        logger.error(f"Batch command failed: {e}")
        return 1


def generate_command(args) -> int:
    """Handle generate command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        overrides = _merge_overrides(args, {
            'generator.num_colors': args.colors,
            'generator.num_empty': args.empty,
            'generator.seed': args.seed,
        })

        config = load_config(overrides=overrides)
        gen_cfg = config.generator

        specs = generate_puzzle_specs(gen_cfg.num_colors, gen_cfg.num_empty, gen_cfg.seed)
        save_puzzle_file(args.output_file, specs, name=args.name)

        if not args.quiet:
            print(f"Puzzle written to {args.output_file}")
        return 0

    except Exception as e:
        logger.error(f"Generate command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            manager = ConfigManager()
            config = manager.load_config(overrides=_config_overrides(args), validate=False)
            if args.output:
                manager.save_config(args.output)
            if args.quiet:
                return 0
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=_config_overrides(args), validate=False)
                validate_config(config)
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

            for warning in check_config_consistency(config):
                print(f"Warning: {warning}")
            print("Configuration is valid")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
