"""CLI utility functions."""

import logging
import time
from typing import Any, Dict, List, Optional

import numpy as np


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at DEBUG level
    logging.getLogger('hydra').setLevel(logging.WARNING)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"


class ProgressReporter:
    """Progress reporting for batch processing."""

    def __init__(self, total_puzzles: int, report_interval: int = 10):
        """Initialize progress reporter.

        Args:
            total_puzzles: Total number of puzzles
            report_interval: Report progress every N puzzles (0 reports only
                when the batch finishes)
        """
        self.total_puzzles = total_puzzles
        self.report_interval = report_interval
        self.completed = 0
        self.solved = 0
        self.start_time = time.time()

    def update(self, success: bool = False) -> None:
        """Update progress.

        Args:
            success: Whether the puzzle was solved
        """
        self.completed += 1
        if success:
            self.solved += 1

        periodic = self.report_interval > 0 and self.completed % self.report_interval == 0
        if periodic or self.completed == self.total_puzzles:
            self._report_progress()

    def _report_progress(self) -> None:
        elapsed = time.time() - self.start_time

        puzzles_per_second = self.completed / elapsed if elapsed > 0 else 0
        solve_rate = self.solved / self.completed if self.completed > 0 else 0

        remaining = self.total_puzzles - self.completed
        eta = remaining / puzzles_per_second if puzzles_per_second > 0 else 0

        print(f"Progress: {self.completed}/{self.total_puzzles} "
              f"({self.completed/self.total_puzzles*100:.1f}%) | "
              f"Solved: {self.solved} ({solve_rate*100:.1f}%) | "
              f"Rate: {puzzles_per_second:.1f} puzzles/s | "
              f"ETA: {format_duration(eta)}")


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create summary statistics from batch results.

    Args:
        results: List of individual puzzle results

    Returns:
        Summary statistics dictionary
    """
    if not results:
        return {
            'total_puzzles': 0,
            'solved_puzzles': 0,
            'unsolvable_puzzles': 0,
            'failed_puzzles': 0,
            'solve_rate': 0.0,
            'average_time': 0.0,
            'median_time': 0.0,
            'p95_time': 0.0,
            'total_time': 0.0,
            'average_solution_length': 0.0,
        }

    times = np.array([r.get('computation_time', 0.0) for r in results], dtype=float)
    solved = [r for r in results if r.get('success', False)]
    unsolvable = [r for r in results if r.get('termination_reason') == 'search_exhausted']
    lengths = np.array([r['solution_length'] for r in solved], dtype=float)

    total = len(results)
    return {
        'total_puzzles': total,
        'solved_puzzles': len(solved),
        'unsolvable_puzzles': len(unsolvable),
        'failed_puzzles': total - len(solved) - len(unsolvable),
        'solve_rate': len(solved) / total,
        'average_time': float(times.mean()),
        'median_time': float(np.median(times)),
        'p95_time': float(np.percentile(times, 95)),
        'total_time': float(times.sum()),
        'average_solution_length': float(lengths.mean()) if lengths.size else 0.0,
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print batch processing summary.

    Args:
        summary: Summary statistics dictionary
    """
    print("\n" + "="*60)
    print("BATCH SOLVING SUMMARY")
    print("="*60)

    print(f"Total puzzles:    {summary['total_puzzles']}")
    print(f"Solved:           {summary['solved_puzzles']} ({summary['solve_rate']*100:.1f}%)")
    print(f"Unsolvable:       {summary['unsolvable_puzzles']}")
    print(f"Gave up / failed: {summary['failed_puzzles']}")
    print(f"Average moves:    {summary['average_solution_length']:.1f}")

    print("\nTiming Statistics:")
    print(f"Total time:       {format_duration(summary['total_time'])}")
    print(f"Average time:     {format_duration(summary['average_time'])}")
    print(f"Median time:      {format_duration(summary['median_time'])}")
    print(f"95th percentile:  {format_duration(summary['p95_time'])}")
