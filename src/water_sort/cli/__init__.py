"""Command-line interface for the water sort solver.

This module provides CLI commands for solving single puzzles, batch
solving, puzzle generation and configuration inspection.
"""

from .main import main_cli
from .commands import solve_command, batch_command, generate_command, config_command
from .utils import setup_logging

__all__ = [
    'main_cli',
    'solve_command',
    'batch_command',
    'generate_command',
    'config_command',
    'setup_logging'
]
