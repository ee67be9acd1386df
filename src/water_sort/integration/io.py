"""Puzzle file loading, result serialization and text rendering."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from water_sort.core.construction import BeakerSpec, PuzzleConstructionError, build_puzzle
from water_sort.core.data_models import CAPACITY, Beaker, Move, Palette, Puzzle
from water_sort.search.astar import SearchResult

logger = logging.getLogger(__name__)


class PuzzleFileError(ValueError):
    """Exception raised when a puzzle file cannot be parsed."""
    pass


def parse_puzzle_data(data: Any, source: str = "<data>") -> Tuple[Optional[str], Puzzle, Palette]:
    """Parse a decoded puzzle document.

    Args:
        data: Decoded JSON object with a ``beakers`` list and optional ``name``
        source: Description of where the data came from, for error messages

    Returns:
        Tuple of (name, puzzle, palette)

    Raises:
        PuzzleFileError: If the document structure or a beaker is invalid
    """
    if not isinstance(data, dict):
        raise PuzzleFileError(f"{source}: expected a JSON object, got {type(data).__name__}")
    if 'beakers' not in data:
        raise PuzzleFileError(f"{source}: missing 'beakers' list")

    beakers = data['beakers']
    if not isinstance(beakers, list):
        raise PuzzleFileError(f"{source}: 'beakers' must be a list")

    name = data.get('name')
    if name is not None and not isinstance(name, str):
        raise PuzzleFileError(f"{source}: 'name' must be a string")

    try:
        puzzle, palette = build_puzzle(beakers)
    except PuzzleConstructionError as e:
        raise PuzzleFileError(f"{source}: {e}") from e

    return name, puzzle, palette


def load_puzzle_file(file_path: Union[str, Path]) -> Tuple[str, Puzzle, Palette]:
    """Load a puzzle from a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Tuple of (name, puzzle, palette); the name defaults to the file stem

    Raises:
        FileNotFoundError: If file doesn't exist
        PuzzleFileError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise PuzzleFileError(f"Invalid JSON in {file_path}: {e}")

    name, puzzle, palette = parse_puzzle_data(data, str(file_path))
    logger.debug(f"Loaded puzzle from {file_path}: {puzzle.total_beakers} beakers, "
                 f"{len(palette)} colors")
    return name or file_path.stem, puzzle, palette


def save_puzzle_file(file_path: Union[str, Path],
                     specs: Sequence[BeakerSpec],
                     name: Optional[str] = None) -> None:
    """Write beaker specifications to a puzzle JSON file."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = {}
    if name:
        data['name'] = name
    data['beakers'] = [list(spec) if spec else [] for spec in specs]

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=2)


def find_puzzle_files(input_path: Union[str, Path],
                      max_files: Optional[int] = None) -> List[Path]:
    """Find puzzle files in a directory or from a file list.

    Args:
        input_path: Puzzle file, directory, or text file listing paths
        max_files: Maximum number of files to return

    Returns:
        List of puzzle file paths
    """
    input_path = Path(input_path)

    if input_path.is_file():
        if input_path.suffix.lower() == '.json':
            return [input_path]
        with open(input_path, 'r') as f:
            file_paths = [Path(line.strip()) for line in f if line.strip()]
        return file_paths[:max_files] if max_files else file_paths

    elif input_path.is_dir():
        json_files = sorted(input_path.rglob('*.json'))
        return json_files[:max_files] if max_files else json_files

    else:
        raise FileNotFoundError(f"Input path not found: {input_path}")


def beaker_names(beaker: Beaker, palette: Palette) -> List[str]:
    return [palette.name_of(color) for color in beaker]


def format_beaker(beaker: Beaker, palette: Palette) -> str:
    """Render a beaker top first, padding free slots with dots."""
    names = beaker_names(beaker, palette)
    slots = ['.'] * (CAPACITY - len(names)) + names
    return '[' + ' '.join(slots) + ']'


def format_puzzle(puzzle: Puzzle, palette: Palette) -> str:
    """Render every physical beaker on its own line."""
    return '\n'.join(format_beaker(beaker, palette) for beaker in puzzle.physical_beakers())


def format_move(move: Move, palette: Palette) -> str:
    return f"{format_beaker(move.source, palette)} -> {format_beaker(move.destination, palette)}"


def result_to_dict(result: SearchResult, palette: Palette) -> Dict[str, Any]:
    """Convert a search result into a JSON-serializable dictionary."""
    return {
        'success': result.success,
        'termination_reason': result.termination_reason,
        'solution_length': result.solution_length,
        'moves': [
            {
                'source': beaker_names(move.source, palette),
                'destination': beaker_names(move.destination, palette),
            }
            for move in result.moves
        ],
        'final_beakers': (
            [beaker_names(beaker, palette) for beaker in result.final_puzzle.physical_beakers()]
            if result.final_puzzle is not None else None
        ),
        'computation_time': result.computation_time,
        'search_stats': result.statistics or {},
    }


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True)
        else:
            json.dump(results, f)
