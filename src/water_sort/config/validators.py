"""Configuration validation for the water sort solver."""

import logging
from typing import List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_solver_config(config.get('solver', {}))
        validate_search_config(config.get('search', {}))
        validate_generator_config(config.get('generator', {}))

        logger.debug("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_solver_config(solver_config: DictConfig) -> None:
    """Validate solver configuration section.

    Args:
        solver_config: Solver configuration section
    """
    if not solver_config:
        return

    timeout = solver_config.get('timeout_seconds', 30.0)
    if timeout is not None and (not _is_number(timeout) or timeout <= 0):
        raise ConfigValidationError(
            f"timeout_seconds must be positive number or null, got {timeout}"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    astar_config = search_config.get('astar', {})
    if not astar_config:
        return

    max_nodes = astar_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (not isinstance(max_nodes, int) or isinstance(max_nodes, bool)
                                  or max_nodes <= 0):
        raise ConfigValidationError(
            f"astar.max_nodes_expanded must be positive integer or null, got {max_nodes}"
        )

    max_time = astar_config.get('max_computation_time', None)
    if max_time is not None and (not _is_number(max_time) or max_time <= 0):
        raise ConfigValidationError(
            f"astar.max_computation_time must be positive number or null, got {max_time}"
        )

    interval = astar_config.get('progress_interval', 10000)
    if not isinstance(interval, int) or isinstance(interval, bool) or interval < 0:
        raise ConfigValidationError(
            f"astar.progress_interval must be non-negative integer, got {interval}"
        )


def validate_generator_config(generator_config: DictConfig) -> None:
    """Validate generator configuration section.

    Args:
        generator_config: Generator configuration section
    """
    if not generator_config:
        return

    num_colors = generator_config.get('num_colors', 4)
    if not isinstance(num_colors, int) or isinstance(num_colors, bool) or num_colors < 1:
        raise ConfigValidationError(
            f"generator.num_colors must be positive integer, got {num_colors}"
        )

    num_empty = generator_config.get('num_empty', 2)
    if not isinstance(num_empty, int) or isinstance(num_empty, bool) or num_empty < 0:
        raise ConfigValidationError(
            f"generator.num_empty must be non-negative integer, got {num_empty}"
        )

    seed = generator_config.get('seed', None)
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(
            f"generator.seed must be non-negative integer or null, got {seed}"
        )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration for consistency issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency warnings
    """
    warnings = []

    solver_timeout = config.get('solver', {}).get('timeout_seconds', None)
    search_timeout = config.get('search', {}).get('astar', {}).get('max_computation_time', None)
    if solver_timeout is not None and search_timeout is not None and search_timeout > solver_timeout:
        warnings.append(
            f"Search time budget ({search_timeout}s) exceeds solver timeout ({solver_timeout}s)"
        )

    return warnings
