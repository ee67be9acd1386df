"""Hydra-backed configuration loading for the solver.

The project keeps a single ``conf/config.yaml``. It is composed through
Hydra's compose API so command line options can be passed as ordinary
dotted overrides (``search.astar.max_nodes_expanded=5000``).
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf

from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "conf"

# Most recently loaded configuration, read by AStarSearcher.from_config
_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Composes, validates and persists the solver configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding ``config.yaml``; the project's
                ``conf/`` directory if None
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration and make it the global one.

        Args:
            config_name: Name of the config file without ``.yaml``
            overrides: Dotted Hydra overrides
            validate: Whether to run the section validators

        Returns:
            Composed configuration

        Raises:
            ConfigValidationError: If validation is enabled and fails
        """
        overrides = list(overrides or [])

        # Hydra refuses to initialize twice in one process
        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides)

        if validate:
            validate_config(cfg)

        global _global_config
        self.config = _global_config = cfg

        logger.debug(f"Loaded {config_name}.yaml from {self.config_dir}"
                     + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Write the resolved configuration as YAML.

        Raises:
            RuntimeError: If no configuration has been loaded
        """
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(self.config, output_path, resolve=True)

        logger.info(f"Configuration saved to {output_path}")


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Return the most recently loaded configuration, or None."""
    return _global_config


def get_parameter(key: str, default: Any = None, cfg: Optional[DictConfig] = None) -> Any:
    """Look up a dotted key in ``cfg`` or the global configuration.

    Missing keys and explicit nulls both fall back to ``default``.
    """
    cfg = cfg if cfg is not None else _global_config
    if cfg is None:
        return default

    value = OmegaConf.select(cfg, key, default=None)
    return default if value is None else value
