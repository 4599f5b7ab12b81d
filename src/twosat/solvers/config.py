"""
Configuration management for the 2-SAT engines and drivers.
Uses OmegaConf for flexible configuration handling.
"""

import logging
import os
from typing import Any

import omegaconf
from omegaconf import DictConfig, OmegaConf

# Set up logging
logger = logging.getLogger(__name__)


class SolverConfig:
    """
    Configuration manager for 2-SAT engines.
    Handles loading, merging, and accessing configuration parameters.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "scc",
            "papadimitriou": {
                # None draws a fresh seed from the OS on every run
                "seed": None,
                # None means ceil(log2(N)) outer attempts, at least one
                "max_attempts": None,
                # Inner loop runs flip_budget_factor * N^2 flips per attempt
                "flip_budget_factor": 2,
            },
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
        "benchmark": {
            "engines": ["scc", "papadimitriou"],
            "results_dir": "./results",
            "format": "json",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file (YAML or JSON)
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)

        if config_path:
            self._load_config_file(config_path)

    def _load_config_file(self, config_path: str) -> None:
        """
        Load configuration from a file and merge it over the defaults.

        Args:
            config_path: Path to configuration file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        file_config = OmegaConf.load(config_path)
        self.config = OmegaConf.merge(self.config, file_config)
        logger.debug(f"Loaded configuration from {config_path}")

    def update(self, config_dict: dict[str, Any]) -> None:
        """
        Update the configuration with the given dictionary.

        Args:
            config_dict: Dictionary to update the configuration with
        """
        self.config = OmegaConf.merge(self.config, config_dict)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.papadimitriou.seed").

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        try:
            value = OmegaConf.select(self.config, key, default=default)
        except omegaconf.errors.OmegaConfBaseException:
            return default
        if isinstance(value, (DictConfig, omegaconf.ListConfig)):
            return OmegaConf.to_container(value, resolve=True)
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.
        Supports dot notation for nested keys.

        Args:
            key: Configuration key
            value: Value to set
        """
        OmegaConf.update(self.config, key, value)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def save(self, file_path: str) -> None:
        """
        Save the configuration to a YAML file.

        Args:
            file_path: Path to save the configuration to
        """
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        OmegaConf.save(self.config, file_path)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Module-level configuration instance; engines only read from it
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Load configuration from a file and make it the module default.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration instance
    """
    global config
    if config_path:
        config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    """
    Get the module-level configuration instance.

    Returns:
        Configuration instance
    """
    return config
