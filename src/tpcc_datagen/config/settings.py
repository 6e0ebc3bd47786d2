"""
Locating and loading the generator's config.json.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from tpcc_datagen.shared.exceptions import ConfigurationError

from .models import TpccConfig

logger = logging.getLogger(__name__)


def _default_locations(config_name: str) -> list[Path]:
    cwd = Path.cwd()
    return [cwd / config_name, cwd / "config" / config_name]


def load_config(
    config_path: str | Path | None = None, config_name: str = "config.json"
) -> TpccConfig:
    """
    Load and validate the population configuration.

    Args:
        config_path: A config file, or a directory holding ``config_name``.
            When omitted, the working directory and its ``config/``
            subdirectory are searched in that order.
        config_name: File name to look for in directories

    Raises:
        FileNotFoundError: If no configuration file exists
        ConfigurationError: If the file is not JSON or fails validation
    """
    if config_path is None:
        candidates = _default_locations(config_name)
        path = next((candidate for candidate in candidates if candidate.exists()), None)
        if path is None:
            searched = ", ".join(str(candidate) for candidate in candidates)
            raise FileNotFoundError(f"'{config_name}' not found; searched: {searched}")
    else:
        path = Path(config_path)
        if path.is_dir():
            path = path / config_name

    try:
        config = TpccConfig.from_file(path)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            validation_errors=[err["msg"] for err in e.errors()],
        ) from e
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    logger.info(
        f"Loaded configuration from {path}: "
        f"{config.scale.warehouses} warehouse(s), seed={config.seed}"
    )
    return config


def create_default_config(output_path: str | Path) -> TpccConfig:
    """Write a one-warehouse, standard-size configuration with seed 42 and return it."""
    config = TpccConfig(seed=42, scale={"warehouses": 1})
    config.to_file(output_path)
    logger.info(f"Wrote default configuration to {output_path}")
    return config
