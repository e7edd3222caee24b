"""
Configuration file I/O for the crosstab pipeline.
"""

import json
from pathlib import Path
from typing import Optional, Union

import yaml

from plexquant.core.logger import get_logger
from plexquant.model.config import CrosstabConfig

logger = get_logger("plexquant.io.config")


def _infer_format(path: Path, format: Optional[str]) -> str:
    if format is not None:
        return format.lower()
    if path.suffix.lower() == ".json":
        return "json"
    return "yaml"


def load_crosstab_config(config_path: Union[str, Path]) -> CrosstabConfig:
    """
    Load a crosstab configuration from a YAML or JSON file.

    Parameters
    ----------
    config_path : Union[str, Path]
        Path to configuration file (.yaml, .yml, or .json).

    Returns
    -------
    CrosstabConfig
        Loaded configuration.

    Raises
    ------
    ValueError
        If file format is not supported.
    FileNotFoundError
        If config file does not exist.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with open(config_path, "r") as f:
            data = json.load(f)
    else:
        raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    logger.info("Loaded crosstab configuration from %s", config_path)
    return CrosstabConfig.from_dict(data)


def save_crosstab_config(
    config: CrosstabConfig,
    output_path: Union[str, Path],
    format: Optional[str] = None,
) -> None:
    """
    Save a crosstab configuration to a YAML or JSON file.

    Parameters
    ----------
    config : CrosstabConfig
        Configuration to save.
    output_path : Union[str, Path]
        Output file path.
    format : str, optional
        Output format ('yaml' or 'json'). Inferred from extension if not provided.
    """
    output_path = Path(output_path)
    data = config.to_dict()

    if _infer_format(output_path, format) == "json":
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        with open(output_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info("Saved crosstab configuration to %s", output_path)
