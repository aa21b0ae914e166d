"""
YAML configuration loader.

Loads operator-maintained pattern files and analysis options.

Example file:
    analysis:
      sample_size: 10
      top_n: 5
      max_workers: 4
      encoding: utf-8
    extra_bot_patterns:
      - mycompany-probe
    categories:
      AI Agents: [gptbot, claudebot]
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..ingestion.exceptions import ConfigurationError


def load_yaml_config(file_path: Union[str, Path]) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed configuration (empty dict for an empty file)

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
                            YAML, or its top level is not a mapping
    """
    path = Path(file_path)
    if not path.exists():
        raise ConfigurationError(
            "Configuration file not found", config_path=str(path)
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Invalid YAML", config_path=str(path), reason=str(e)
        ) from e
    except OSError as e:
        raise ConfigurationError(
            "Cannot read configuration file", config_path=str(path), reason=str(e)
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            "Top level of configuration must be a mapping",
            config_path=str(path),
            reason=f"got {type(config).__name__}",
        )
    return config
