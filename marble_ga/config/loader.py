"""Loading level files from disk."""

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from marble_ga.config.models import ConfigurationModel
from marble_ga.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.json")


def parse_configuration(text: Union[str, bytes], source: str = "<string>") -> ConfigurationModel:
    """Validate a JSON level document.

    Raises:
        ConfigurationError: If the document is not valid JSON or does not
            match the schema
    """
    try:
        return ConfigurationModel.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {source}:\n{exc}") from exc


def load_configuration(path: Union[str, Path, None] = None) -> ConfigurationModel:
    """Read and validate the level file at ``path`` (the bundled default if None)."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        text = config_path.read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {exc}") from exc

    configuration = parse_configuration(text, source=str(config_path))
    logger.debug(
        "Loaded configuration %s with %d level(s)", config_path, len(configuration.levels)
    )
    return configuration
