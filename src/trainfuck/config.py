"""
Trainfuck configuration and diagnostic logging setup
"""

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

import toml

DEFAULT_CONFIG_FILES = ("trainfuck.json", "trainfuck.toml")

LOG_FORMAT = "[trainfuck] %(message)s"

class ConfigError(Exception):
    pass

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load settings from an explicit path or a default file in the cwd.

    With no explicit path, a missing default file is not an error.
    """
    if not config_path:
        for candidate in DEFAULT_CONFIG_FILES:
            if os.path.isfile(candidate):
                config_path = candidate
                break
        else:
            return {}
    elif not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    if config_path.endswith(".json"):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    elif config_path.endswith(".toml"):
        cfg = toml.load(config_path)
    else:
        raise ConfigError(f"Unsupported config format: {config_path}")

    logging.getLogger("trainfuck.config").debug("loaded %s", config_path)
    return cfg

def configure_logging(debug: bool = False, stream=None) -> logging.Logger:
    """Send diagnostics to stderr, apart from the program's own output"""
    logger = logging.getLogger("trainfuck")
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return logger
