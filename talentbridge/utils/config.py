"""
Configuration loading utilities.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union
import yaml

from dotenv import load_dotenv

from talentbridge.models import RulesSettings

logger = logging.getLogger(__name__)

RULES_FILE_ENV = "TALENTBRIDGE_RULES_FILE"


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def load_env() -> None:
    """Load environment variables from .env file."""
    env_path = get_project_root() / ".env"
    load_dotenv(env_path)


def get_default_rules_path() -> Path:
    return get_project_root() / "config" / "rules.yaml"


def get_rules_path() -> Path:
    """
    Resolve the rules file.
    TALENTBRIDGE_RULES_FILE (environment or .env) wins over config/rules.yaml.
    """
    load_env()
    override = os.getenv(RULES_FILE_ENV)
    if override:
        return Path(override)
    return get_default_rules_path()


def load_rules(path: Optional[Union[str, Path]] = None) -> RulesSettings:
    """
    Load rule thresholds from YAML.

    An explicitly requested file (argument or environment) must exist.
    When the bundled default is missing the code defaults are used.
    """
    if path is not None:
        config_path = Path(path)
        explicit = True
    else:
        config_path = get_rules_path()
        explicit = config_path != get_default_rules_path()

    if not config_path.exists():
        if explicit:
            raise ValueError(f"Rules file not found: {config_path}")
        logger.info(f"No rules file at {config_path}, using built-in defaults")
        return RulesSettings()

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Rules file {config_path} must contain a mapping")

    settings = RulesSettings(**data)
    logger.debug(f"Loaded rules from {config_path}")
    return settings
