"""
Configuration loader for the registry clients
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import logging

logger = logging.getLogger(__name__)

ADDRESS_ENV = "TF_ADDRESS"
TOKEN_ENV = "TF_TOKEN"


class RegistryConfig(BaseModel):
    """Registry address and API token shared by every client"""

    model_config = ConfigDict(frozen=True)

    address: str = Field(min_length=1)
    token: str = Field(min_length=1, repr=False)

    @field_validator("address")
    @classmethod
    def _trim_trailing_slashes(cls, value: str) -> str:
        trimmed = value.strip().rstrip("/")
        if not trimmed:
            raise ValueError("address must not be empty")
        return trimmed


def load_registry_config(config_path: Optional[Path] = None) -> RegistryConfig:
    """
    Load and validate registry configuration

    Values come from an optional YAML file (keys: address, token). The
    TF_ADDRESS and TF_TOKEN environment variables, including any set in a
    .env file in or above the working directory, take precedence over the file.

    Args:
        config_path: Path to a YAML config file. Optional.

    Returns:
        Validated RegistryConfig object

    Raises:
        FileNotFoundError: If config_path is given but doesn't exist
        ValidationError: If address or token is missing or empty
    """
    load_dotenv(find_dotenv(usecwd=True))

    config_data: Dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    for key, env_name in (("address", ADDRESS_ENV), ("token", TOKEN_ENV)):
        value = os.getenv(env_name)
        if value:
            config_data[key] = value

    try:
        config = RegistryConfig(**config_data)
        logger.info(f"Loaded registry config for {config.address}")
        return config
    except ValidationError as e:
        logger.error(f"Registry config validation failed: {e}")
        raise
