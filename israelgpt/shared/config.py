#!/usr/bin/env python3
"""
Configuration module for the IsraelGPT chat proxy.
Loads settings from an optional YAML file, applies environment overrides
and initializes logging with Pydantic validation.
"""

import os
import sys
import logging
from typing import Dict, Any, Optional

import yaml
from pydantic import BaseModel, ValidationError

CONFIG_FILE = os.environ.get("ISRAELGPT_CONFIG", "config.yml")
PRODUCTION_ENVIRONMENT = "production"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    http_log_level: str = "INFO"
    environment: str = "development"


class MistralConfig(BaseModel):
    api_key: Optional[str] = None
    http_timeout: float = 600.0


class RequestProxyConfig(BaseModel):
    enabled: bool = False
    url: Optional[str] = None


class ChatSettings(BaseModel):
    """Per-request view of the values the chat endpoint depends on."""
    api_key: Optional[str] = None
    is_production: bool = False


def load_config() -> Dict[str, Any]:
    """Load and validate configuration with Pydantic models."""
    try:
        with open(CONFIG_FILE, encoding="utf-8") as file:
            config_data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        config_data = {}
    except yaml.YAMLError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    try:
        config_data["server"] = ServerConfig(**config_data.get("server", {})).model_dump()
        config_data["mistral"] = MistralConfig(**config_data.get("mistral", {})).model_dump()
        config_data["requestProxy"] = RequestProxyConfig(**config_data.get("requestProxy", {})).model_dump()
    except ValidationError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    return config_data


def get_chat_settings() -> ChatSettings:
    """
    Build the chat settings for the current request.

    Environment variables are read on every call so a rotated key or a
    changed environment flag is picked up without a restart; the values
    from config.yml act as fallbacks.
    """
    api_key = os.environ.get("MISTRAL_API_KEY") or config["mistral"].get("api_key")
    environment = os.environ.get("ENVIRONMENT", config["server"]["environment"])
    return ChatSettings(
        api_key=api_key or None,
        is_production=environment == PRODUCTION_ENVIRONMENT,
    )


def setup_logging(config_: Dict[str, Any]) -> logging.Logger:
    """Configure logging based on validated configuration."""
    log_level = config_["server"]["log_level"]
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger_ = logging.getLogger("israelgpt-proxy")
    logger_.info("Logging level set to %s", log_level)
    return logger_


# Load and validate configuration once at startup
config = load_config()
logger = setup_logging(config)
