#!/usr/bin/env python3
"""
Dependency provider functions for the application.
"""

import logging

from fastapi import Depends, Request
import httpx

from israelgpt.shared.config import logger
from israelgpt.features.chat.client import MistralClient

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Returns the shared httpx.AsyncClient instance."""
    return request.app.state.http_client

def get_logger() -> logging.Logger:
    """Returns the application logger."""
    return logger

def get_mistral_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    logger_: logging.Logger = Depends(get_logger),
) -> MistralClient:
    """Returns a MistralClient bound to the shared HTTP client."""
    return MistralClient(http_client=http_client, logger=logger_)
