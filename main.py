#!/usr/bin/env python3
"""
IsraelGPT Chat Proxy
Forwards chat conversations to the Mistral API behind the IsraelGPT persona.
"""

from contextlib import asynccontextmanager

import httpx
import uvicorn

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from israelgpt.shared.config import config, logger, get_chat_settings
from israelgpt.shared.middleware import RequestContextMiddleware
from israelgpt.features.chat.endpoints import router as chat_router
from israelgpt.features.chat.handler import method_not_allowed_handler
from israelgpt.features.health_check.endpoints import router as health_check_router
from israelgpt.features.metrics.endpoints import router as metrics_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan resources."""
    client_kwargs = {"timeout": config["mistral"]["http_timeout"]}
    if config["requestProxy"]["enabled"] and config["requestProxy"]["url"]:
        client_kwargs["proxy"] = config["requestProxy"]["url"]
        logger.info("Using proxy for httpx client: %s", config["requestProxy"]["url"])
    app.state.http_client = httpx.AsyncClient(**client_kwargs)

    if not get_chat_settings().api_key:
        logger.warning("No Mistral API key found in config.yml or MISTRAL_API_KEY; chat requests will fail with 500.")

    logger.info("Application startup complete")
    yield
    await app.state.http_client.aclose()
    logger.info("Application shutdown complete")

app = FastAPI(
    title="IsraelGPT Chat Proxy",
    description="Forwards chat conversations to the Mistral API behind the IsraelGPT persona",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(chat_router, prefix="/api", tags=["Chat"])
app.include_router(health_check_router, tags=["Monitoring"])
app.include_router(metrics_router)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

app.add_middleware(RequestContextMiddleware)

if __name__ == "__main__":
    host = config["server"]["host"]
    port = config["server"]["port"]

    logger.warning("Starting IsraelGPT proxy on %s:%s", host, port)
    logger.warning("Chat URL: http://%s:%s/api/chat", host, port)

    log_config = uvicorn.config.LOGGING_CONFIG
    http_log_level = config["server"].get("http_log_level", "INFO").upper()
    log_config["loggers"]["uvicorn.access"]["level"] = http_log_level

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=log_config,
        timeout_graceful_shutdown=30,
        server_header=False
    )
