from typing import Dict, Literal

import httpx
from fastapi import Depends
from pydantic import BaseModel

from israelgpt.shared.config import logger
from israelgpt.shared.constants import MISTRAL_HEALTH_URL
from israelgpt.shared.dependencies import get_http_client

ServiceState = Literal["up", "down"]


class ProxyHealth(BaseModel):
    status: Literal["ok", "error"]
    services: Dict[str, ServiceState]


async def probe_mistral(http_client: httpx.AsyncClient) -> ServiceState:
    """Mistral counts as up whenever it answers below 500; a 401 still proves it is reachable."""
    try:
        response = await http_client.head(MISTRAL_HEALTH_URL, timeout=5.0)
    except httpx.HTTPError as e:
        logger.error("Mistral API health probe failed: %s", e)
        return "down"
    return "up" if response.status_code < 500 else "down"


class HealthCheckHandler:
    def __init__(self, http_client: httpx.AsyncClient = Depends(get_http_client)):
        self._http_client = http_client

    async def handle(self) -> ProxyHealth:
        mistral_state = await probe_mistral(self._http_client)
        return ProxyHealth(
            status="ok" if mistral_state == "up" else "error",
            services={"mistral_api": mistral_state},
        )
