from fastapi import APIRouter, Depends

from .handler import HealthCheckHandler, ProxyHealth

router = APIRouter(tags=["Monitoring"])


@router.get("/health", response_model=ProxyHealth)
async def health(handler: HealthCheckHandler = Depends(HealthCheckHandler)) -> ProxyHealth:
    """Reports whether the proxy can reach the Mistral API."""
    return await handler.handle()
