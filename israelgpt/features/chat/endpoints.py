from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from .handler import ChatProxyHandler

router = APIRouter()

# Every method is routed here so that non-POST requests get the JSON 405 body.
@router.api_route(
    "/chat",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=None,
)
async def chat(
    request: Request,
    handler: ChatProxyHandler = Depends(ChatProxyHandler)
) -> JSONResponse:
    """Forwards the caller's conversation to Mistral behind the IsraelGPT persona."""
    body = await request.body() if request.method == "POST" else None
    return await handler.handle(request.method, body)
