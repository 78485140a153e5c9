# israelgpt/features/chat/handler.py
import logging
from typing import Any

from fastapi import Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from israelgpt.shared.config import ChatSettings, get_chat_settings
from israelgpt.shared.constants import (
    EMPTY_CONVERSATION_MESSAGE,
    INVALID_PAYLOAD_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    MISSING_API_KEY_MESSAGE,
    RATE_LIMIT_ERROR_CODE,
    UPSTREAM_ERROR_CODE,
    UPSTREAM_FAILURE_MESSAGE,
)
from israelgpt.shared.dependencies import get_logger, get_mistral_client
from israelgpt.shared.metrics import CHAT_REQUESTS, UPSTREAM_ERRORS

from .client import MistralClient, UpstreamError, UpstreamStatusError
from .command import ChatResponse, ErrorResponse, extract_messages, filter_conversation, parse_request_body


def status_for_upstream_error(error: UpstreamError) -> int:
    """Only an upstream 429 is passed through; every other failure is a 502."""
    if isinstance(error, UpstreamStatusError) and error.status_code == RATE_LIMIT_ERROR_CODE:
        return RATE_LIMIT_ERROR_CODE
    return UPSTREAM_ERROR_CODE


def json_response(status_code: int, content: Any) -> JSONResponse:
    CHAT_REQUESTS.labels(status=str(status_code)).inc()
    return JSONResponse(status_code=status_code, content=content)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Gives methods the router rejects on its own (TRACE, custom verbs) the chat 405 body."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    response = json_response(405, ErrorResponse(error=METHOD_NOT_ALLOWED_MESSAGE).model_dump(exclude_none=True))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


class ChatProxyHandler:
    def __init__(
        self,
        settings: ChatSettings = Depends(get_chat_settings),
        mistral_client: MistralClient = Depends(get_mistral_client),
        logger: logging.Logger = Depends(get_logger),
    ):
        self._settings = settings
        self._client = mistral_client
        self._logger = logger

    async def handle(self, method: str, body: Any) -> JSONResponse:
        if method.upper() != "POST":
            return json_response(405, ErrorResponse(error=METHOD_NOT_ALLOWED_MESSAGE).model_dump(exclude_none=True))

        if not self._settings.api_key:
            return json_response(500, ErrorResponse(error=MISSING_API_KEY_MESSAGE).model_dump(exclude_none=True))

        messages = extract_messages(parse_request_body(body))
        if messages is None:
            return json_response(400, ErrorResponse(error=INVALID_PAYLOAD_MESSAGE).model_dump(exclude_none=True))

        conversation = filter_conversation(messages)
        if not conversation:
            return json_response(400, ErrorResponse(error=EMPTY_CONVERSATION_MESSAGE).model_dump(exclude_none=True))

        try:
            assistant_message = await self._client.complete(conversation, self._settings.api_key)
        except UpstreamError as e:
            UPSTREAM_ERRORS.labels(kind=e.kind).inc()
            self._logger.error(
                "Mistral API call failed: %s - %s", e.message, e.details,
                extra={"error": e.message, "details": e.details},
            )
            error = ErrorResponse(
                error=UPSTREAM_FAILURE_MESSAGE,
                details=None if self._settings.is_production else e.message,
            )
            return json_response(status_for_upstream_error(e), error.model_dump(exclude_none=True))

        return json_response(200, ChatResponse(message=assistant_message).model_dump())
