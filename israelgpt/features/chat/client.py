# israelgpt/features/chat/client.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from israelgpt.shared.constants import DEFAULT_MODEL, MISTRAL_CHAT_ENDPOINT, SYSTEM_PROMPT
from israelgpt.shared.utils import mask_key

from .command import ChatMessage


class UpstreamError(Exception):
    """Base class for a failed call to the Mistral API."""

    kind = "upstream"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class UpstreamTransportError(UpstreamError):
    """The request never produced an HTTP response (connect error, timeout, ...)."""

    kind = "transport"


class UpstreamStatusError(UpstreamError):
    """Mistral answered with a non-success HTTP status."""

    kind = "status"

    def __init__(self, status_code: int, reason: str, body: str):
        super().__init__(f"Mistral API error: {status_code} {reason}", details=body)
        self.status_code = status_code
        self.reason = reason


class UpstreamContractError(UpstreamError):
    """Mistral answered successfully but the body is not a chat completion."""

    kind = "contract"

    def __init__(self):
        super().__init__("Invalid response structure from Mistral API")


def build_request_data(messages: List[ChatMessage]) -> Dict[str, Any]:
    """Prepends the persona prompt and reduces each turn to role and content."""
    return {
        "model": DEFAULT_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            *({"role": message.role, "content": message.content} for message in messages),
        ],
    }


def extract_assistant_message(payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise UpstreamContractError()
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        raise UpstreamContractError()
    first = choices[0]
    if not isinstance(first, dict):
        raise UpstreamContractError()
    # Empty objects and lists count as a message; null, empty strings, 0 and false do not.
    message = first.get("message")
    if message is None or message in ("", 0, False):
        raise UpstreamContractError()
    return message


class MistralClient:
    """Sends one chat completion request to Mistral. No retries."""

    def __init__(self, http_client: httpx.AsyncClient, logger: logging.Logger):
        self._client = http_client
        self._logger = logger

    async def complete(self, messages: List[ChatMessage], api_key: str) -> Any:
        """Returns `choices[0].message` of the completion or raises UpstreamError."""
        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        self._logger.info(
            "Sending %d message(s) to model '%s' with key %s.",
            len(messages), DEFAULT_MODEL, mask_key(api_key)
        )

        try:
            response = await self._client.post(
                MISTRAL_CHAT_ENDPOINT,
                json=build_request_data(messages),
                headers=headers,
            )
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"Request to Mistral API failed: {e!r}") from e

        if not response.is_success:
            raise UpstreamStatusError(response.status_code, response.reason_phrase, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamContractError() from e

        return extract_assistant_message(payload)
