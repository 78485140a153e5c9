import json
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from israelgpt.shared.constants import BLANK_CHARACTERS

class ChatMessage(BaseModel):
    """A caller-supplied conversation turn. Unknown fields are dropped."""
    role: Literal["user", "assistant"]
    content: StrictStr

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip(BLANK_CHARACTERS):
            raise ValueError("content must not be blank")
        return value

class ChatResponse(BaseModel):
    # Relayed exactly as Mistral returned it.
    message: Any

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


def parse_request_body(body: Any) -> Any:
    """
    Normalize a raw request body.

    Returns None for an empty body or one that is not valid JSON. Strings and
    bytes are decoded; anything already structured is returned as is.
    """
    if not body:
        return None

    if isinstance(body, (str, bytes, bytearray)):
        try:
            return json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return None

    return body


def extract_messages(payload: Any) -> Optional[list]:
    """Returns the `messages` list of a parsed payload, or None if there is none."""
    if not isinstance(payload, dict):
        return None
    messages = payload.get("messages")
    if not isinstance(messages, list):
        return None
    return messages


def is_valid_message(item: Any) -> bool:
    try:
        ChatMessage.model_validate(item)
    except ValidationError:
        return False
    return True


def filter_conversation(messages: List[Any]) -> List[ChatMessage]:
    """Keeps the well-formed user/assistant turns, in order."""
    return [ChatMessage.model_validate(item) for item in messages if is_valid_message(item)]
