"""Response parsing for chat completion payloads.

Only ``choices[0].message.content`` is read. The pydantic models below
describe the minimum shape a payload must have; anything else the provider
sends (ids, usage, finish reasons) is ignored.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from apex.core.llm.provider import ChatEmpty, ChatResult, ChatSuccess

logger = logging.getLogger(__name__)


class _ResponseMessage(BaseModel):
    content: str | None = None


class _Choice(BaseModel):
    message: _ResponseMessage


class _ChatCompletion(BaseModel):
    choices: list[_Choice]


class MalformedPayload(ValueError):
    """Payload does not match the chat completion response schema."""


def parse_chat_payload(payload: Any) -> ChatResult:
    """Map a decoded JSON payload to a ChatResult.

    Raises:
        MalformedPayload: If the payload does not match the expected shape.
    """
    try:
        completion = _ChatCompletion.model_validate(payload)
    except ValidationError as exc:
        raise MalformedPayload(
            f"unexpected response shape ({exc.error_count()} validation errors)"
        ) from exc

    if not completion.choices:
        logger.debug("Chat completion returned zero choices")
        return ChatEmpty()

    content = completion.choices[0].message.content
    # Leading/trailing whitespace and newlines only; the body is left as-is.
    text = (content or "").strip()
    if not text:
        return ChatEmpty()
    return ChatSuccess(text=text)


def format_provider_error(payload: Any) -> str:
    """Pull a human-readable message out of an error body, if there is one."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict):
            msg = error.get("message") or error.get("code")
            if isinstance(msg, str) and msg:
                return msg
    return ""
