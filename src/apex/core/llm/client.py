"""HTTP chat completion client for the Groq OpenAI-compatible endpoint.

One POST per ``send`` call: no retries, no caching, no queueing. Every
failure mode is folded into a ``ChatResult`` so callers never see an
exception.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from apex.core.llm.provider import (
    ChatEmpty,
    ChatFailure,
    ChatRequest,
    ChatResult,
    ChatSuccess,
)
from apex.core.llm.response import MalformedPayload, format_provider_error, parse_chat_payload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0


class GroqChatClient:
    """Chat client that talks to ``{base_url}/chat/completions`` over httpx.

    Usage::

        client = GroqChatClient(timeout=30.0)
        result = await client.send(request, credential="gsk_...")

    Pass ``http_client`` to reuse a long-lived ``httpx.AsyncClient`` (or
    one backed by ``httpx.MockTransport`` in tests); otherwise a client is
    opened per call.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = base_url.rstrip("/") + "/chat/completions"
        self.timeout = timeout
        self._http = http_client

    async def send(self, request: ChatRequest, credential: str | None) -> ChatResult:
        """Perform one chat completion call."""
        if not credential:
            logger.warning("Chat completion skipped: no credential configured")
            return ChatFailure("credential missing", kind="credential_missing")

        start = time.monotonic()
        try:
            payload = await self._post(request, credential)
            result = parse_chat_payload(payload)
        except TransportError as exc:
            result = ChatFailure(str(exc), kind="transport")
        except ResponseStatusError as exc:
            result = ChatFailure(str(exc), kind="http_status")
        except (MalformedResponseError, MalformedPayload) as exc:
            result = ChatFailure(f"malformed response: {exc}", kind="malformed")
        elapsed_ms = (time.monotonic() - start) * 1000

        logger.info(
            "Chat completion: model=%s, result=%s, latency=%.0fms",
            request.model,
            _describe(result),
            elapsed_ms,
        )
        return result

    async def aclose(self) -> None:
        """Close an injected HTTP client."""
        if self._http is not None:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _post(self, request: ChatRequest, credential: str) -> Any:
        """POST the request and return the decoded JSON body."""
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        body = request.to_payload()

        try:
            if self._http is not None:
                response = await self._http.post(
                    self.endpoint, json=body, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as http:
                    response = await http.post(self.endpoint, json=body, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(f"request timed out after {self.timeout:.0f}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"could not reach chat endpoint ({type(exc).__name__}: {exc})"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_success:
                raise MalformedResponseError(f"body is not valid JSON ({exc})") from exc
            payload = None

        if not response.is_success:
            detail = format_provider_error(payload)
            message = f"chat endpoint returned HTTP {response.status_code}"
            if detail:
                message = f"{message}: {detail}"
            raise ResponseStatusError(message)

        return payload


# ------------------------------------------------------------------
# Exceptions
# ------------------------------------------------------------------

class ChatClientError(Exception):
    """Base exception for chat client errors."""


class TransportError(ChatClientError):
    """DNS, TLS, timeout or connection failure."""


class ResponseStatusError(ChatClientError):
    """Endpoint answered with a non-2xx status."""


class MalformedResponseError(ChatClientError):
    """Body could not be decoded as JSON."""


def _describe(result: ChatResult) -> str:
    if isinstance(result, ChatSuccess):
        return "success"
    if isinstance(result, ChatEmpty):
        return "empty"
    return f"failure[{result.kind}]"
