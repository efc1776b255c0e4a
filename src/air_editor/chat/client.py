"""Gemini ``generateContent`` client used by the chat bridge."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx

from air_editor.errors import ChatConfigurationError, ChatTransportError
from air_editor.runtime import telemetry

from .history import ChatMessage

API_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
DEFAULT_MODEL = "gemini-1.5-flash-latest"
ERROR_PREVIEW = 200


class ChatClient(Protocol):
    """Anything that turns a transcript plus a prompt into a reply."""

    def generate(self, history: Sequence[ChatMessage], prompt: str) -> str: ...


def build_contents(history: Sequence[ChatMessage], prompt: str) -> List[Dict[str, Any]]:
    """Alternate user/model turns from ``history``, then the new prompt."""

    contents = [
        {
            "role": "model" if message.role == "model" else "user",
            "parts": [{"text": message.content}],
        }
        for message in history
    ]
    contents.append({"role": "user", "parts": [{"text": prompt}]})
    return contents


def extract_text(data: Any) -> str:
    if not isinstance(data, dict):
        raise ChatTransportError("malformed response body")
    error = data.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ChatTransportError(message or "unknown API error")
    candidates = data.get("candidates") or []
    if not candidates:
        raise ChatTransportError("no content in gemini response")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or "text" not in parts[0]:
        raise ChatTransportError("no content in gemini response")
    return str(parts[0]["text"])


class GeminiClient:
    """Blocking client; the bridge runs it off the UI thread.

    Without an explicit ``api_key`` the credential is read from the
    environment on every request, so a missing key surfaces as an inline
    chat error rather than a startup failure.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        api_key_env: str = "GEMINI_API_KEY",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.api_key_env = api_key_env
        self._transport = transport
        self.logger = telemetry.get_logger("air_editor.chat.client")

    @property
    def url(self) -> str:
        return API_URL_TEMPLATE.format(model=self.model)

    def _resolve_key(self) -> str:
        if self.api_key is not None:
            return self.api_key
        return os.environ.get(self.api_key_env, "")

    def generate(self, history: Sequence[ChatMessage], prompt: str) -> str:
        api_key = self._resolve_key()
        if not api_key:
            raise ChatConfigurationError(
                f"{self.api_key_env} environment variable not set"
            )

        body = {"contents": build_contents(history, prompt)}
        with telemetry.span(
            "chat::request",
            logger_name="air_editor.chat.client",
            component="chat",
            metadata={"model": self.model, "turns": len(body["contents"])},
        ) as handle:
            try:
                with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                    response = client.post(
                        self.url,
                        params={"key": api_key},
                        headers={"Content-Type": "application/json"},
                        json=body,
                    )
            except httpx.TimeoutException as exc:
                handle.add_metadata("status", "timeout")
                raise ChatTransportError(
                    f"request timed out after {self.timeout:g}s"
                ) from exc
            except httpx.HTTPError as exc:
                handle.add_metadata("status", "transport_error")
                raise ChatTransportError(f"http request failed: {exc}") from exc

            handle.add_metadata("status", response.status_code)
            if response.status_code >= 300:
                raise ChatTransportError(
                    f"gemini API error (status {response.status_code}): "
                    f"{response.text[:ERROR_PREVIEW]}",
                    status=response.status_code,
                )
            try:
                data = response.json()
            except ValueError as exc:
                raise ChatTransportError(f"failed to decode response: {exc}") from exc
            text = extract_text(data)
            self.logger.debug(f"gemini reply received ({len(text)} chars)")
            return text


__all__ = [
    "API_URL_TEMPLATE",
    "ChatClient",
    "GeminiClient",
    "build_contents",
    "extract_text",
]
