from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx

from promptkitchen.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)


def _vendor_error_message(r: httpx.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return "API Error"
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return "API Error"


@dataclass(frozen=True)
class DeepSeekClient:
    """
    Calls DeepSeek via its OpenAI-compatible API.

    Endpoint: POST {base_url}/chat/completions
    Docs: https://api-docs.deepseek.com/

    One attempt per call, no retries. Failures surface as:
    - UpstreamError: the API answered with a non-2xx status (status forwarded, `error.message` extracted)
    - TransportError: timeout, connection/protocol failure, or a success body we can't read
    """

    api_key: str
    base_url: str = "https://api.deepseek.com/v1"
    timeout_s: float = 60.0
    transport: httpx.BaseTransport | None = None

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_s, transport=self.transport)

    def chat(
        self,
        *,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 1500,
    ) -> str:
        url = f"{self.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": int(max_tokens),
        }
        try:
            with self._client() as client:
                r = client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"Completion API timed out after {self.timeout_s:g}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Completion API request failed: {e}") from e

        logger.info("Completion API responded with status %s", r.status_code)
        if not r.is_success:
            message = _vendor_error_message(r)
            logger.warning("Completion API error %s: %s", r.status_code, r.text[:500])
            raise UpstreamError(message, status_code=r.status_code)

        try:
            content = r.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TransportError("Malformed response from completion API") from e
        if not isinstance(content, str):
            raise TransportError("Malformed response from completion API")
        return content
