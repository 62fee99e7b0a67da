import logging
from typing import Any, Dict, List, Optional

import requests

from requirement_analyzer.errors import ProviderError, ProviderErrorKind
from .base import LLMClient

logger = logging.getLogger(__name__)


def classify_status(status: int) -> ProviderErrorKind:
    """Map a non-2xx provider status to the error kind that drives fallback."""
    if status == 402:
        return ProviderErrorKind.QUOTA_EXHAUSTED
    if status == 429:
        return ProviderErrorKind.RATE_LIMITED
    return ProviderErrorKind.UNAVAILABLE


class ChatCompletionsClient(LLMClient):
    """OpenAI-compatible /chat/completions client (OpenRouter)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        temperature: float = 0.5,
        max_tokens: int = 6000,
        timeout: float = 120,
        referer: Optional[str] = None,
        title: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.referer = referer
        self.title = title
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        if self.title:
            headers["X-Title"] = self.title
        return headers

    def generate(self, model: str, messages: List[Dict]) -> Dict[str, Any]:
        url = f"{self.base_url}/chat/completions"

        try:
            response = self.session.post(
                url,
                headers=self._headers(),
                json={
                    "model": model,
                    "messages": messages,
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(ProviderErrorKind.UNAVAILABLE, details=str(e)) from e

        if not response.ok:
            raise ProviderError(
                classify_status(response.status_code),
                status=response.status_code,
                details=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                ProviderErrorKind.UNAVAILABLE,
                status=response.status_code,
                details=f"Non-JSON body from provider: {response.text[:200]}",
            ) from e
