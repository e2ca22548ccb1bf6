"""
Shakespeare Translator client for the Pokemon service.
"""

from typing import Optional

import httpx

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from service_pokemon.app.domain.models import RateLimited, Success, TransformResult, Unavailable

TRANSLATE_PATH = "/translate/shakespeare.json"


class ShakespeareClient:
    """Client for the Fun Translations Shakespeare endpoint.

    Requests are performed against ``<base_url>/translate/shakespeare.json``
    with a form-encoded ``text`` field. The service answers either with
    ``{"contents": {"translated": ..., "text": ...}}`` or with
    ``{"error": {"code": ..., "message": ...}}``.
    """

    def __init__(
        self,
        shakespeare_translator_endpoint: str,
        *,
        timeout: float = 10.0,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint_url = f"{shakespeare_translator_endpoint.rstrip('/')}{TRANSLATE_PATH}"
        self.metrics = metrics
        self.logger = get_logger("pokemon.shakespeare_client")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)

    async def translate(self, text: str) -> TransformResult:
        """Request the Shakespearean translation of ``text``."""
        self.logger.debug("Sending HTTP request", url=self.endpoint_url)
        try:
            response = await self._client.post(self.endpoint_url, data={"text": text})
        except httpx.TimeoutException as exc:
            self.logger.warning("Shakespeare Translator request timed out", error=str(exc))
            return self._record(Unavailable("timeout"))
        except httpx.HTTPError as exc:
            self.logger.error("Cannot send request to Shakespeare Translator", error=str(exc))
            return self._record(Unavailable(f"transport error: {exc}"))

        self.logger.debug("Got HTTP response", status_code=response.status_code)

        if response.status_code == 429:
            self.logger.warning("Shakespeare Translator rate limit reached")
            return self._record(RateLimited(self._error_message(response) or "rate limited"))

        if response.status_code >= 500:
            self.logger.error(
                "Shakespeare Translator request failed",
                status_code=response.status_code,
                response=response.text
            )
            return self._record(Unavailable(f"HTTP error: {response.status_code}"))

        try:
            body = response.json()
        except ValueError:
            self.logger.error("Cannot parse response from Shakespeare Translator")
            return self._record(Unavailable("malformed response"))

        if not isinstance(body, dict):
            return self._record(Unavailable("malformed response"))

        error = body.get("error")
        if isinstance(error, dict):
            message = str(error.get("message", "unknown error"))
            self.logger.warning("Shakespeare Translator error", code=error.get("code"), message=message)
            if error.get("code") == 429:
                return self._record(RateLimited(message))
            return self._record(Unavailable(f"Shakespeare Translator error: {message}"))

        contents = body.get("contents")
        translated = contents.get("translated") if isinstance(contents, dict) else None
        if not isinstance(translated, str) or response.status_code != 200:
            self.logger.error("Unexpected Shakespeare Translator response", status_code=response.status_code)
            return self._record(Unavailable("malformed response"))

        return self._record(Success(translated))

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return None

    def _record(self, result: TransformResult) -> TransformResult:
        if self.metrics:
            self.metrics.increment_counter(
                "shakespeare_requests_total",
                outcome=type(result).__name__.lower()
            )
        return result

    async def close(self) -> None:
        await self._client.aclose()
