from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from requests import Response

from ..errors import DecodingError, InvalidResponse, TransportError


@dataclass
class RequestConfig:
    timeout: float = 10.0
    user_agent: Optional[str] = None


class HttpProvider:
    """Base class for HTTP providers: shared session, timeouts and error mapping.

    There are no retries here. A failed call raises straight away and the
    caller decides whether to try again.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(f"weather_pipeline.providers.{self.__class__.__name__}")

    def _build_session(self, config: RequestConfig) -> requests.Session:
        return requests.Session()

    def _handle_response(self, response: Response) -> Response:
        if response.status_code != 200:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise InvalidResponse(response.status_code, response.text[:500])
        return response

    def _request(self, method: str, url: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Response:
        if self.request_config.user_agent:
            headers = dict(kwargs.pop("headers", None) or {})
            headers.setdefault("User-Agent", self.request_config.user_agent)
            kwargs["headers"] = headers
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", url, exc_info=exc)
            raise TransportError(f"timeout: {exc}") from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise TransportError(str(exc)) from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON from %s", response.url, exc_info=exc)
            raise DecodingError("malformed", str(exc)) from exc


__all__ = ["HttpProvider", "RequestConfig"]
