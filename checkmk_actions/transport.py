"""HTTP transport used by the Checkmk client."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .exceptions import CheckmkAPIError


@dataclass
class TransportResponse:
    """Status, headers and decoded JSON body of one HTTP exchange."""

    status_code: int
    body: Any = None
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransport:
    """Performs single HTTP requests through a ``requests`` session."""

    def __init__(self, timeout: int = 30, verify: bool = True,
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        """
        Send one request and decode the response.

        Non-2xx responses are returned, not raised; interpreting the status
        is up to the caller.

        Raises:
            CheckmkAPIError: On network failures or an undecodable success body
        """
        self.logger.debug(f"Sending {method} request to {url} with params: {params}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
                params=params or None,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: {e}")
            raise CheckmkAPIError(f"Request failed: {e}", endpoint=url) from e

        self.logger.debug(f"{method} {url} -> {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            body=self._decode_body(response, url),
            headers=CaseInsensitiveDict(response.headers or {}),
        )

    def _decode_body(self, response: requests.Response, url: str) -> Any:
        if response.status_code == 204:  # No Content
            return {}

        try:
            return response.json()
        except ValueError:
            text = response.text or ""
            if not text.strip():
                return {}
            if response.status_code >= 400:
                return {"message": text}
            raise CheckmkAPIError(
                "Invalid JSON in response",
                status_code=response.status_code,
                response_data={"message": text[:500]},
                endpoint=url,
            )
