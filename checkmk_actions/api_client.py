"""Checkmk REST API client used by every action."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import CheckmkCredentials
from .etag import extract_etag
from .exceptions import CheckmkError, api_error_for_status
from .mutation import ConditionalMutation
from .pagination import collect_all
from .transport import HttpTransport, TransportResponse
from .utils import extract_error_message


@dataclass
class TaggedResponse:
    """Decoded response body together with the object's entity tag."""

    body: Any
    etag: str = ""


class CheckmkClient:
    """Client for interacting with Checkmk REST API."""

    API_PATH = "check_mk/api/1.0"

    def __init__(self, credentials: CheckmkCredentials, transport: Optional[HttpTransport] = None):
        self.credentials = credentials
        self.base_url = credentials.api_base_url
        self.transport = transport or HttpTransport(
            timeout=credentials.request_timeout,
            verify=credentials.verify_ssl,
        )
        self.logger = logging.getLogger(__name__)
        self.logger.debug(f"Client created for user {credentials.username} on {self.base_url}")

    def build_url(self, path: str) -> str:
        """
        Build the absolute URL for an API path.

        Absolute URLs and site-rooted paths (as found in pagination links) are
        accepted so server-supplied links can be followed verbatim.
        """
        if path.startswith(('http://', 'https://')):
            return path

        if not path.startswith('/'):
            path = '/' + path

        if path.startswith(f"/{self.credentials.site}/{self.API_PATH}"):
            return f"{self.credentials.host}{path}"

        return f"{self.base_url}{path}"

    def _headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'Authorization': f'Bearer {self.credentials.username} {self.credentials.password}',
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        url = self.build_url(path)
        response = self.transport.send(
            method,
            url,
            headers=self._headers(extra_headers),
            body=body,
            params=query,
        )

        if not response.ok:
            error_msg = extract_error_message(response.body)
            self.logger.debug(f"{method} {path} failed with {response.status_code}: {error_msg}")
            raise api_error_for_status(
                f"API request failed: {error_msg}",
                response.status_code,
                response_data=response.body if isinstance(response.body, dict) else None,
                endpoint=path,
            )

        return response

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make one request against the REST API.

        Args:
            method: HTTP method
            path: Endpoint path below ``/check_mk/api/1.0``
            body: JSON body, omitted when None
            query: Query string parameters
            extra_headers: Headers added to (or overriding) the defaults

        Returns:
            Decoded JSON body, ``{}`` for empty responses

        Raises:
            CheckmkAPIError: For any failed request; never retried here
        """
        return self._send(method, path, body, query, extra_headers).body

    def request_with_etag(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> TaggedResponse:
        """
        Make a request and also return the normalized ``ETag`` of the response.

        The tag is ``""`` when the server sent none.
        """
        response = self._send(method, path, body, query)
        etag = extract_etag(response.headers)
        self.logger.debug(f"ETag for {path}: {etag or '<none>'}")
        return TaggedResponse(body=response.body, etag=etag)

    def mutate(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
        tag_path: Optional[str] = None,
    ) -> Any:
        """
        Run a mutation guarded by ``If-Match``.

        The current tag is fetched first and the mutation retried once with a
        fresh tag if the server reports a conflict.

        Args:
            method: HTTP method of the mutation (PUT, DELETE, POST)
            path: Endpoint to mutate
            body: JSON body of the mutation
            query: Query string parameters of the mutation
            tag_path: Endpoint to read the tag from, when it is not the object
                addressed by ``path``

        Returns:
            Decoded JSON body of the successful mutation
        """
        return ConditionalMutation(self, method, path, body, query, tag_path=tag_path).run()

    def request_all_items(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """Fetch every page of a collection and return all records in order."""
        return collect_all(self, method, path, body, query)

    def test_connection(self) -> bool:
        """
        Test connection to the Checkmk API.

        Returns:
            True if connection is successful
        """
        self.logger.debug("Testing connection to Checkmk API via /version.")
        try:
            self.request('GET', '/version')
            self.logger.debug("Connection test succeeded.")
            return True
        except CheckmkError as e:
            self.logger.error(f"Connection test failed: {e}")
            return False
