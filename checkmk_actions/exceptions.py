"""Exception hierarchy for the Checkmk actions adapter.

Everything raised out of the adapter is a ``CheckmkError``. Subclasses carry
the details needed by callers that want to react to a particular failure
(status codes, the identifier that was not found, validation errors).
"""

from typing import Any, Dict, List, Optional


class CheckmkError(Exception):
    """User-facing error raised by the adapter."""

    def __init__(self, message: str, endpoint: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.hint = hint

    def _detail_parts(self) -> List[str]:
        return []

    def __str__(self):
        """Provide helpful error message for debugging."""
        parts = [self.message]
        parts.extend(self._detail_parts())

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.hint:
            parts.append(self.hint)

        return " | ".join(parts)


def _status_hint(status_code: Optional[int]) -> Optional[str]:
    if status_code == 401:
        return "Check your Checkmk credentials and site name"
    if status_code == 403:
        return "Check user permissions in Checkmk"
    if status_code == 404:
        return "Resource not found - check the identifier"
    if status_code == 412:
        return "The object was modified by someone else - reload and try again"
    if status_code == 428:
        return "Checkmk requires an If-Match header for this endpoint"
    if status_code == 422:
        return "Invalid request data - check parameter format"
    if status_code and status_code >= 500:
        return "Checkmk server error - check server status"
    return None


class CheckmkAPIError(CheckmkError):
    """Exception raised for failed requests against the Checkmk REST API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        endpoint: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message, endpoint=endpoint, hint=hint or _status_hint(status_code))
        self.status_code = status_code
        self.response_data = response_data

    def _detail_parts(self) -> List[str]:
        if self.status_code:
            return [f"Status: {self.status_code}"]
        return []


class NotFoundError(CheckmkAPIError):
    """The addressed object does not exist (HTTP 404)."""

    def __init__(self, message: str, identifier: Optional[str] = None, **kwargs):
        kwargs.setdefault("status_code", 404)
        super().__init__(message, **kwargs)
        self.identifier = identifier


class ConflictError(CheckmkAPIError):
    """The supplied entity tag no longer matches the object (HTTP 412)."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("status_code", 412)
        super().__init__(message, **kwargs)


class TagUnavailableError(CheckmkError):
    """The entity tag of an object could not be obtained."""


class ParameterValidationError(CheckmkError):
    """Action parameters failed local validation; nothing was sent."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        resource: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.errors = errors or []
        self.resource = resource
        self.operation = operation

    def _detail_parts(self) -> List[str]:
        parts = []
        for error in self.errors:
            location = ".".join(str(part) for part in error.get("loc", ()))
            parts.append(f"{location}: {error.get('msg', 'invalid value')}")
        return parts


class UnsupportedActionError(CheckmkError):
    """No handler is registered for a resource/operation pair."""


def api_error_for_status(
    message: str,
    status_code: Optional[int],
    response_data: Optional[Dict[str, Any]] = None,
    endpoint: Optional[str] = None,
) -> CheckmkAPIError:
    """Build the most specific API error for an HTTP status code."""
    if status_code == 404:
        return NotFoundError(message, response_data=response_data, endpoint=endpoint)
    if status_code == 412:
        return ConflictError(message, response_data=response_data, endpoint=endpoint)
    return CheckmkAPIError(
        message, status_code=status_code, response_data=response_data, endpoint=endpoint
    )