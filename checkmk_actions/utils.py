"""Common utilities for the Checkmk actions adapter."""

from typing import Any, Dict, List, Optional
from urllib.parse import unquote


HOSTNAME_PATTERN = r'^[-0-9a-zA-Z_.]+$'


def extract_error_message(error_response: Any) -> str:
    """Extract meaningful error message from API response."""
    if isinstance(error_response, dict):
        # Check for common error fields
        if "detail" in error_response:
            return str(error_response["detail"])
        elif "message" in error_response:
            return str(error_response["message"])
        elif "error" in error_response:
            return str(error_response["error"])
        elif "title" in error_response:
            return str(error_response["title"])

    return str(error_response)


def sanitize_folder_path(folder: str) -> str:
    """Sanitize a folder for Checkmk request bodies.

    Slash-separated paths are normalized; folder ids in ``~`` form are
    accepted by the API as well and returned unchanged.
    """
    if not folder:
        return "/"

    if folder.startswith("~"):
        return folder

    # Ensure folder starts with /
    if not folder.startswith("/"):
        folder = "/" + folder

    # Remove trailing slash unless it's root
    if folder != "/" and folder.endswith("/"):
        folder = folder[:-1]

    return folder


def normalize_folder_id(folder: str) -> str:
    """Convert a folder path into the identifier used in folder object URLs.

    Checkmk does not accept ``/`` inside a folder id; path separators are
    written as ``~``. Identifiers that already start with ``~`` are returned
    unchanged.

    Examples:
        >>> normalize_folder_id("/")
        '~'
        >>> normalize_folder_id("/foo/bar")
        '~foo~bar'
        >>> normalize_folder_id("~foo")
        '~foo'
    """
    if not folder:
        return "~"
    if folder.startswith("~"):
        return folder
    return "~" + sanitize_folder_path(folder).strip("/").replace("/", "~")


def resource_identifier(path: str) -> str:
    """Return the decoded last segment of an object path."""
    segment = path.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    return unquote(segment)


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma separated string into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` without keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}
