"""Entity tag helpers for Checkmk's optimistic concurrency control."""

from typing import Mapping, Optional

from requests.structures import CaseInsensitiveDict

ACTIONS_MARKER = "/actions/"


def normalize_etag(value: Optional[str]) -> str:
    """
    Turn a raw ``ETag`` header value into the bare tag.

    Strips the weak-validator prefix, surrounding quotes and whitespace.
    ``None`` or an empty header yields ``""``.
    """
    if not value:
        return ""

    tag = value.strip()
    if tag[:2].upper() == "W/":
        tag = tag[2:].strip()
    return tag.strip('"').strip()


def extract_etag(headers: Optional[Mapping[str, str]]) -> str:
    """Read the normalized entity tag from response headers, ignoring key case."""
    if not headers:
        return ""
    if not isinstance(headers, CaseInsensitiveDict):
        headers = CaseInsensitiveDict(headers)
    return normalize_etag(headers.get("etag"))


def quote_etag(tag: str) -> str:
    """Format a bare tag for the ``If-Match`` request header."""
    return f'"{tag}"'


def tag_endpoint_for(path: str) -> str:
    """
    Return the object path whose ETag guards a mutation of ``path``.

    Action invocations (``.../actions/<name>/invoke``) are guarded by the tag
    of the object they act on, so everything from ``/actions/`` onward is cut.
    """
    index = path.find(ACTIONS_MARKER)
    if index == -1:
        return path
    return path[:index]
