"""Traversal of paginated Checkmk collections."""

import logging
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


def page_records(page: Any) -> List[Any]:
    """Records carried by one response page.

    Collection envelopes contribute their ``value`` list, bare lists their
    elements, and anything else counts as a single record.
    """
    if isinstance(page, dict) and "value" in page:
        return list(page["value"] or [])
    if isinstance(page, list):
        return list(page)
    return [page]


def next_link(page: Any) -> Optional[str]:
    """Return ``links.next`` of a response page, if any."""
    if not isinstance(page, dict):
        return None
    links = page.get("links")
    if isinstance(links, dict):
        return links.get("next") or None
    return None


def iter_records(
    client,
    method: str,
    path: str,
    body: Any = None,
    query: Optional[Dict[str, Any]] = None,
) -> Iterator[Any]:
    """
    Yield every record of a collection, page after page.

    The server-supplied ``links.next`` replaces both the path and the original
    query parameters. Iteration ends when a page carries no next link.
    """
    page_number = 0
    while True:
        page = client.request(method, path, body=body, query=query)
        page_number += 1
        records = page_records(page)
        logger.debug(f"Page {page_number} of {path} returned {len(records)} record(s)")
        yield from records

        link = next_link(page)
        if not link:
            return
        path, query = link, None


def collect_all(
    client,
    method: str,
    path: str,
    body: Any = None,
    query: Optional[Dict[str, Any]] = None,
) -> List[Any]:
    """Fetch all pages of a collection into one ordered list."""
    records = list(iter_records(client, method, path, body, query))
    logger.info(f"Retrieved {len(records)} record(s) from {path}")
    return records
