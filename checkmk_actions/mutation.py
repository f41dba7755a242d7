"""Conditional mutations guarded by ``If-Match``.

Checkmk protects versioned objects with entity tags: a PUT, DELETE or action
invocation must carry ``If-Match`` with the tag the caller last saw, and the
server answers 412 when the object changed in between.

``ConditionalMutation`` drives this as a small state machine::

    FETCH_TAG -> MUTATE -> DONE
                   | 412
                   v
           RETRY_FETCH_TAG -> RETRY_MUTATE -> DONE
                   |                 | 412
                   +------> FAILED <-+

The transition functions below are pure: they take the current
``MutationContext`` plus the outcome of the I/O step and return the next
context. Once a conflict has been seen, every failure in the retry branch
resolves to that first conflict.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from .etag import quote_etag, tag_endpoint_for
from .exceptions import (
    CheckmkError,
    ConflictError,
    NotFoundError,
    TagUnavailableError,
)
from .utils import resource_identifier

logger = logging.getLogger(__name__)

FOLDER_ID_HINT = "Checkmk uses ~ instead of / in folder IDs (e.g. ~foo~bar for /foo/bar)"


class MutationState(Enum):
    """States of a conditional mutation."""

    FETCH_TAG = "fetch_tag"
    MUTATE = "mutate"
    RETRY_FETCH_TAG = "retry_fetch_tag"
    RETRY_MUTATE = "retry_mutate"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = (MutationState.DONE, MutationState.FAILED)
TAG_FETCH_STATES = (MutationState.FETCH_TAG, MutationState.RETRY_FETCH_TAG)


@dataclass(frozen=True)
class MutationContext:
    """Immutable snapshot of a mutation's progress."""

    state: MutationState
    tag_path: str
    etag: str = ""
    result: Any = None
    error: Optional[CheckmkError] = None
    conflict: Optional[ConflictError] = None
    tag_fetches: int = 0
    attempts: int = 0


def after_tag_fetch(
    ctx: MutationContext,
    etag: str = "",
    error: Optional[CheckmkError] = None,
) -> MutationContext:
    """Advance after reading the entity tag."""
    retrying = ctx.state is MutationState.RETRY_FETCH_TAG
    ctx = replace(ctx, tag_fetches=ctx.tag_fetches + 1)

    if error is not None or not etag:
        if retrying:
            return replace(ctx, state=MutationState.FAILED, error=ctx.conflict)
        if error is None:
            error = TagUnavailableError(
                "ETag not supported for this resource; refusing to mutate without If-Match",
                endpoint=ctx.tag_path,
            )
        return replace(ctx, state=MutationState.FAILED, error=error)

    next_state = MutationState.RETRY_MUTATE if retrying else MutationState.MUTATE
    return replace(ctx, state=next_state, etag=etag)


def after_mutation(
    ctx: MutationContext,
    result: Any = None,
    error: Optional[CheckmkError] = None,
) -> MutationContext:
    """Advance after sending the mutation."""
    retrying = ctx.state is MutationState.RETRY_MUTATE
    ctx = replace(ctx, attempts=ctx.attempts + 1)

    if error is None:
        return replace(ctx, state=MutationState.DONE, result=result)

    if isinstance(error, ConflictError):
        if retrying:
            return replace(ctx, state=MutationState.FAILED, error=ctx.conflict)
        return replace(ctx, state=MutationState.RETRY_FETCH_TAG, conflict=error)

    return replace(ctx, state=MutationState.FAILED, error=error)


class ConditionalMutation:
    """Executes one mutation with ETag fetch, ``If-Match`` and a single retry."""

    def __init__(
        self,
        client,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Dict[str, Any]] = None,
        tag_path: Optional[str] = None,
    ):
        self.client = client
        self.method = method
        self.path = path
        self.body = body
        self.query = query
        self.tag_path = tag_path or tag_endpoint_for(path)
        self.context = MutationContext(state=MutationState.FETCH_TAG, tag_path=self.tag_path)

    def run(self) -> Any:
        """
        Drive the state machine to completion.

        Returns:
            Decoded body of the successful mutation

        Raises:
            NotFoundError: The object to mutate does not exist
            TagUnavailableError: No usable tag could be read
            ConflictError: The first conflict, when the retry failed as well
            CheckmkAPIError: Any other failure of the mutation itself
        """
        while self.context.state not in TERMINAL_STATES:
            if self.context.state in TAG_FETCH_STATES:
                self.context = self._fetch_tag(self.context)
            else:
                self.context = self._send_mutation(self.context)

        if self.context.state is MutationState.FAILED:
            raise self.context.error

        logger.info(f"{self.method} {self.path} succeeded after {self.context.attempts} attempt(s)")
        return self.context.result

    def _fetch_tag(self, ctx: MutationContext) -> MutationContext:
        try:
            tagged = self.client.request_with_etag('GET', self.tag_path)
        except NotFoundError as e:
            if ctx.state is MutationState.FETCH_TAG:
                return after_tag_fetch(ctx, error=self._not_found(e))
            return after_tag_fetch(ctx, error=e)
        except CheckmkError as e:
            error = TagUnavailableError(
                f"Could not retrieve ETag: {e.message}",
                endpoint=self.tag_path,
            )
            error.__cause__ = e
            return after_tag_fetch(ctx, error=error)

        return after_tag_fetch(ctx, etag=tagged.etag)

    def _send_mutation(self, ctx: MutationContext) -> MutationContext:
        try:
            result = self.client.request(
                self.method,
                self.path,
                body=self.body,
                query=self.query,
                extra_headers={'If-Match': quote_etag(ctx.etag)},
            )
        except CheckmkError as e:
            if isinstance(e, ConflictError) and ctx.state is MutationState.MUTATE:
                logger.warning(f"{self.method} {self.path} hit a version conflict, retrying with a fresh ETag")
            return after_mutation(ctx, error=e)

        return after_mutation(ctx, result=result)

    def _not_found(self, error: NotFoundError) -> NotFoundError:
        identifier = resource_identifier(self.tag_path)
        message = f"Object '{identifier}' not found; {self.method} was not attempted"

        if self.tag_path != self.path:
            # Only refines the message; a failure of this lookup is ignored.
            try:
                self.client.request('GET', self.path)
            except NotFoundError:
                message += f" (neither {self.tag_path} nor {self.path} exist)"
            except CheckmkError:
                pass

        hint = None
        if "folder_config" in self.tag_path:
            hint = FOLDER_ID_HINT

        not_found = NotFoundError(
            message,
            identifier=identifier,
            response_data=error.response_data,
            endpoint=self.tag_path,
            hint=hint,
        )
        not_found.__cause__ = error
        return not_found
