"""
Deep-link routing
"""

import asyncio
import inspect
import logging
from typing import Any, Mapping, Optional, Union

from .config import NON_BRANCH_LINK_KEY
from .exceptions import InvalidLinkPayload, LinkDeliveryFailed
from .interfaces import DestinationResolver
from .models import (
    LinkEvent,
    LinkFailure,
    NonBranchLink,
    NoRoute,
    OtherLink,
    Routed,
    RouteResult,
)

logger = logging.getLogger(__name__)


def classify_event(
    event: Union[Mapping[str, Any], LinkEvent],
    link_key: str = NON_BRANCH_LINK_KEY
) -> LinkEvent:
    """
    Decide once what kind of link event this is.

    Args:
        event: Raw ``{'error': ..., 'params': {...}}`` mapping, or an
            already classified event
        link_key: Reserved params key holding a non-canonical link

    Returns:
        LinkFailure, NonBranchLink or OtherLink

    Raises:
        InvalidLinkPayload: If the reserved key holds an empty or non-string link
    """
    if isinstance(event, (LinkFailure, NonBranchLink, OtherLink)):
        if isinstance(event, NonBranchLink):
            _check_link(event.raw)
        return event

    error = event.get('error')
    if error:
        return LinkFailure(cause=error)

    params = event.get('params') or {}
    if not isinstance(params, Mapping):
        raise InvalidLinkPayload(f"Link params must be a mapping, got {type(params).__name__}")
    if link_key not in params:
        return OtherLink(params=params)
    return NonBranchLink(raw=_check_link(params[link_key]))


def _check_link(raw: Any) -> str:
    if not isinstance(raw, str):
        raise InvalidLinkPayload(f"Link must be a string, got {type(raw).__name__}")
    if not raw.strip():
        raise InvalidLinkPayload("Link is empty")
    return raw


class DeepLinkRouter:
    """
    Validates inbound link events and hands links to the destination resolver.

    Holds no state between calls. Delivery errors and malformed payloads are
    logged and answered with NoRoute; they never propagate.

    Example:
        >>> router = DeepLinkRouter(resolver)
        >>> router.handle({'params': {'+non_branch_link': 'ethereum:0xabc'}})
        Routed(link='ethereum:0xabc', action=...)
    """

    def __init__(
        self,
        resolver: DestinationResolver,
        link_key: str = NON_BRANCH_LINK_KEY,
        log: Optional[logging.Logger] = None
    ):
        self.resolver = resolver
        self.link_key = link_key
        self.log = log or logger

    def handle(self, event: Union[Mapping[str, Any], LinkEvent]) -> RouteResult:
        """
        Route one link event.

        Args:
            event: Raw link event mapping or a classified LinkEvent

        Returns:
            Routed with the resolver's action, or NoRoute
        """
        try:
            link_event = classify_event(event, self.link_key)
        except InvalidLinkPayload as e:
            self.log.warning(f"Ignoring deep link: {e}")
            return NoRoute(reason=str(e))

        if isinstance(link_event, LinkFailure):
            failure = LinkDeliveryFailed("Error from deep link delivery", link_event.cause)
            self.log.error(f"{failure}: {link_event.cause}")
            return NoRoute(reason=str(failure))

        if isinstance(link_event, OtherLink):
            return NoRoute(reason="No link to dispatch")

        return self._dispatch(link_event.raw)

    def _dispatch(self, raw: str) -> RouteResult:
        try:
            action = self.resolver.parse(raw)
        except Exception as e:
            self.log.error(f"Destination resolver failed for {raw!r}: {e}", exc_info=True)
            return NoRoute(reason=f"Resolver failed: {e}")

        if inspect.isawaitable(action):
            action = asyncio.ensure_future(action)
            action.add_done_callback(lambda task: self._log_task_failure(raw, task))
        self.log.debug(f"Dispatched deep link {raw!r}")
        return Routed(link=raw, action=action)

    def _log_task_failure(self, raw: str, task: "asyncio.Future") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.log.error(f"Destination resolver failed for {raw!r}: {error}")
