"""
Explicit fallback policy for data loads.

Pages that show non-critical data (election history, audit logs) keep
working when such a read fails; reads needed to cast a vote never degrade.
The policy is chosen per call site in the application services, never in
the aggregation core, so tests can tell "no data" from "fetch failed".
"""

from enum import Enum
from typing import Awaitable, Callable, TypeVar

import structlog

from core.exceptions import DataLoadFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class FallbackPolicy(str, Enum):
    """What to do when a data load fails."""

    PROPAGATE = "propagate"  # Critical read: surface the failure
    EMPTY = "empty"  # Non-critical read: degrade to an empty result


async def load_with_fallback(
    loader: Callable[[], Awaitable[T]],
    policy: FallbackPolicy,
    default: Callable[[], T],
    *,
    operation: str,
) -> T:
    """
    Run ``loader`` and apply ``policy`` to a DataLoadFailure.

    Only DataLoadFailure is subject to the policy; any other error always
    propagates.

    Args:
        loader: Zero-argument coroutine function performing the read
        policy: Fallback policy for this call site
        default: Factory for the degraded result (e.g. ``list``)
        operation: Name used in the warning log when degrading

    Returns:
        The loaded value, or ``default()`` when degraded
    """
    try:
        return await loader()
    except DataLoadFailure as e:
        if policy is FallbackPolicy.PROPAGATE:
            raise
        logger.warning("data_load_degraded", operation=operation, error=str(e))
        return default()
