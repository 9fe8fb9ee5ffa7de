"""In-process change feed for new messages.

Each WebSocket subscriber owns an ``asyncio.Queue`` bound to the event loop it
subscribed from. Publishers usually run in FastAPI's threadpool, so events are
handed over with ``loop.call_soon_threadsafe``. Delivery is best effort: no
ordering or retry guarantees, and events for a full queue are dropped.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List
from uuid import UUID

logger = logging.getLogger("coachdesk.realtime")

QUEUE_SIZE = 100


@dataclass(eq=False)
class Subscription:
    user_id: UUID
    queue: asyncio.Queue
    loop: asyncio.AbstractEventLoop


_subscribers: Dict[UUID, List[Subscription]] = {}
_lock = threading.Lock()


def subscribe(user_id: UUID) -> Subscription:
    """Register a subscriber; must be called from inside the event loop."""
    sub = Subscription(
        user_id=user_id,
        queue=asyncio.Queue(maxsize=QUEUE_SIZE),
        loop=asyncio.get_running_loop(),
    )
    with _lock:
        _subscribers.setdefault(user_id, []).append(sub)
    logger.info("realtime_subscribed user_id=%s", user_id)
    return sub


def unsubscribe(sub: Subscription) -> None:
    with _lock:
        subs = _subscribers.get(sub.user_id, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            _subscribers.pop(sub.user_id, None)
    logger.info("realtime_unsubscribed user_id=%s", sub.user_id)


def subscriber_count(user_id: UUID) -> int:
    with _lock:
        return len(_subscribers.get(user_id, []))


def _offer(sub: Subscription, event: Dict[str, Any]) -> None:
    try:
        sub.queue.put_nowait(event)
    except asyncio.QueueFull:
        logger.warning("realtime_event_dropped user_id=%s reason=queue_full", sub.user_id)


def publish(user_id: UUID, event: Dict[str, Any]) -> int:
    """Push an event to every live subscriber of ``user_id``.

    Returns:
        Number of subscribers the event was handed to.
    """
    with _lock:
        subs = list(_subscribers.get(user_id, []))

    delivered = 0
    for sub in subs:
        try:
            sub.loop.call_soon_threadsafe(_offer, sub, event)
            delivered += 1
        except RuntimeError:
            # Loop already closed; the socket is gone
            logger.warning("realtime_stale_subscriber user_id=%s", user_id)
            unsubscribe(sub)
    return delivered


def close() -> None:
    """Forget every subscriber (application shutdown)."""
    with _lock:
        count = sum(len(v) for v in _subscribers.values())
        _subscribers.clear()
    logger.info("realtime_closed subscribers=%d", count)
