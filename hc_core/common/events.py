# hc_core/common/events.py
"""
In-process domain events. Payloads are plain ids and scalars so subscribers
never need to import the publishing app's models.

    @subscribe("medicine.low_stock")
    def notify(payload): ...
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Payload = dict[str, Any]
Handler = Callable[[Payload], None]

_handlers: dict[str, list[Handler]] = defaultdict(list)


def subscribe(event_name: str) -> Callable[[Handler], Handler]:
    def register(fn: Handler) -> Handler:
        if fn not in _handlers[event_name]:
            _handlers[event_name].append(fn)
        return fn
    return register


def unsubscribe(event_name: str, fn: Handler) -> None:
    if fn in _handlers.get(event_name, ()):
        _handlers[event_name].remove(fn)


def publish(event_name: str, payload: Payload) -> int:
    """
    Call every handler in subscription order; returns how many ran.
    A failing handler propagates to the publisher.
    """
    handlers = tuple(_handlers.get(event_name, ()))
    logger.debug("publish %s to %d handler(s)", event_name, len(handlers))
    for handler in handlers:
        handler(payload)
    return len(handlers)
