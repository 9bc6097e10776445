"""Combinator primitives: remove_listeners, once_any, once_all."""

# Every combinator call follows the same discipline:
#
# 1. Arguments are validated before the first listener is registered.
# 2. Each listener it registers is removed exactly once: by the source
#    when it fires, or by the call on completion or cancellation.
# 3. Listeners are removed before the handler runs, so a handler that
#    emits a watched event cannot re-enter the call.


from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from eventjoin.kernel.ports import EventSource
from eventjoin.kernel.trace import Trace

from .types import ArrivalLog, Listener, SubscriptionRequest, SubscriptionSet, Unsubscriber

logger = logging.getLogger(__name__)


def remove_listeners(
    source: EventSource,
    event_names: Sequence[str],
    subscriptions: SubscriptionSet,
) -> None:
    """Remove every listener still recorded in subscriptions from source.

    A listener that fired has already discarded itself from the set, so
    only listeners the source still holds are removed. The subscription
    set is closed afterwards, which makes repeated calls no-ops.
    """
    for name in event_names:
        listener = subscriptions.get(name)
        if listener is not None:
            source.remove_listener(name, listener)
    subscriptions.close()


def _subscribe(
    source: EventSource,
    event_names: Sequence[str],
    subscriptions: SubscriptionSet,
    make_listener: Callable[[str], Listener],
    rollback: Unsubscriber,
) -> None:
    """Register one once listener per name, rolling back on failure."""
    try:
        for name in event_names:
            listener = make_listener(name)
            source.once(name, listener)
            subscriptions.add(name, listener)
    except Exception:
        rollback()
        raise


def _unsubscriber(
    source: EventSource,
    event_names: Sequence[str],
    subscriptions: SubscriptionSet,
    trace: Trace | None,
    root_id: int | None,
) -> Unsubscriber:
    def unsubscribe() -> None:
        if subscriptions.closed:
            return
        remove_listeners(source, event_names, subscriptions)
        logger.debug("cancelled subscription to %s", list(event_names))
        if trace is not None:
            trace.record("cancel", parent_id=root_id)

    return unsubscribe


def _reject_keywords(combinator: str, name: str, kwargs: dict[str, Any], cancel: Unsubscriber) -> None:
    """Cancel the call and raise if an emission carried keyword arguments."""
    if not kwargs:
        return
    cancel()
    raise TypeError(
        f"{combinator} received keyword payload {sorted(kwargs)} for {name!r}; "
        "emit payloads positionally"
    )


def once_any(
    source: EventSource,
    event_names: Sequence[str],
    handler: Callable[..., Any],
    *,
    trace: Trace | None = None,
) -> Unsubscriber:
    """Call handler on the first of several events.

    Semantics:
        - Register a once listener for every name
        - The first delivery removes all of them, then calls
          handler(event_name, *payload)
        - Later deliveries never reach handler
        - Ties are decided by the source's dispatch order
        - An emission with keyword arguments cancels the call and
          raises TypeError; payloads are positional only

    Args:
        source: Event source to subscribe on.
        event_names: Non-empty sequence of distinct event names.
        handler: Called once as handler(event_name, *payload).
        trace: Optional trace to record subscribe/fire/cancel entries in.

    Returns:
        Unsubscriber: Cancels the call; a no-op once the handler has fired.

    Raises:
        PreconditionError: If the arguments are invalid. Nothing is registered.
    """
    request = SubscriptionRequest.check(source, event_names, handler)
    names = request.event_names
    subscriptions = SubscriptionSet()

    root_id = None
    if trace is not None:
        root_id = trace.record("once_any.subscribe", info={"events": list(names)})
    cancel = _unsubscriber(source, names, subscriptions, trace, root_id)

    def make_listener(name: str) -> Listener:
        def listener(*payload: Any, **kwargs: Any) -> None:
            if subscriptions.closed:
                return
            subscriptions.discard(name)
            _reject_keywords("once_any", name, kwargs, cancel)
            remove_listeners(source, names, subscriptions)
            logger.debug("once_any fired on %r", name)
            if trace is not None:
                trace.record("fire", info={"event": name}, parent_id=root_id)
            handler(name, *payload)

        return listener

    _subscribe(source, names, subscriptions, make_listener, cancel)
    logger.debug("once_any subscribed to %s", list(names))
    return cancel


def once_all(
    source: EventSource,
    event_names: Sequence[str],
    handler: Callable[[list[str], list[list[Any]]], Any],
    *,
    trace: Trace | None = None,
) -> Unsubscriber:
    """Call handler once every one of several events has fired.

    Semantics:
        - Register a once listener for every name
        - Capture the payload of each name's first delivery only
        - When all names have arrived, remove every listener, then call
          handler(names, payloads), both in arrival order
        - Repeated deliveries of an arrived name change nothing
        - An emission with keyword arguments cancels the call and
          raises TypeError; payloads are positional only

    Args:
        source: Event source to subscribe on.
        event_names: Non-empty sequence of distinct event names.
        handler: Called once as handler(names, payloads).
        trace: Optional trace to record subscribe/capture/fire/cancel entries in.

    Returns:
        Unsubscriber: Cancels the call; a no-op once the handler has fired.

    Raises:
        PreconditionError: If the arguments are invalid. Nothing is registered.
    """
    request = SubscriptionRequest.check(source, event_names, handler)
    names = request.event_names
    subscriptions = SubscriptionSet()
    arrivals = ArrivalLog(expected=names)

    root_id = None
    if trace is not None:
        root_id = trace.record("once_all.subscribe", info={"events": list(names)})
    cancel = _unsubscriber(source, names, subscriptions, trace, root_id)

    def make_listener(name: str) -> Listener:
        def listener(*payload: Any, **kwargs: Any) -> None:
            if subscriptions.closed:
                return
            subscriptions.discard(name)
            _reject_keywords("once_all", name, kwargs, cancel)
            if not arrivals.capture(name, payload):
                logger.debug("once_all ignored repeated %r", name)
                return
            if trace is not None:
                trace.record("capture", info={"event": name}, parent_id=root_id)
            if not arrivals.complete:
                return
            remove_listeners(source, names, subscriptions)
            arrived = arrivals.names()
            logger.debug("once_all fired after %s", arrived)
            if trace is not None:
                trace.record("fire", info={"events": arrived}, parent_id=root_id)
            handler(arrived, arrivals.payloads())

        return listener

    _subscribe(source, names, subscriptions, make_listener, cancel)
    logger.debug("once_all subscribed to %s", list(names))
    return cancel
