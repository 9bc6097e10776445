"""Combinators - aggregate several once-subscriptions into one."""

from .ops import once_all, once_any, remove_listeners
from .types import ArrivalLog, SubscriptionRequest, SubscriptionSet, Unsubscriber

__all__ = [
    "once_any",
    "once_all",
    "remove_listeners",
    # Types
    "ArrivalLog",
    "SubscriptionRequest",
    "SubscriptionSet",
    "Unsubscriber",
]
