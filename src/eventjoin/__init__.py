from .attach import AttachedSource, attach
from .combinators import once_all, once_any, remove_listeners
from .combinators.types import Unsubscriber
from .kernel import EventSource, Evidence, PreconditionError, Trace

__all__ = [
    # Combinators
    "once_any",
    "once_all",
    "remove_listeners",
    "Unsubscriber",
    # Attachment
    "attach",
    "AttachedSource",
    # Kernel
    "EventSource",
    "PreconditionError",
    # Tracing
    "Trace",
    "Evidence",
]
