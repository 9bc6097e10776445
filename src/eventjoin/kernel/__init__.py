"""Kernel layer - the event source port, errors and tracing."""

from eventjoin.kernel.errors import PreconditionError
from eventjoin.kernel.ports import EventSource
from eventjoin.kernel.trace import Evidence, Trace

__all__ = [
    "EventSource",
    "PreconditionError",
    # Tracing
    "Evidence",
    "Trace",
]
