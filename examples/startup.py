"""Service startup gate built from once_all and once_any.

Waits for every backend to report ready, unless one of them fails first.

Usage:
    python examples/startup.py
"""

import logging

from pyee import EventEmitter

from eventjoin import Trace, attach

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def main() -> None:
    bus = attach(EventEmitter())
    trace = Trace()

    def on_ready(names: list[str], payloads: list[list[object]]) -> None:
        cancel_failure()
        for name, payload in zip(names, payloads):
            print(f"{name}: {payload}")
        print("all backends ready")

    def on_failure(name: str, *payload: object) -> None:
        cancel_ready()
        print(f"startup aborted by {name}: {payload}")

    cancel_ready = bus.once_all(["db.ready", "cache.ready", "queue.ready"], on_ready, trace=trace)
    cancel_failure = bus.once_any(["db.failed", "cache.failed", "queue.failed"], on_failure, trace=trace)

    bus.emit("cache.ready", "redis://localhost")
    bus.emit("db.ready", "postgres://localhost", 12)
    bus.emit("queue.ready", "amqp://localhost")
    bus.emit("db.failed", "too late, ignored")

    print("\n--- Trace ---")
    for ev in trace.get_events():
        print(f"{ev.id:>2} parent={ev.parent_id} {ev.action} {ev.info}")


if __name__ == "__main__":
    main()
