from .transport import (
    EventCallback,
    Session,
    SessionTransport,
    TransportFactory,
    load_transport_factory,
)

__all__ = [
    "EventCallback",
    "Session",
    "SessionTransport",
    "TransportFactory",
    "load_transport_factory",
]
