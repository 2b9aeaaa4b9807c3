# (c) Nelen & Schuurmans

__all__ = [
    "Cancelled",
    "DeadlineExceeded",
    "RecurlyError",
    "TransportError",
]


class RecurlyError(Exception):
    """Base class of all recoverable errors raised by the client."""


class TransportError(RecurlyError):
    """The request did not produce a response (network failure, timeout)."""


class Cancelled(TransportError):
    def __init__(self, msg: str = "request cancelled"):
        super().__init__(msg)


class DeadlineExceeded(Cancelled):
    def __init__(self, msg: str = "deadline exceeded"):
        super().__init__(msg)
