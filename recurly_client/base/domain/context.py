# (c) Nelen & Schuurmans

import threading
import time

from .exceptions import Cancelled
from .exceptions import DeadlineExceeded

__all__ = ["Context"]


class Context:
    """Cooperative cancellation signal for outgoing requests.

    A context is passed along with the request parameters. The providers check
    it right before dispatching a request and cap the request timeout to the
    time that is left until the deadline. Cancelling a context that is shared
    by a pager prevents any further page requests.

    The cancel flag is a ``threading.Event`` so that a context may be cancelled
    from another thread than the one that is waiting for the response.

    Args:
        timeout: Seconds from now after which the context expires.
        deadline: Absolute expiry in ``time.monotonic()`` seconds. Ignored
            when ``timeout`` is given.
    """

    def __init__(self, timeout: float | None = None, deadline: float | None = None):
        if timeout is not None:
            deadline = time.monotonic() + timeout
        self._deadline = deadline
        self._cancel_event = threading.Event()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set() or self.expired

    def cancel(self) -> None:
        self._cancel_event.set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None if there is no deadline"""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def timeout(self, default: float) -> float:
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)

    def check(self) -> None:
        if self.expired:
            raise DeadlineExceeded()
        if self._cancel_event.is_set():
            raise Cancelled()
