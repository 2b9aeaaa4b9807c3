import json as json_lib
import logging
from collections.abc import Callable
from typing import TypeVar

from pydantic import AnyHttpUrl
from pydantic import BaseModel
from urllib3 import BaseHTTPResponse
from urllib3 import PoolManager
from urllib3 import Retry
from urllib3.exceptions import HTTPError

from recurly_client import DeadlineExceeded
from recurly_client import Json
from recurly_client import RequestParams
from recurly_client import SyncProvider
from recurly_client import TransportError

from .api_provider import add_param_headers
from .api_provider import decode_result
from .api_provider import encode_body
from .api_provider import RETRY_METHODS
from .api_provider import RETRY_STATUSES
from .api_provider import to_status
from .path_builder import join
from .response import Response

__all__ = ["SyncApiProvider"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SyncApiProvider(SyncProvider):
    """Basic JSON API provider using a urllib3 connection pool.

    The pool is thread-safe and may be shared by many concurrent calls and
    pagers. By default every call is exactly one request; ``retries`` configures
    the urllib3 retry policy (429 and 5xx of idempotent methods, with 1, 2, 4
    times ``backoff_factor`` second intervals).

    Args:
        url: The url of the API
        headers_factory: Callable that returns headers (authorization, API version)
        retries: Total number of retries per request
        backoff_factor: Multiplier for retry delay times (1, 2, 4, ...)
        timeout: Default timeout per request in seconds
        pool: Use this pool instead of creating one
    """

    def __init__(
        self,
        url: AnyHttpUrl,
        headers_factory: Callable[[], dict[str, str]] | None = None,
        retries: int = 0,
        backoff_factor: float = 1.0,
        timeout: float = 5.0,
        pool: PoolManager | None = None,
    ):
        self._url = str(url)
        if not self._url.endswith("/"):
            self._url += "/"
        self._headers_factory = headers_factory
        self._timeout = timeout
        if pool is None:
            pool = PoolManager(
                retries=Retry(
                    retries,
                    backoff_factor=backoff_factor,
                    status_forcelist=RETRY_STATUSES,
                    allowed_methods=RETRY_METHODS,
                    raise_on_status=False,
                )
            )
        self._pool = pool

    def disconnect(self) -> None:
        self._pool.clear()

    def _request(
        self,
        method: str,
        path: str,
        body: BaseModel | Json | None,
        params: RequestParams | None,
    ) -> BaseHTTPResponse:
        context = params.context if params is not None else None
        if context is not None:
            context.check()
        actual_headers = {}
        if self._headers_factory is not None:
            actual_headers.update(self._headers_factory())
        request_kwargs = {
            "method": method,
            "url": join(self._url, path),
            "timeout": (
                self._timeout if context is None else context.timeout(self._timeout)
            ),
        }
        # for urllib3<2, we dump json ourselves
        json = encode_body(body)
        if json is not None:
            request_kwargs["body"] = json_lib.dumps(json).encode()
            actual_headers["Content-Type"] = "application/json"
        add_param_headers(actual_headers, params)
        logger.debug("%s %s", method, request_kwargs["url"])
        try:
            return self._pool.request(headers=actual_headers, **request_kwargs)
        except HTTPError as e:
            if context is not None and context.expired:
                raise DeadlineExceeded() from e
            raise TransportError(str(e)) from e

    def call(
        self,
        method: str,
        path: str,
        result_type: type[T],
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> T:
        """Perform one request and decode the response into result_type.

        The path is used as is: identifiers and query options must already be
        encoded (see ``interpolate_path`` and ``build_url``). From params only
        the idempotency key, the custom headers and the context are used.

        Raises:
            ApiException: on a non-2xx response
            DecodeError: on a 2xx response that does not fit result_type
            TransportError: on connection errors and timeouts
            Cancelled: if the context of params is cancelled
        """
        response = self._request(method, path, body, params)
        return decode_result(
            to_status(response.status),
            response.headers.get("Content-Type"),
            response.data,
            result_type,
        )

    def request_raw(
        self,
        method: str,
        path: str,
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> Response:
        response = self._request(method, path, body, params)
        return Response(
            status=to_status(response.status),
            data=response.data,
            content_type=response.headers.get("Content-Type"),
            headers=dict(response.headers),
        )
