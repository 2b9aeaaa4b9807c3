import asyncio
import json as json_lib
import logging
import re
from collections.abc import Awaitable
from collections.abc import Callable
from http import HTTPStatus
from typing import Any
from typing import TypeVar

import aiohttp
from aiohttp import ClientResponse
from aiohttp import ClientSession
from aiohttp import ClientTimeout
from pydantic import AnyHttpUrl
from pydantic import BaseModel
from pydantic import ValidationError

from recurly_client import DeadlineExceeded
from recurly_client import Json
from recurly_client import Provider
from recurly_client import RequestParams
from recurly_client import TransportError

from .exceptions import ApiException
from .exceptions import DecodeError
from .path_builder import join
from .response import Response

__all__ = ["ApiProvider"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Retry on 429 and all 5xx errors (because they are mostly temporary)
RETRY_STATUSES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    }
)
# POST is left out: it is only safe to retry with an idempotency key
RETRY_METHODS = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

IDEMPOTENCY_KEY_HEADER = "Idempotency-Key"


def is_success(status: HTTPStatus | int) -> bool:
    """Returns True on 2xx status"""
    return (int(status) // 100) == 2


def to_status(code: int) -> HTTPStatus | int:
    """Returns the HTTPStatus member for code, or code itself if it is not listed

    Proxies and CDNs use codes that HTTPStatus does not know (e.g. 520).
    """
    try:
        return HTTPStatus(code)
    except ValueError:
        return code


JSON_CONTENT_TYPE_REGEX = re.compile(r"^application\/[^+]*[+]?(json);?.*$")


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return bool(JSON_CONTENT_TYPE_REGEX.match(content_type))


def encode_body(body: BaseModel | Json | None) -> Json | None:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def add_param_headers(
    headers: dict[str, str], params: RequestParams | None
) -> dict[str, str]:
    """Apply the idempotency key and custom headers; custom headers take precedence"""
    if params is None:
        return headers
    if params.idempotency_key:
        headers[IDEMPOTENCY_KEY_HEADER] = params.idempotency_key
    if params.headers:
        headers.update(params.headers)
    return headers


def parse_error_body(content_type: str | None, data: bytes) -> Any:
    text = data.decode(errors="replace")
    if not is_json_content_type(content_type):
        return text or f"Unexpected content type '{content_type}'"
    try:
        return json_lib.loads(text)
    except ValueError:
        return text


def decode_result(
    status: HTTPStatus | int,
    content_type: str | None,
    data: bytes,
    result_type: type[T],
) -> T:
    """Map a raw response onto result_type or raise the matching exception"""
    if not is_success(status):
        raise ApiException.from_body(status, parse_error_body(content_type, data))
    if status == HTTPStatus.NO_CONTENT or not data:
        try:
            return result_type()
        except ValidationError as e:
            raise DecodeError(f"Empty response: {e}", status=status) from e
    if not is_json_content_type(content_type):
        raise DecodeError(f"Unexpected content type '{content_type}'", status=status)
    try:
        return result_type.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(str(e), status=status) from e


class ApiProvider(Provider):
    """Basic JSON API provider using aiohttp.

    By default every call is exactly one request. With ``retries`` set, 429 and
    5xx responses and connection errors of idempotent methods are retried
    with 1, 2, 4, ... times ``backoff_factor`` second intervals.

    Args:
        url: The url of the API
        headers_factory: Coroutine that returns headers (authorization, API version)
        retries: Total number of retries per request
        backoff_factor: Multiplier for retry delay times (1, 2, 4, ...)
        timeout: Default timeout per request in seconds
    """

    def __init__(
        self,
        url: AnyHttpUrl,
        headers_factory: Callable[[], Awaitable[dict[str, str]]] | None = None,
        retries: int = 0,
        backoff_factor: float = 1.0,
        timeout: float = 5.0,
    ):
        self._url = str(url)
        if not self._url.endswith("/"):
            self._url += "/"
        self._headers_factory = headers_factory
        assert retries >= 0
        self._retries = retries
        self._backoff_factor = backoff_factor
        self._timeout = timeout
        self._session: ClientSession | None = None

    async def connect(self) -> None:
        if self._session is None:
            self._session = ClientSession()

    async def disconnect(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> ClientSession:
        assert self._session is not None, "ApiProvider not connected, call connect() first"
        return self._session

    async def _request(
        self,
        method: str,
        path: str,
        body: BaseModel | Json | None,
        params: RequestParams | None,
    ) -> ClientResponse:
        context = params.context if params is not None else None
        if context is not None:
            context.check()
        actual_headers = {}
        if self._headers_factory is not None:
            actual_headers.update(await self._headers_factory())
        add_param_headers(actual_headers, params)
        url = join(self._url, path)
        timeout = self._timeout if context is None else context.timeout(self._timeout)
        request_kwargs = {
            "method": method,
            "url": url,
            "headers": actual_headers,
            "json": encode_body(body),
            "timeout": ClientTimeout(total=timeout),
        }
        retries = self._retries if method.upper() in RETRY_METHODS else 0
        for attempt in range(retries + 1):
            if attempt > 0:
                await asyncio.sleep(self._backoff_factor * 2 ** (attempt - 1))
                if context is not None:
                    context.check()
            logger.debug("%s %s", method, url)
            try:
                response = await self.session.request(**request_kwargs)
                if response.status in RETRY_STATUSES and attempt < retries:
                    response.release()
                    continue
                await response.read()
                return response
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt < retries:
                    continue
                if context is not None and context.expired:
                    raise DeadlineExceeded() from e
                raise TransportError(str(e) or type(e).__name__) from e
        raise AssertionError("unreachable")

    async def call(
        self,
        method: str,
        path: str,
        result_type: type[T],
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> T:
        """Perform one request and decode the response into result_type.

        Raises:
            ApiException: on a non-2xx response
            DecodeError: on a 2xx response that does not fit result_type
            TransportError: on connection errors and timeouts
            Cancelled: if the context of params is cancelled
        """
        response = await self._request(method, path, body, params)
        return decode_result(
            to_status(response.status),
            response.headers.get("Content-Type"),
            await response.read(),
            result_type,
        )

    async def request_raw(
        self,
        method: str,
        path: str,
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> Response:
        response = await self._request(method, path, body, params)
        return Response(
            status=to_status(response.status),
            data=await response.read(),
            content_type=response.headers.get("Content-Type"),
            headers=dict(response.headers),
        )
