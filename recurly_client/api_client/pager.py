from collections.abc import AsyncIterator
from collections.abc import Iterator
from typing import Generic
from typing import TypeVar
from urllib.parse import parse_qsl
from urllib.parse import urlsplit

from pydantic import BaseModel

from recurly_client import Envelope
from recurly_client import KeyValue
from recurly_client import ListCursor
from recurly_client import Page
from recurly_client import RequestParams

from .api_provider import ApiProvider
from .api_provider import is_success
from .api_provider import parse_error_body
from .exceptions import ApiException
from .exceptions import DecodeError
from .path_builder import encode_query
from .response import Response
from .sync_api_provider import SyncApiProvider

__all__ = ["AsyncPager", "Pager"]

T = TypeVar("T", bound=BaseModel)

TOTAL_RECORDS_HEADER = "Recurly-Total-Records"


def with_option(path: str, key: str, value: str) -> str:
    """Return path with the query option key set to value (replacing it if present)"""
    parts = urlsplit(path)
    options = [
        KeyValue(k, v)
        for (k, v) in parse_qsl(parts.query, keep_blank_values=True)
        if k != key
    ]
    options.append(KeyValue(key, value))
    return parts.path + "?" + encode_query(options)


def parse_total(response: Response) -> int:
    if not is_success(response.status):
        raise ApiException.from_body(
            response.status, parse_error_body(response.content_type, response.data)
        )
    headers = {k.lower(): v for (k, v) in response.headers.items()}
    try:
        return int(headers[TOTAL_RECORDS_HEADER.lower()])
    except (KeyError, ValueError):
        raise DecodeError(
            f"Missing or invalid '{TOTAL_RECORDS_HEADER}' header", status=response.status
        )


class BasePager(Generic[T]):
    """Cursor state shared by the sync and async pagers.

    The pager is either ready (``has_more`` with a ``next_path``) or
    exhausted. A successful fetch moves the cursor to the one returned by the
    server; a failed fetch leaves it untouched so that the same page can be
    requested again. The instance mutates itself on every fetch: do not share
    it between threads or tasks.
    """

    def __init__(
        self, item_type: type[T], path: str, params: RequestParams | None = None
    ):
        self.item_type = item_type
        self.start_path = path
        self.params = params
        self.next_path = path
        self.has_more = True

    @property
    def cursor(self) -> ListCursor:
        return ListCursor(next_path=self.next_path, has_more=self.has_more)

    @property
    def exhausted(self) -> bool:
        return self.cursor.exhausted

    def _empty_page(self) -> Page[T]:
        return Page(items=[], cursor=self.cursor)

    def _advance(self, envelope: Envelope[T]) -> Page[T]:
        self.has_more = envelope.has_more
        self.next_path = envelope.next
        return Page(items=envelope.data, cursor=self.cursor)

    def _first_path(self) -> str:
        return with_option(self.start_path, "limit", "1")


class Pager(BasePager[T]):
    """Lazily iterate a list endpoint.

    Example::

        for account in client.list_accounts(ListAccountsParams(limit=200)):
            ...
    """

    def __init__(
        self,
        provider: SyncApiProvider,
        item_type: type[T],
        path: str,
        params: RequestParams | None = None,
    ):
        super().__init__(item_type, path, params)
        self.provider = provider

    def fetch(self) -> Page[T]:
        """Fetch the next page; an exhausted pager returns an empty page."""
        if self.exhausted:
            return self._empty_page()
        envelope = self.provider.call(
            "GET", self.next_path, Envelope[self.item_type], params=self.params
        )
        return self._advance(envelope)

    def pages(self) -> Iterator[Page[T]]:
        while not self.exhausted:
            yield self.fetch()

    def __iter__(self) -> Iterator[T]:
        for page in self.pages():
            yield from page.items

    def first(self) -> T | None:
        envelope = self.provider.call(
            "GET", self._first_path(), Envelope[self.item_type], params=self.params
        )
        return envelope.data[0] if envelope.data else None

    def count(self) -> int:
        return parse_total(
            self.provider.request_raw("HEAD", self.start_path, params=self.params)
        )


# This is a copy-paste of Pager, with async / await added


class AsyncPager(BasePager[T]):
    def __init__(
        self,
        provider: ApiProvider,
        item_type: type[T],
        path: str,
        params: RequestParams | None = None,
    ):
        super().__init__(item_type, path, params)
        self.provider = provider

    async def fetch(self) -> Page[T]:
        if self.exhausted:
            return self._empty_page()
        envelope = await self.provider.call(
            "GET", self.next_path, Envelope[self.item_type], params=self.params
        )
        return self._advance(envelope)

    async def pages(self) -> AsyncIterator[Page[T]]:
        while not self.exhausted:
            yield await self.fetch()

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.pages():
            for item in page.items:
                yield item

    async def first(self) -> T | None:
        envelope = await self.provider.call(
            "GET", self._first_path(), Envelope[self.item_type], params=self.params
        )
        return envelope.data[0] if envelope.data else None

    async def count(self) -> int:
        return parse_total(
            await self.provider.request_raw("HEAD", self.start_path, params=self.params)
        )
