# This module is a copy paste of test_pager.py, with async / await added

from unittest import mock

import pytest

from recurly_client import Account
from recurly_client import Envelope
from recurly_client import TransportError
from recurly_client.api_client import ApiProvider
from recurly_client.api_client import AsyncPager
from recurly_client.api_client import Response


def envelope(ids, has_more, next=""):
    return Envelope[Account](
        object="list",
        has_more=has_more,
        next=next,
        data=[Account(id=x) for x in ids],
    )


@pytest.fixture
def provider():
    return mock.AsyncMock(spec_set=ApiProvider)


@pytest.fixture
def pager(provider) -> AsyncPager:
    return AsyncPager(provider, Account, "/accounts?order=&sort=")


@pytest.fixture
def three_pages(provider):
    provider.call.side_effect = [
        envelope(["a", "b"], True, "/accounts?cursor=2"),
        envelope(["c", "d"], True, "/accounts?cursor=4"),
        envelope(["e"], False),
    ]


async def test_three_pages_then_terminal(pager: AsyncPager, provider, three_pages):
    pages = [await pager.fetch() for _ in range(4)]

    assert [len(page.items) for page in pages] == [2, 2, 1, 0]
    assert provider.call.await_count == 3
    assert pager.exhausted


async def test_iterate_items(pager: AsyncPager, three_pages):
    assert [x.id async for x in pager] == ["a", "b", "c", "d", "e"]


async def test_pages(pager: AsyncPager, three_pages):
    assert [len(page.items) async for page in pager.pages()] == [2, 2, 1]


async def test_fetch_error_keeps_cursor(pager: AsyncPager, provider):
    provider.call.side_effect = [TransportError("timeout"), envelope(["a"], False)]

    with pytest.raises(TransportError):
        await pager.fetch()

    assert pager.next_path == "/accounts?order=&sort="
    assert pager.has_more
    page = await pager.fetch()
    assert [x.id for x in page.items] == ["a"]
    assert provider.call.call_args_list[0] == provider.call.call_args_list[1]


async def test_first(pager: AsyncPager, provider):
    provider.call.return_value = envelope(["a"], True, "/accounts?cursor=1")

    assert await pager.first() == Account(id="a")
    assert provider.call.call_args[0][1] == "/accounts?order=&sort=&limit=1"


async def test_count(pager: AsyncPager, provider):
    provider.request_raw.return_value = Response(
        status=200,
        data=b"",
        content_type=None,
        headers={"Recurly-Total-Records": "3"},
    )

    assert await pager.count() == 3
