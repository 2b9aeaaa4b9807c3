from http import HTTPStatus
from unittest import mock

import pytest

from recurly_client import Account
from recurly_client import Context
from recurly_client import Envelope
from recurly_client import ListCursor
from recurly_client import ListParams
from recurly_client import TransportError
from recurly_client.api_client import ApiException
from recurly_client.api_client import DecodeError
from recurly_client.api_client import NotFound
from recurly_client.api_client import Pager
from recurly_client.api_client import Response
from recurly_client.api_client import SyncApiProvider


def envelope(ids, has_more, next=""):
    return Envelope[Account](
        object="list",
        has_more=has_more,
        next=next,
        data=[Account(id=x) for x in ids],
    )


@pytest.fixture
def provider():
    return mock.MagicMock(spec_set=SyncApiProvider)


@pytest.fixture
def pager(provider) -> Pager:
    return Pager(provider, Account, "/accounts?limit=2&order=&sort=")


@pytest.fixture
def three_pages(provider):
    provider.call.side_effect = [
        envelope(["a", "b"], True, "/accounts?cursor=2"),
        envelope(["c", "d"], True, "/accounts?cursor=4"),
        envelope(["e"], False),
    ]


def test_initial_state(pager: Pager):
    assert pager.cursor == ListCursor(
        next_path="/accounts?limit=2&order=&sort=", has_more=True
    )
    assert not pager.exhausted


def test_fetch(pager: Pager, provider):
    provider.call.return_value = envelope(["a", "b"], True, "/accounts?cursor=2")

    page = pager.fetch()

    provider.call.assert_called_once_with(
        "GET", "/accounts?limit=2&order=&sort=", Envelope[Account], params=None
    )
    assert [x.id for x in page.items] == ["a", "b"]
    assert page.cursor == ListCursor(next_path="/accounts?cursor=2", has_more=True)
    assert pager.next_path == "/accounts?cursor=2"


def test_three_pages_then_terminal(pager: Pager, provider, three_pages):
    pages = [pager.fetch() for _ in range(4)]

    assert [[x.id for x in page.items] for page in pages] == [
        ["a", "b"],
        ["c", "d"],
        ["e"],
        [],
    ]
    assert provider.call.call_count == 3
    assert [x[0][1] for x in provider.call.call_args_list] == [
        "/accounts?limit=2&order=&sort=",
        "/accounts?cursor=2",
        "/accounts?cursor=4",
    ]
    assert pages[2].cursor.exhausted
    assert pages[3].cursor.exhausted


def test_iterate_items(pager: Pager, provider, three_pages):
    assert [x.id for x in pager] == ["a", "b", "c", "d", "e"]
    assert pager.exhausted
    assert list(pager) == []
    assert provider.call.call_count == 3


def test_iteration_is_lazy(pager: Pager, provider, three_pages):
    items = iter(pager)
    assert not provider.call.called

    next(items)
    next(items)
    assert provider.call.call_count == 1

    next(items)
    assert provider.call.call_count == 2


def test_pages(pager: Pager, three_pages):
    assert [len(page.items) for page in pager.pages()] == [2, 2, 1]


def test_last_page_empty(pager: Pager, provider):
    provider.call.side_effect = [
        envelope(["a"], True, "/accounts?cursor=1"),
        envelope([], False),
    ]

    assert [x.id for x in pager] == ["a"]


def test_more_without_next_is_terminal(pager: Pager, provider):
    provider.call.return_value = envelope(["a"], True, "")

    page = pager.fetch()

    assert page.cursor.exhausted
    assert pager.exhausted
    assert pager.fetch().items == []
    assert provider.call.call_count == 1


@pytest.mark.parametrize(
    "error",
    [
        TransportError("connection refused"),
        ApiException("Oops", status=HTTPStatus.SERVICE_UNAVAILABLE),
        DecodeError("bad json", status=HTTPStatus.OK),
    ],
)
def test_fetch_error_keeps_cursor(pager: Pager, provider, error):
    provider.call.side_effect = [
        envelope(["a", "b"], True, "/accounts?cursor=2"),
        error,
        envelope(["c"], False),
    ]
    pager.fetch()
    cursor = pager.cursor

    with pytest.raises(type(error)):
        pager.fetch()

    assert pager.cursor == cursor
    page = pager.fetch()
    assert [x.id for x in page.items] == ["c"]
    assert provider.call.call_args_list[1] == provider.call.call_args_list[2]


def test_params_are_passed(provider):
    params = ListParams(idempotency_key="x", context=Context())
    pager = Pager(provider, Account, "/accounts", params)
    provider.call.return_value = envelope([], False)

    pager.fetch()

    assert provider.call.call_args[1]["params"] is params


def test_first(pager: Pager, provider):
    provider.call.return_value = envelope(["a"], True, "/accounts?cursor=1")

    assert pager.first() == Account(id="a")

    provider.call.assert_called_once_with(
        "GET", "/accounts?order=&sort=&limit=1", Envelope[Account], params=None
    )
    assert pager.next_path == "/accounts?limit=2&order=&sort="


def test_first_empty(pager: Pager, provider):
    provider.call.return_value = envelope([], False)

    assert pager.first() is None


def test_count(pager: Pager, provider):
    provider.request_raw.return_value = Response(
        status=200,
        data=b"",
        content_type=None,
        headers={"recurly-total-records": "42"},
    )

    assert pager.count() == 42

    provider.request_raw.assert_called_once_with(
        "HEAD", "/accounts?limit=2&order=&sort=", params=None
    )


def test_count_missing_header(pager: Pager, provider):
    provider.request_raw.return_value = Response(
        status=200, data=b"", content_type=None
    )

    with pytest.raises(DecodeError):
        pager.count()


def test_count_error(pager: Pager, provider):
    provider.request_raw.return_value = Response(
        status=500, data=b"", content_type=None
    )

    with pytest.raises(ApiException) as e:
        pager.count()

    assert e.value.status == 500


def test_count_not_found(pager: Pager, provider):
    provider.request_raw.return_value = Response(
        status=404, data=b"", content_type=None
    )

    with pytest.raises(NotFound):
        pager.count()
