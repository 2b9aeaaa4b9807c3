import pytest

from recurly_client import ListParams
from recurly_client import Params
from recurly_client.api_client import build_url
from recurly_client.api_client import code_identifier
from recurly_client.api_client import interpolate_path
from recurly_client.api_client import join


def test_interpolate():
    actual = interpolate_path(
        "/accounts/{account_id}/notes/{account_note_id}", "ac_1", "note 2"
    )
    assert actual == "/accounts/ac_1/notes/note%202"


def test_interpolate_ignores_names():
    assert interpolate_path("/{b}/{a}", "1", "2") == "/1/2"


def test_interpolate_no_placeholders():
    assert interpolate_path("/accounts") == "/accounts"


@pytest.mark.parametrize(
    "identifier,expected",
    [
        ("a/b", "a%2Fb"),
        ("a?b", "a%3Fb"),
        ("a#b", "a%23b"),
        ("a b", "a%20b"),
        ("a%b", "a%25b"),
        (".", "%2E"),
        ("..", "%2E%2E"),
        ("...", "..."),
        ("a..b", "a..b"),
    ],
)
def test_interpolate_escapes_reserved(identifier, expected):
    actual = interpolate_path("/accounts/{account_id}/balance", identifier)

    assert actual == f"/accounts/{expected}/balance"
    assert actual.count("/") == 3


@pytest.mark.parametrize("args", [(), ("a", "b")])
def test_interpolate_argument_count_mismatch(args):
    with pytest.raises(TypeError):
        interpolate_path("/accounts/{account_id}", *args)


def test_interpolate_none_argument():
    with pytest.raises(TypeError):
        interpolate_path("/accounts/{account_id}", None)


def test_code_identifier():
    assert code_identifier("jdoe") == "code-jdoe"
    assert (
        interpolate_path("/accounts/{account_id}", code_identifier("j/doe"))
        == "/accounts/code-j%2Fdoe"
    )


def test_build_url():
    params = ListParams(ids=["a", "b"], limit=2)
    assert build_url("/accounts", params) == (
        "/accounts?ids=a%2Cb&limit=2&order=&sort="
    )


def test_build_url_no_params():
    assert build_url("/accounts") == "/accounts"


def test_build_url_no_options():
    assert build_url("/accounts", Params(idempotency_key="x")) == "/accounts"


def test_build_url_space_is_percent_encoded():
    params = ListParams(ids=["a b"])
    assert build_url("/accounts", params).startswith("/accounts?ids=a%20b&")


def test_build_url_existing_query():
    params = ListParams()
    assert build_url("/accounts?x=1", params) == "/accounts?x=1&order=&sort="


@pytest.mark.parametrize(
    "url,path,expected",
    [
        ("http://testserver/", "/accounts", "http://testserver/accounts"),
        ("http://testserver/v3/", "/accounts", "http://testserver/v3/accounts"),
        ("http://testserver/v3/", "accounts?a=1", "http://testserver/v3/accounts?a=1"),
        ("http://testserver/", "", "http://testserver/"),
        (
            "http://testserver/v3/",
            "/accounts/%2E%2E",
            "http://testserver/v3/accounts/%2E%2E",
        ),
    ],
)
def test_join(url, path, expected):
    assert join(url, path) == expected
