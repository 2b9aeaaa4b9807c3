import re
from collections.abc import Iterable
from urllib.parse import quote
from urllib.parse import urlencode

from recurly_client import KeyValue
from recurly_client import RequestParams

__all__ = [
    "build_url",
    "code_identifier",
    "encode_query",
    "interpolate_path",
    "join",
]


PLACEHOLDER_REGEX = re.compile(r"\{[^{}/]+\}")

CODE_PREFIX = "code-"


def code_identifier(code: str) -> str:
    """Return the identifier that addresses an object by its code instead of its id.

    The result is a plain identifier; it is escaped by ``interpolate_path``
    like any other identifier.
    """
    return CODE_PREFIX + code


def interpolate_path(template: str, *args: str) -> str:
    """Substitute ``{placeholder}`` tokens in template order.

    Placeholder names are ignored; arguments are consumed left to right. Each
    argument is percent-escaped as a single path segment before substitution,
    so that an identifier containing a ``/`` can never add path segments.

    A mismatch between the number of placeholders and arguments is a bug at
    the call site and raises ``TypeError``.
    """
    placeholders = PLACEHOLDER_REGEX.findall(template)
    if len(placeholders) != len(args):
        raise TypeError(
            f"path template '{template}' takes {len(placeholders)} argument(s) "
            f"but {len(args)} were given"
        )
    if any(arg is None for arg in args):
        raise TypeError(f"path template '{template}' got a None argument")
    segments = iter([quote_segment(str(arg)) for arg in args])
    return PLACEHOLDER_REGEX.sub(lambda _: next(segments), template)


def quote_segment(value: str) -> str:
    """Percent-escape value so that it is always exactly one path segment.

    ``quote`` leaves dots alone, so the dot segments ``.`` and ``..`` (which
    would be resolved as "current" and "parent") are escaped explicitly.
    """
    quoted = quote(value, safe="")
    if quoted in (".", ".."):
        return quoted.replace(".", "%2E")
    return quoted


def encode_query(options: Iterable[KeyValue]) -> str:
    return urlencode(list(options), quote_via=quote)


def build_url(path: str, params: RequestParams | None = None) -> str:
    """Append the query options of params to path (no '?' if there are none)"""
    if params is None:
        return path
    query = encode_query(params.options())
    if not query:
        return path
    return path + ("&" if "?" in path else "?") + query


def join(url: str, path: str) -> str:
    """Join a path (with or without leading slash) to a base url with trailing slash"""
    assert url.endswith("/")
    return url + path.lstrip("/")
