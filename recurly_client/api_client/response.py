from http import HTTPStatus

from recurly_client import ValueObject

__all__ = ["Response"]


class Response(ValueObject):
    status: HTTPStatus | int
    data: bytes
    content_type: str | None
    headers: dict[str, str] = {}
