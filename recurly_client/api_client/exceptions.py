from http import HTTPStatus
from typing import Any

from recurly_client import Json
from recurly_client import RecurlyError
from recurly_client import ValueObject

__all__ = ["ApiException", "DecodeError", "NotFound", "ParamError"]


class ParamError(ValueObject):
    param: str
    message: str


class ApiException(RecurlyError):
    """The server responded with a non-2xx status.

    Attributes:
        status: The HTTP status of the response
        error_type: The machine-readable error kind (e.g. "validation"), None
            if the body could not be decoded
        message: The human readable message
        params: Per-field validation errors, if any
    """

    def __init__(
        self,
        message: Any,
        status: HTTPStatus | int,
        error_type: str | None = None,
        params: list[ParamError] | None = None,
    ):
        self.status = status
        self.error_type = error_type
        self.message = message
        self.params = params or []
        super().__init__(message)

    @classmethod
    def from_body(cls, status: HTTPStatus | int, body: Json | Any) -> "ApiException":
        klass = NotFound if status == HTTPStatus.NOT_FOUND else cls
        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            return klass(body, status=status)
        params = [
            ParamError(param=str(x.get("param", "")), message=str(x.get("message", "")))
            for x in error.get("params") or []
            if isinstance(x, dict)
        ]
        return klass(
            error.get("message", ""),
            status=status,
            error_type=error.get("type"),
            params=params,
        )

    def __str__(self):
        if self.error_type:
            return f"{self.status}: {self.error_type}: {super().__str__()}"
        return f"{self.status}: {super().__str__()}"


class NotFound(ApiException):
    pass


class DecodeError(RecurlyError):
    """A successful response whose body does not have the expected shape."""

    def __init__(self, msg: str, status: HTTPStatus | int):
        self.status = status
        super().__init__(msg)
