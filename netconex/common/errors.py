from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    REQUEST = "REQUEST"
    CONNECTION = "CONNECTION"
    HTTP = "HTTP"
    PARSE = "PARSE"
    FORMAT = "FORMAT"
    CONVERSION = "CONVERSION"


class NetconexError(Exception):
    """
    Base error that carries a classification and the triggering exception so
    callers can tell transport, status and JSON failures apart.
    """

    default_kind = ErrorKind.REQUEST

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.kind = kind or self.default_kind
        self.original_exception = original_exception

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.kind.name}] {base}"


class ApiRequestError(NetconexError):
    default_kind = ErrorKind.REQUEST


class ApiConnectionError(ApiRequestError):
    """Malformed URL or the transport could not complete the exchange."""

    default_kind = ErrorKind.CONNECTION


class RequestFailedError(ApiRequestError):
    """Response status was anything other than 200."""

    default_kind = ErrorKind.HTTP

    def __init__(self, method: str, status_code: int):
        super().__init__(f"{method} request failed with response code: {status_code}")
        self.method = method
        self.status_code = status_code


class JsonParsingError(NetconexError):
    default_kind = ErrorKind.PARSE


class JsonFormattingError(NetconexError):
    default_kind = ErrorKind.FORMAT


class ConversionError(NetconexError):
    default_kind = ErrorKind.CONVERSION
