import enum

from .request import Request
from .response import Response


class ErrorCode(enum.StrEnum):
    INVALID_REQUEST = enum.auto()
    CANNOT_CONNECT = enum.auto()
    CANCELLED = enum.auto()
    INSECURE_CONNECTION = enum.auto()
    INVALID_RESPONSE = enum.auto()
    REQUEST_TIMEOUT = enum.auto()
    UNKNOWN = enum.auto()


class HttpError(Exception):
    """Classified failure of a request.

    A partial response is kept when the transport obtained one before failing.
    """

    def __init__(
        self,
        code: ErrorCode,
        request: Request,
        *,
        response: Response | None = None,
        underlying_error: BaseException | None = None,
    ) -> None:
        super().__init__(code, request)
        self.code = code
        self.request = request
        self.response = response
        self.underlying_error = underlying_error
        self.__cause__ = underlying_error

    def __str__(self) -> str:
        message = f"Request {self.request.method} to {self.request.host} has failed: {self.code}"
        if self.underlying_error is not None:
            message += f" ({self.underlying_error!r})"
        return message


class Success:
    __slots__ = ("__response",)
    __match_args__ = ("response",)

    def __init__(self, response: Response) -> None:
        self.__response = response

    @property
    def request(self) -> Request:
        return self.__response.request

    @property
    def response(self) -> Response:
        return self.__response

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> Response:
        return self.__response

    def __repr__(self) -> str:
        return f"<Success {self.__response!r}>"


class Failure:
    __slots__ = ("__error",)
    __match_args__ = ("error",)

    def __init__(self, error: HttpError) -> None:
        self.__error = error

    @property
    def error(self) -> HttpError:
        return self.__error

    @property
    def request(self) -> Request:
        return self.__error.request

    @property
    def response(self) -> Response | None:
        return self.__error.response

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Response:
        raise self.__error

    def __repr__(self) -> str:
        return f"<Failure {self.__error.code}>"


Result = Success | Failure
