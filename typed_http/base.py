import http
from typing import ClassVar

import multidict

EMPTY_HEADERS = multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str]())


class Header:
    CONTENT_TYPE = multidict.istr("Content-Type")
    CONTENT_LENGTH = multidict.istr("Content-Length")
    LOCATION = multidict.istr("Location")


class Method:
    """HTTP verb. Not an enumeration: any token is a valid method."""

    __slots__ = ("__value",)

    GET: ClassVar["Method"]
    POST: ClassVar["Method"]
    PUT: ClassVar["Method"]
    DELETE: ClassVar["Method"]
    PATCH: ClassVar["Method"]
    HEAD: ClassVar["Method"]
    OPTIONS: ClassVar["Method"]

    def __init__(self, value: str) -> None:
        if not value:
            raise ValueError("Method should not be empty")
        self.__value = value

    @property
    def value(self) -> str:
        return self.__value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Method):
            return NotImplemented
        return self.__value == other.__value

    def __hash__(self) -> int:
        return hash(self.__value)

    def __str__(self) -> str:
        return self.__value

    def __repr__(self) -> str:
        return f"<Method {self.__value}>"


Method.GET = Method("GET")
Method.POST = Method("POST")
Method.PUT = Method("PUT")
Method.DELETE = Method("DELETE")
Method.PATCH = Method("PATCH")
Method.HEAD = Method("HEAD")
Method.OPTIONS = Method("OPTIONS")


class Status:
    """HTTP status code. Any integer is accepted, the constants name the common ones."""

    __slots__ = ("__code",)

    OK: ClassVar["Status"]
    FOUND: ClassVar["Status"]
    TEMPORARY_REDIRECT: ClassVar["Status"]
    BAD_REQUEST: ClassVar["Status"]
    UNAUTHORIZED: ClassVar["Status"]
    REQUEST_TIMEOUT: ClassVar["Status"]
    INTERNAL_SERVER_ERROR: ClassVar["Status"]

    def __init__(self, code: int) -> None:
        self.__code = int(code)

    @property
    def code(self) -> int:
        return self.__code

    @property
    def phrase(self) -> str:
        try:
            return http.HTTPStatus(self.__code).phrase.lower()
        except ValueError:
            pass
        if self.is_informational():
            return "informational"
        if self.is_successful():
            return "success"
        if self.is_redirection():
            return "redirected"
        if self.is_client_error():
            return "client error"
        if self.is_server_error():
            return "server error"
        return "unknown"

    def is_informational(self) -> bool:
        return 100 <= self.__code < 200

    def is_successful(self) -> bool:
        return 200 <= self.__code < 300

    def is_redirection(self) -> bool:
        return 300 <= self.__code < 400

    def is_client_error(self) -> bool:
        return 400 <= self.__code < 500

    def is_server_error(self) -> bool:
        return 500 <= self.__code < 600

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.__code == other.__code

    def __hash__(self) -> int:
        return hash(self.__code)

    def __int__(self) -> int:
        return self.__code

    def __repr__(self) -> str:
        return f"<Status {self.__code}>"


Status.OK = Status(200)
Status.FOUND = Status(302)
Status.TEMPORARY_REDIRECT = Status(307)
Status.BAD_REQUEST = Status(400)
Status.UNAUTHORIZED = Status(401)
Status.REQUEST_TIMEOUT = Status(408)
Status.INTERNAL_SERVER_ERROR = Status(500)
