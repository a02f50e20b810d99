import collections.abc
import json
import re
from typing import Any

import multidict

from .base import EMPTY_HEADERS, Header, Status
from .request import Request

json_re = re.compile(r"^application/(?:[\w.+-]+?\+)?json", re.RegexFlag.IGNORECASE)
charset_re = re.compile(r"charset=\"?([\w.:-]+)\"?", re.RegexFlag.IGNORECASE)


def is_expected_content_type(response_content_type: str, expected_content_type: str) -> bool:
    if expected_content_type == "application/json":
        return bool(json_re.match(response_content_type))
    return expected_content_type in response_content_type


class UnexpectedContentTypeError(Exception):
    """ContentType is unexpected"""


class Response:
    __slots__ = ("__request", "__status", "__headers", "__body")

    def __init__(
        self,
        *,
        request: Request,
        status: Status | int,
        headers: multidict.CIMultiDictProxy[str] = EMPTY_HEADERS,
        body: bytes | None = None,
    ) -> None:
        self.__request = request
        self.__status = status if isinstance(status, Status) else Status(status)
        self.__headers = headers
        self.__body = body

    @property
    def request(self) -> Request:
        return self.__request

    @property
    def status(self) -> Status:
        return self.__status

    @property
    def message(self) -> str:
        return self.__status.phrase

    @property
    def headers(self) -> multidict.CIMultiDictProxy[str]:
        return self.__headers

    @property
    def body(self) -> bytes | None:
        return self.__body

    @property
    def content_type(self) -> str | None:
        return self.__headers.get(Header.CONTENT_TYPE)

    @property
    def is_json(self) -> bool:
        return bool(json_re.match(self.content_type or ""))

    def text(self, encoding: str | None = None) -> str:
        if not self.__body:
            return ""
        if encoding is None:
            match = charset_re.search(self.content_type or "")
            encoding = match.group(1) if match is not None else "utf-8"
        return self.__body.decode(encoding)

    def json(
        self,
        *,
        encoding: str | None = None,
        loads: collections.abc.Callable[[str], Any] = json.loads,
        content_type: str | None = "application/json",
    ) -> Any:
        if content_type is not None:
            response_content_type = (self.content_type or "").lower()
            if not is_expected_content_type(response_content_type, content_type):
                raise UnexpectedContentTypeError(f"Expected {content_type}, actual {response_content_type}")

        if not self.__body:
            return None
        return loads(self.text(encoding=encoding))

    def __repr__(self) -> str:
        return f"<Response [{self.__status.code}]>"
