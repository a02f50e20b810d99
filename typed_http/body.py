import abc
import collections.abc
import json
from typing import Any

import multidict


NO_HEADERS: collections.abc.Mapping[str, str] = multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str]())

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

FormValues = collections.abc.Mapping[str, str | None] | collections.abc.Iterable[tuple[str, str | None]]


class EncodingError(Exception):
    """Body could not be encoded"""


class Body(abc.ABC):
    """Strategy producing the payload of a request and the headers it implies.

    ``is_empty`` and ``additional_headers`` never call ``encode``.
    """

    __slots__ = ()

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def additional_headers(self) -> collections.abc.Mapping[str, str]:
        return NO_HEADERS

    @abc.abstractmethod
    def encode(self) -> bytes: ...


class EmptyBody(Body):
    __slots__ = ()

    @property
    def is_empty(self) -> bool:
        return True

    def encode(self) -> bytes:
        return b""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EmptyBody)

    def __hash__(self) -> int:
        return hash(EmptyBody)

    def __repr__(self) -> str:
        return "<EmptyBody>"


class RawBody(Body):
    __slots__ = ("__data", "__additional_headers")

    def __init__(self, data: bytes, additional_headers: collections.abc.Mapping[str, str] | None = None) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        self.__data = bytes(data)
        self.__additional_headers = dict(additional_headers) if additional_headers else {}

    @property
    def is_empty(self) -> bool:
        return not self.__data

    @property
    def additional_headers(self) -> collections.abc.Mapping[str, str]:
        return self.__additional_headers

    def encode(self) -> bytes:
        return self.__data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawBody):
            return NotImplemented
        return self.__data == other.__data and self.__additional_headers == other.__additional_headers

    def __repr__(self) -> str:
        return f"<RawBody [{len(self.__data)} bytes]>"


class JsonBody(Body):
    __slots__ = ("__encoder",)

    def __init__(
        self,
        value: Any,
        *,
        dumps: collections.abc.Callable[[Any], str | bytes] = json.dumps,
        encoding: str = "utf-8",
    ) -> None:
        def encoder() -> bytes:
            dumped = dumps(value)
            return dumped if isinstance(dumped, bytes) else dumped.encode(encoding)

        self.__encoder = encoder

    @property
    def additional_headers(self) -> collections.abc.Mapping[str, str]:
        return {"Content-Type": JSON_CONTENT_TYPE}

    def encode(self) -> bytes:
        try:
            return self.__encoder()
        except Exception as e:
            raise EncodingError(f"Failed to serialize json body: {e}") from e

    def __repr__(self) -> str:
        return "<JsonBody>"


class FormBody(Body):
    """Url-encoded key-value pairs: name=Arthur&age=42.

    Order and repeated keys are preserved.
    """

    __slots__ = ("__values",)

    def __init__(self, values: FormValues) -> None:
        pairs = values.items() if isinstance(values, collections.abc.Mapping) else values
        self.__values = tuple((name, value) for name, value in pairs)

    @property
    def values(self) -> tuple[tuple[str, str | None], ...]:
        return self.__values

    @property
    def is_empty(self) -> bool:
        return not self.__values

    @property
    def additional_headers(self) -> collections.abc.Mapping[str, str]:
        return {"Content-Type": FORM_CONTENT_TYPE}

    def encode(self) -> bytes:
        pieces = (f"{percent_encode(name)}={percent_encode(value or '')}" for name, value in self.__values)
        return "&".join(pieces).encode("utf-8")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormBody):
            return NotImplemented
        return self.__values == other.__values

    def __repr__(self) -> str:
        return f"<FormBody [{len(self.__values)} values]>"


def percent_encode(value: str) -> str:
    # Only ASCII letters and digits pass through, even "-_.~" are escaped.
    return "".join(
        chr(byte) if chr(byte).isascii() and chr(byte).isalnum() else f"%{byte:02X}" for byte in value.encode("utf-8")
    )
