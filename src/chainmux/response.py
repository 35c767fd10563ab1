"""Buffered response writer handed to every handler."""

from http import HTTPStatus
from typing import Optional, Union

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from chainmux.errors import ResponseCommittedError

DEFAULT_MEDIA_TYPE = "text/plain; charset=utf-8"


class ResponseWriter:
    """Collects the status, headers and body of exactly one response.

    The status is committed by the first :meth:`write_header` (or implicitly
    by the first :meth:`write`); a second commit raises
    :class:`~chainmux.errors.ResponseCommittedError`. Use :attr:`committed`
    to decide whether an error response can still be produced.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self.status_code: Optional[int] = None
        self._body = bytearray()

    @property
    def committed(self) -> bool:
        return self.status_code is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        if self.status_code is not None:
            raise ResponseCommittedError(
                "response status already written",
                status_code=self.status_code,
                attempted_status_code=status_code,
            )
        self.status_code = int(status_code)

    def write(self, data: Union[str, bytes]) -> int:
        if not self.committed:
            self.write_header(HTTPStatus.OK)
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._body.extend(chunk)
        return len(chunk)

    def error(self, status_code: int, message: Optional[str] = None) -> None:
        """Commit ``status_code`` with a plain-text body (the reason phrase by default)."""
        self.write_header(status_code)
        self.headers["content-type"] = DEFAULT_MEDIA_TYPE
        self.headers["x-content-type-options"] = "nosniff"
        self.write(message if message is not None else HTTPStatus(status_code).phrase)

    def to_response(self) -> Response:
        """Convert to a Starlette response, keeping repeated headers such as ``set-cookie``."""
        response = Response(content=self.body, status_code=self.status_code or HTTPStatus.OK)
        extra = list(self.headers.raw)
        if "content-type" not in self.headers:
            extra.append((b"content-type", DEFAULT_MEDIA_TYPE.encode("latin-1")))
        response.raw_headers = [*response.raw_headers, *extra]
        return response
