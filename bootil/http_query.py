"""A simple HTTP request, optionally with a multipart body, run in a thread."""

from __future__ import annotations

import hashlib
import http.client
import random
import time

from bootil.threads import Thread

USER_AGENT = (
    "Agent:Mozilla/5.0 (Windows NT 6.2; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/27.0.1453.116 Safari/537.36"
)
IDLE_TIMEOUT = 60 * 3
_CHUNK = 65536


class Query(Thread):
    """An HTTP request whose response is collected into ``response``.

    Call run() directly, or start_in_thread() and join(). After it has
    finished, ``errored`` and ``error_string`` tell whether it failed.
    """

    def __init__(self) -> None:
        super().__init__()
        self.host = ""
        self.request = ""
        self.port = 80
        self.method = "GET"
        self.response = bytearray()
        self.errored = False
        self.error_string = ""
        self._post_body = bytearray()
        self._boundary = ""

    def set_url(self, host: str, request: str, port: int = 80) -> None:
        self.host = host
        self.request = request
        self.port = port

    def set_method(self, method: str) -> None:
        self.method = method

    @property
    def boundary(self) -> str:
        """The multipart boundary; empty until a post part has been added."""
        return self._boundary

    @property
    def post_body(self) -> bytes:
        """The multipart parts added so far, without the closing boundary."""
        return bytes(self._post_body)

    def _setup_boundary(self) -> None:
        seconds = time.monotonic() * 1000.0
        number = random.randint(0, 2**31 - 1)
        seed = f"boundary_ {seconds:f} {number} _end"
        self._boundary = hashlib.md5(seed.encode("ascii")).hexdigest()

    def _ensure_boundary(self) -> None:
        if not self._boundary:
            self._setup_boundary()

    def set_post_var(self, key: str, value: str) -> None:
        """Add a form field to the multipart body."""
        self._ensure_boundary()
        self._post_body += f"\r\n--{self._boundary}\r\n".encode()
        self._post_body += f'Content-Disposition: form-data; name="{key}"\r\n\r\n'.encode()
        self._post_body += value.encode()

    def set_post_file(self, title: str, filename: str, data: bytes) -> None:
        """Add a file's contents to the multipart body."""
        self._ensure_boundary()
        self._post_body += b"\r\n"
        self._post_body += f"--{self._boundary}\r\n".encode()
        self._post_body += (
            f'Content-Disposition: file; name="{title}"; filename="{filename}"\r\n'
        ).encode()
        self._post_body += b"Content-Type: application/octet-stream\r\n"
        self._post_body += b"Content-Transfer-Encoding: binary\r\n"
        self._post_body += b"\r\n"
        self._post_body += bytes(data)

    def _request_body(self) -> bytes:
        if not self._post_body:
            return b""
        return bytes(self._post_body) + f"\r\n--{self._boundary}--\r\n\r\n".encode()

    def _headers(self, body: bytes) -> dict[str, str]:
        headers = {"Accept": "*/*", "User-Agent": USER_AGENT}
        if body:
            headers.update(
                {
                    "Content-Type": f"multipart/form-data; boundary={self._boundary}",
                    "Content-Length": str(len(body)),
                    "Connection": "Close",
                    "Cache-Control": "no-cache",
                }
            )
        return headers

    def run(self) -> None:
        """Send the request and read the whole response body.

        The connection is given up after three minutes without data.
        """
        self.errored = False
        self.error_string = ""
        self.response.clear()
        body = self._request_body()
        conn = http.client.HTTPConnection(self.host, self.port, timeout=IDLE_TIMEOUT)
        try:
            self.lock()
            try:
                conn.request(
                    self.method, self.request, body=body or None, headers=self._headers(body)
                )
            finally:
                self.unlock()
            reply = conn.getresponse()
            while chunk := reply.read(_CHUNK):
                self.response += chunk
        except (OSError, http.client.HTTPException) as exc:
            self.errored = True
            self.error_string = str(exc) or type(exc).__name__
        finally:
            conn.close()

    def response_string(self) -> str:
        """The response body as text."""
        return self.response.decode("utf-8", errors="replace")