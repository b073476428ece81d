import socket
import threading
from time import monotonic
from typing import Dict, Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3Error
from urllib3.exceptions import ReadTimeoutError

from git_commit_ai._data.claude import CHUNK_SIZE
from git_commit_ai._engine.claude.buffer import ResponseBuffer
from git_commit_ai._engine.console import SILENT, DebugChannel
from git_commit_ai._types.errors import (
    HttpError,
    InvalidApiKey,
    NetworkFailure,
    TransportTimeout,
)
from git_commit_ai._types.model import ClientSettings, RawResponse

# What a read can raise once the watchdog has shut the socket down
_INTERRUPTED_READ = (requests.exceptions.RequestException, Urllib3Error, OSError, ValueError)


def _is_read_timeout(exc: requests.exceptions.ConnectionError) -> bool:
    # iter_content wraps urllib3 read timeouts into a plain ConnectionError
    return any(isinstance(arg, ReadTimeoutError) for arg in exc.args)


def _response_socket(response: requests.Response) -> Optional[socket.socket]:
    raw = response.raw
    connection = getattr(raw, "connection", None) or getattr(raw, "_connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        # http.client response -> buffered reader -> SocketIO
        reader = getattr(getattr(raw, "_fp", None), "fp", None)
        sock = getattr(getattr(reader, "raw", None), "_sock", None)
    return sock


class _Watchdog:
    """
    Shuts the response socket down when the total budget runs out.

    Socket timeouts only bound the gap between two reads, so a server that
    trickles one byte at a time never trips them. Shutting the socket down
    from a timer thread wakes the blocked read whatever the server does.
    """

    def __init__(self, response: requests.Response, remaining: float):
        self.response = response
        self.fired = False
        self._timer = threading.Timer(max(remaining, 0.0), self._expire)
        self._timer.daemon = True

    def __enter__(self) -> "_Watchdog":
        self._timer.start()
        return self

    def __exit__(self, *exc_info) -> bool:
        self._timer.cancel()
        return False

    def _expire(self) -> None:
        self.fired = True
        sock = _response_socket(self.response)
        if sock is None:
            self.response.close()
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Connection already gone; the reader sees EOF either way
            self.response.close()


class ClaudeTransport:
    """
    Single-shot HTTPS client for the Anthropic Messages API.

    One call to `send` performs exactly one POST; nothing is retried here.
    The body is streamed into a `ResponseBuffer` while two limits apply:
    the connect timeout, and a total deadline covering connect, headers and
    the whole body. The deadline is a wall-clock one, enforced by a
    watchdog thread while the body is read.
    """

    def __init__(self, settings: Optional[ClientSettings] = None, debug: Optional[DebugChannel] = None):
        self.settings = settings or ClientSettings()
        self.debug = debug or SILENT

    def build_headers(self, api_key: str) -> Dict[str, str]:
        # HTTP header values must be printable ASCII
        if not api_key.isascii() or not api_key.isprintable():
            raise InvalidApiKey("API key contains characters that cannot be sent in an HTTP header")
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.settings.anthropic_version,
        }

    def _timeout_error(self, started: float) -> TransportTimeout:
        return TransportTimeout(
            f"Request exceeded the {self.settings.total_timeout:g}s total timeout "
            f"({monotonic() - started:.1f}s elapsed)"
        )

    def _check_deadline(self, started: float) -> None:
        if monotonic() - started > self.settings.total_timeout:
            raise self._timeout_error(started)

    def _read_body(self, response: requests.Response, started: float) -> ResponseBuffer:
        buffer = ResponseBuffer(max_size=self.settings.max_response_bytes, debug=self.debug)
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if chunk:
                buffer.append(chunk)
            self._check_deadline(started)
        return buffer

    def _receive(self, response: requests.Response, started: float) -> ResponseBuffer:
        remaining = self.settings.total_timeout - (monotonic() - started)
        with _Watchdog(response, remaining) as watchdog:
            try:
                self._check_deadline(started)
                buffer = self._read_body(response, started)
            except _INTERRUPTED_READ as exc:
                if watchdog.fired:
                    raise self._timeout_error(started) from exc
                raise
        # A shut down socket can also look like a clean, short end of body
        if watchdog.fired:
            raise self._timeout_error(started)
        return buffer

    def send(self, api_key: str, payload: bytes) -> RawResponse:
        """
        POST the payload to the messages endpoint and collect the reply.

        Args:
            api_key (str): Anthropic API key, sent verbatim in `x-api-key`.
            payload (bytes): JSON request body.

        Returns:
            RawResponse: Status, body and elapsed seconds for a 2xx reply.

        Raises:
            InvalidApiKey: The key cannot be encoded into a header.
            TransportTimeout: Connect timeout or total timeout exceeded.
            NetworkFailure: Connection-level error.
            HttpError: Any non-2xx status; carries the response body.
            AllocationFailure: The body outgrew the response buffer.
        """
        endpoint = self.settings.endpoint
        headers = self.build_headers(api_key)
        self.debug(f"JSON request payload created (length: {len(payload)})")
        self.debug(
            f"Sending API request to {endpoint} "
            f"(connect timeout {self.settings.connect_timeout:g}s, "
            f"total timeout {self.settings.total_timeout:g}s)"
        )

        started = monotonic()
        try:
            with requests.post(
                endpoint,
                headers=headers,
                data=payload,
                stream=True,
                timeout=(self.settings.connect_timeout, self.settings.total_timeout),
            ) as response:
                status = response.status_code
                self.debug(f"HTTP response code: {status}")
                buffer = self._receive(response, started)
        except requests.exceptions.Timeout as exc:
            # ConnectTimeout is also a ConnectionError, so this branch must come first
            raise TransportTimeout(f"Request timed out: {exc}") from exc
        except requests.exceptions.ConnectionError as exc:
            if _is_read_timeout(exc):
                raise TransportTimeout(f"Request timed out while reading response: {exc}") from exc
            raise NetworkFailure(f"Request failed: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise NetworkFailure(f"Request failed: {exc}") from exc
        except UnicodeError as exc:
            raise InvalidApiKey(f"Request headers could not be encoded: {exc}") from exc

        elapsed = monotonic() - started
        self.debug(f"API request completed in {elapsed:.2f} seconds")

        if not 200 <= status < 300:
            raise HttpError(status, buffer.getvalue())

        self.debug(f"API response received (length: {len(buffer)})")
        return RawResponse(status=status, body=buffer.getvalue(), elapsed=elapsed)
