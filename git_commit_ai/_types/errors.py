from typing import Optional


class CommitAIError(Exception):
    """Base class for every failure the commit message pipeline reports."""


class AllocationFailure(CommitAIError):
    """The response buffer could not grow to hold the incoming data."""


class SerializationFailure(CommitAIError):
    """The request payload could not be built."""


class TransportError(CommitAIError):
    """The HTTP exchange with the API did not succeed."""


class TransportTimeout(TransportError):
    """The connect timeout or the total request timeout was exceeded."""


class NetworkFailure(TransportError):
    """Connection-level error (DNS, refused connection, TLS, dropped stream)."""


class InvalidApiKey(TransportError):
    """The API key cannot be sent as an HTTP header value."""


class HttpError(TransportError):
    """The API answered with a non-2xx status.

    The body is kept as-is since API error bodies usually carry a JSON
    document explaining the rejection.
    """

    def __init__(self, status: int, body: bytes, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message or f"API request failed with HTTP code {status}")

    @property
    def body_text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class ParseError(CommitAIError):
    """The API response could not be turned into a commit message."""


class MalformedJson(ParseError):
    pass


class UnexpectedShape(ParseError):
    pass


class InputFileError(CommitAIError):
    """An input file (API key, profile, diff) or the output file is unusable."""
