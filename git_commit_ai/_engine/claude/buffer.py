from typing import Optional

from git_commit_ai._data.claude import MAX_RESPONSE_BYTES
from git_commit_ai._engine.console import SILENT, DebugChannel
from git_commit_ai._types.errors import AllocationFailure


class ResponseBuffer:
    """
    Growable byte buffer filled chunk by chunk as the response body arrives.

    Capacity is tracked realloc-style (at least old length + chunk + 1).
    A failed growth leaves the bytes already received untouched so the
    caller can abort cleanly.

    Args:
        max_size (int): Largest body, in bytes, the buffer agrees to hold.
        debug (DebugChannel, optional): Receives one trace line per chunk.
    """

    def __init__(self, max_size: int = MAX_RESPONSE_BYTES, debug: Optional[DebugChannel] = None):
        self._data = bytearray()
        self._capacity = 0
        self.max_size = max_size
        self.debug = debug or SILENT

    def __len__(self) -> int:
        return len(self._data)

    @property
    def capacity(self) -> int:
        return self._capacity

    def _reserve(self, required: int) -> None:
        if required <= self._capacity:
            return
        # Double like a realloc-based buffer would, capped at the size limit (+1 terminator)
        self._capacity = min(max(required, self._capacity * 2), self.max_size + 1)

    def append(self, chunk: bytes) -> "ResponseBuffer":
        """
        Append a chunk of bytes at the end of the buffer.

        Args:
            chunk (bytes): Data just received from the transport. May be empty.

        Returns:
            ResponseBuffer: The same buffer, so calls can be chained.

        Raises:
            AllocationFailure: If the buffer cannot grow to hold the chunk.
        """
        size = len(chunk)
        total = len(self._data) + size
        if total > self.max_size:
            raise AllocationFailure(
                f"Response exceeds the {self.max_size} byte limit "
                f"(already {len(self._data)} bytes, chunk of {size})"
            )
        try:
            self._data.extend(chunk)
        except MemoryError as exc:
            # bytearray.extend leaves the original contents intact when it fails
            raise AllocationFailure(
                f"Not enough memory to grow response buffer to {total} bytes"
            ) from exc
        self._reserve(total + 1)

        self.debug(f"Received {size} bytes from API, total size: {len(self._data)}")
        return self

    def getvalue(self) -> bytes:
        return bytes(self._data)
