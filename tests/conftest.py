import json
from unittest.mock import MagicMock

import pytest

from git_commit_ai._types.model import ClientSettings


def make_http_response(status_code=200, chunks=(b"",)):
    """Fake streamed `requests.Response` usable as a context manager."""
    response = MagicMock()
    response.status_code = status_code
    response.iter_content.return_value = iter(chunks)
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def api_body(text: str) -> bytes:
    return json.dumps(
        {
            "id": "msg_01",
            "type": "message",
            "role": "assistant",
            "model": "claude-3-7-sonnet-20250219",
            "content": [{"type": "text", "text": text}],
            "stop_reason": "end_turn",
            "usage": {"input_tokens": 12, "output_tokens": 34},
        }
    ).encode("utf-8")


@pytest.fixture
def settings():
    return ClientSettings()


@pytest.fixture
def debug_output():
    """Console stand-in collecting what a DebugChannel prints."""
    return MagicMock()


def printed_lines(output) -> list:
    return [call.args[0] for call in output.print.call_args_list]
