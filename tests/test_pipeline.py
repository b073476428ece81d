import json
from unittest.mock import patch

import pytest
import requests

from git_commit_ai._engine.claude.pipeline import generate_commit_message
from git_commit_ai._types.errors import (
    HttpError,
    MalformedJson,
    SerializationFailure,
    TransportTimeout,
    UnexpectedShape,
)
from git_commit_ai._types.model import CommitMessage
from tests.conftest import api_body, make_http_response

PROFILE = 'I write "clean" C code.\nBackslashes \\ are fine.'
DIFF = "diff --git a/main.c b/main.c\n-    char *buffer = malloc(100);\n+    char *buffer = malloc(100 * sizeof(char));\n"


@patch("git_commit_ai._engine.claude.transport.requests.post")
class TestGenerateCommitMessage:
    def test_end_to_end(self, mock_post):
        mock_post.return_value = make_http_response(
            200, [api_body("Use sizeof in malloc\n\nMakes the allocation size explicit.")]
        )

        message = generate_commit_message("sk-key", PROFILE, DIFF)

        assert message == CommitMessage(
            title="Use sizeof in malloc", description="\nMakes the allocation size explicit."
        )

    def test_sends_interpolated_prompt(self, mock_post):
        mock_post.return_value = make_http_response(200, [api_body("Title")])

        generate_commit_message("sk-key", PROFILE, DIFF)

        sent = json.loads(mock_post.call_args.kwargs["data"])
        content = sent["messages"][0]["content"]
        assert PROFILE in content
        assert DIFF in content
        assert mock_post.call_args.kwargs["headers"]["x-api-key"] == "sk-key"

    def test_http_error_propagates(self, mock_post):
        mock_post.return_value = make_http_response(401, [b'{"error": "unauthorized"}'])

        with pytest.raises(HttpError) as exc_info:
            generate_commit_message("bad-key", PROFILE, DIFF)

        assert exc_info.value.status == 401

    def test_timeout_propagates(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectTimeout()

        with pytest.raises(TransportTimeout):
            generate_commit_message("sk-key", PROFILE, DIFF)

    def test_malformed_reply_propagates(self, mock_post):
        mock_post.return_value = make_http_response(200, [b"<html>Bad gateway</html>"])

        with pytest.raises(MalformedJson):
            generate_commit_message("sk-key", PROFILE, DIFF)

    def test_unexpected_shape_propagates(self, mock_post):
        mock_post.return_value = make_http_response(200, [b'{"content": []}'])

        with pytest.raises(UnexpectedShape):
            generate_commit_message("sk-key", PROFILE, DIFF)

    @patch("git_commit_ai._engine.claude.pipeline.build_payload")
    def test_serialization_failure_skips_request(self, mock_build, mock_post):
        mock_build.side_effect = SerializationFailure("cannot encode")

        with pytest.raises(SerializationFailure):
            generate_commit_message("sk-key", PROFILE, DIFF)

        mock_post.assert_not_called()
