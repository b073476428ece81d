import json

import pytest

from git_commit_ai._data.claude import DEFAULT_MODEL, PROMPT_TEMPLATE
from git_commit_ai._engine.claude.payload import build_payload, build_prompt
from git_commit_ai._types.model import ClientSettings

TRICKY_TEXT = [
    'He said "hi" and left',
    "C:\\Users\\dev\\path with \\n literal backslash-n",
    "line one\nline two\r\nline three\n\n",
    "tab\there, bell\x07, null\x00, escape\x1b[0m, unit sep\x1f",
    "{profile} and {diff} and {0} are not placeholders here",
    "unicode: héllo wörld, 日本語, emoji 🚀, rtl \u202e",
    "",
]


def _content(body: bytes) -> str:
    return json.loads(body)["messages"][0]["content"]


class TestBuildPayload:
    @pytest.mark.parametrize("text", TRICKY_TEXT)
    def test_profile_round_trips(self, text):
        body = build_payload(text, "diff --git a/x b/x")

        assert _content(body) == PROMPT_TEMPLATE.format(profile=text, diff="diff --git a/x b/x")

    @pytest.mark.parametrize("text", TRICKY_TEXT)
    def test_diff_round_trips(self, text):
        body = build_payload("I like short commits.", text)

        assert _content(body) == PROMPT_TEMPLATE.format(profile="I like short commits.", diff=text)

    def test_realistic_diff(self):
        diff = (
            "diff --git a/main.c b/main.c\n"
            "--- a/main.c\n"
            "+++ b/main.c\n"
            "@@ -10,7 +10,7 @@\n"
            '-    fprintf(stderr, "Memory allocation failed\\n");\n'
            '+    fprintf(stderr, "Out of memory: %s\\n", "buffer");\n'
        )
        body = build_payload("profile", diff)

        assert diff in _content(body)

    def test_fixed_parameters(self):
        document = json.loads(build_payload("p", "d"))

        assert document["model"] == DEFAULT_MODEL
        assert document["max_tokens"] == 1024
        assert document["temperature"] == 0.5
        assert len(document["messages"]) == 1
        assert document["messages"][0]["role"] == "user"
        assert set(document) == {"model", "max_tokens", "temperature", "messages"}

    def test_settings_override_parameters(self):
        settings = ClientSettings(model="claude-test", max_tokens=64, temperature=0.0)
        document = json.loads(build_payload("p", "d", settings))

        assert document["model"] == "claude-test"
        assert document["max_tokens"] == 64
        assert document["temperature"] == 0.0

    def test_returns_utf8_bytes(self):
        body = build_payload("ünïcode", "d")

        assert isinstance(body, bytes)
        assert "ünïcode" in body.decode("utf-8")

    def test_bytes_input_with_invalid_utf8(self):
        body = build_payload(b"profile \xff\xfe end", b"+ added \xc3\xa9")

        content = _content(body)
        assert "profile \ufffd\ufffd end" in content
        assert "+ added é" in content


class TestBuildPrompt:
    def test_template_layout(self):
        assert build_prompt("P", "D") == (
            "Here is my profile:\n\nP\n\n"
            "Here is a git diff that needs review:\n\nD\n\n"
            "Please provide a concise title and description of the changes."
        )
