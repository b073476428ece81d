from typing import Optional

from git_commit_ai._engine.claude.payload import TextInput, build_payload
from git_commit_ai._engine.claude.response import parse_response
from git_commit_ai._engine.claude.transport import ClaudeTransport
from git_commit_ai._engine.console import SILENT, DebugChannel
from git_commit_ai._types.model import ClientSettings, CommitMessage


def generate_commit_message(
    api_key: str,
    profile: TextInput,
    diff: TextInput,
    settings: Optional[ClientSettings] = None,
    debug: Optional[DebugChannel] = None,
) -> CommitMessage:
    """
    Ask the model for a commit title and description for a diff.

    Runs payload building, the HTTP exchange and response parsing in that
    order. The first failing stage raises and nothing after it runs.

    Args:
        api_key (str): Anthropic API key, already trimmed.
        profile (str | bytes): Developer profile text.
        diff (str | bytes): Git diff to summarize.
        settings (ClientSettings, optional): Endpoint, model and timeouts.
        debug (DebugChannel, optional): Verbose trace sink.

    Returns:
        CommitMessage: Parsed title and description.

    Raises:
        CommitAIError: Whichever SerializationFailure, TransportError,
            AllocationFailure or ParseError stopped the pipeline.
    """
    settings = settings or ClientSettings()
    debug = debug or SILENT

    debug("Preparing API request")
    payload = build_payload(profile, diff, settings)

    raw = ClaudeTransport(settings, debug).send(api_key, payload)

    return parse_response(raw.body, debug)
