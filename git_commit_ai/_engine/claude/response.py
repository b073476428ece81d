import json
from typing import Optional, Tuple, Union

from pydantic import ValidationError

from git_commit_ai._engine.console import SILENT, DebugChannel
from git_commit_ai._types.errors import MalformedJson, UnexpectedShape
from git_commit_ai._types.model import ApiResponse, CommitMessage, ContentBlock


def split_title_description(text: str) -> Tuple[str, str]:
    """
    Split the model's reply into a title line and a description.

    Leading blank lines (bare `\\n` / `\\r`) are skipped. The title runs up to
    the first `\\n`; the description is everything after it, untouched. A
    reply without any newline is all title.

    Note: carriage returns and trailing spaces are kept as they are, both in
    the title and in the description.
    """
    remainder = text.lstrip("\r\n")
    title, newline, description = remainder.partition("\n")
    if not newline:
        return remainder, ""
    return title, description


def parse_response(body: Union[bytes, str], debug: Optional[DebugChannel] = None) -> CommitMessage:
    """
    Turn a Messages API response body into a `CommitMessage`.

    Args:
        body (bytes | str): Raw response body.
        debug (DebugChannel, optional): Trace sink.

    Returns:
        CommitMessage: Title and description taken from `content[0].text`.

    Raises:
        MalformedJson: The body is not valid JSON.
        UnexpectedShape: `content` is missing, empty or not an array, or its
            first element has no string `text`.
    """
    debug = debug or SILENT
    debug("Parsing API response")

    try:
        document = json.loads(body)
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError too
        raise MalformedJson(f"JSON parsing failed: {exc}") from exc

    if not isinstance(document, dict):
        raise UnexpectedShape(
            f"Invalid response format (expected a JSON object, got {type(document).__name__})"
        )

    try:
        reply = ApiResponse.model_validate(document)
    except ValidationError as exc:
        raise UnexpectedShape(
            "Invalid response format (content field not found, not an array or empty)"
        ) from exc

    try:
        block = ContentBlock.model_validate(reply.content[0])
    except ValidationError as exc:
        raise UnexpectedShape("Text field not found or not a string") from exc

    if reply.usage:
        debug(f"Token usage: {reply.usage}")
    if reply.stop_reason:
        debug(f"Stop reason: {reply.stop_reason}")
    debug(f"Response text length: {len(block.text)} characters")

    title, description = split_title_description(block.text)
    debug(f"Title extracted: \"{title}\"")
    debug(f"Description extracted (length: {len(description)})")

    return CommitMessage(title=title, description=description)
