from typing import Optional, Union

from pydantic import ValidationError

from git_commit_ai._data.claude import PROMPT_TEMPLATE
from git_commit_ai._types.errors import SerializationFailure
from git_commit_ai._types.model import ClientSettings, Message, RequestPayload

TextInput = Union[str, bytes]


def _as_text(value: TextInput) -> str:
    # Files may hold any byte sequence; undecodable bytes become U+FFFD
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def build_prompt(profile: TextInput, diff: TextInput) -> str:
    """Interpolate the profile and the diff into the review instruction."""
    return PROMPT_TEMPLATE.format(profile=_as_text(profile), diff=_as_text(diff))


def build_request(
    profile: TextInput, diff: TextInput, settings: Optional[ClientSettings] = None
) -> RequestPayload:
    settings = settings or ClientSettings()
    try:
        return RequestPayload(
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            messages=[Message(role="user", content=build_prompt(profile, diff))],
        )
    except ValidationError as exc:
        raise SerializationFailure(f"Invalid request payload: {exc}") from exc


def build_payload(
    profile: TextInput, diff: TextInput, settings: Optional[ClientSettings] = None
) -> bytes:
    """
    Build the JSON request body for the Messages API.

    Escaping of quotes, backslashes, newlines and control characters is left
    to pydantic's JSON serializer, so any text the profile or diff holds
    comes back unchanged when the body is parsed.

    Args:
        profile (str | bytes): Developer profile text.
        diff (str | bytes): Git diff text.
        settings (ClientSettings, optional): Model and sampling parameters.

    Returns:
        bytes: UTF-8 encoded JSON document.

    Raises:
        SerializationFailure: If the payload cannot be encoded.
    """
    request = build_request(profile, diff, settings)
    try:
        return request.model_dump_json().encode("utf-8")
    except (ValueError, UnicodeError, MemoryError) as exc:
        # Lone surrogates and the like cannot be represented in UTF-8 JSON
        raise SerializationFailure(f"Failed to convert request to JSON: {exc}") from exc
