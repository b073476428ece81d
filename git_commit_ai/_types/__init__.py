from git_commit_ai._types.errors import (
    AllocationFailure,
    CommitAIError,
    HttpError,
    InputFileError,
    InvalidApiKey,
    MalformedJson,
    NetworkFailure,
    ParseError,
    SerializationFailure,
    TransportError,
    TransportTimeout,
    UnexpectedShape,
)
from git_commit_ai._types.model import (
    ApiResponse,
    ClientSettings,
    CommitMessage,
    ContentBlock,
    Message,
    RawResponse,
    RequestPayload,
)
