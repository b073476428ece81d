from git_commit_ai._engine.claude.buffer import ResponseBuffer
from git_commit_ai._engine.claude.payload import build_payload, build_prompt, build_request
from git_commit_ai._engine.claude.pipeline import generate_commit_message
from git_commit_ai._engine.claude.response import parse_response, split_title_description
from git_commit_ai._engine.claude.transport import ClaudeTransport
