import os
import pwd
from typing import Optional

from git_commit_ai._data.claude import API_KEY_FILENAME, CONFIG_DIR, PROFILE_FILENAME
from git_commit_ai._engine.console import SILENT, DebugChannel
from git_commit_ai._types.errors import InputFileError
from git_commit_ai._types.model import CommitMessage


def get_home_dir() -> str:
    """
    Get the current user's home directory.

    Returns:
        str: `$HOME` if set, otherwise the home directory from the password database.

    Raises:
        InputFileError: If neither source yields a directory.
    """
    home_dir = os.environ.get("HOME")
    if home_dir:
        return home_dir
    try:
        return pwd.getpwuid(os.getuid()).pw_dir
    except KeyError as exc:
        raise InputFileError("Could not determine home directory") from exc


def get_default_api_key_path() -> str:
    return os.path.join(get_home_dir(), CONFIG_DIR, API_KEY_FILENAME)


def get_default_profile_path() -> str:
    return os.path.join(get_home_dir(), CONFIG_DIR, PROFILE_FILENAME)


def read_text_file(file_path: str, debug: Optional[DebugChannel] = None) -> str:
    """
    Read a whole file as UTF-8 text.

    Args:
        file_path (str): Path of the file to read.
        debug (DebugChannel, optional): Trace sink.

    Returns:
        str: File content. Invalid UTF-8 sequences are replaced, not rejected.
            A leading byte order mark is dropped.

    Raises:
        InputFileError: If the file cannot be opened or read.
    """
    debug = debug or SILENT
    try:
        with open(file_path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        raise InputFileError(f"Failed to open file: {file_path} ({e.strerror or e})") from e

    debug(f"Read file: {file_path} ({len(content)} characters)")
    return content


def read_api_key(file_path: str, debug: Optional[DebugChannel] = None) -> str:
    debug = debug or SILENT
    api_key = read_text_file(file_path, debug).strip()
    if not api_key:
        raise InputFileError(f"API key file is empty: {file_path}")
    if not api_key.isascii() or not api_key.isprintable():
        raise InputFileError(f"API key file contains non-ASCII or control characters: {file_path}")
    debug(f"Successfully read API key (length: {len(api_key)})")
    return api_key


def read_profile(file_path: str, debug: Optional[DebugChannel] = None) -> str:
    return read_text_file(file_path, debug).strip()


def require_file(file_path: str, what: str, flag: str) -> None:
    """
    Fail early with a helpful message when an input file is missing.

    Args:
        file_path (str): Path that must exist.
        what (str): Human name of the file ("API key", "Profile").
        flag (str): Command-line option that overrides the path.
    """
    if not os.path.exists(file_path):
        raise InputFileError(
            f"{what} file not found at {file_path}\n"
            f"Create it first or specify a {what.lower()} file with {flag} option"
        )


def save_results_to_file(file_path: str, message: CommitMessage) -> None:
    """
    Write the commit message as Markdown (`# title`, blank line, description).

    Args:
        file_path (str): Destination file, overwritten if it exists.
        message (CommitMessage): Parsed reply to persist.

    Raises:
        InputFileError: If the file cannot be written.
    """
    try:
        with open(file_path, "w", encoding="utf-8", newline="") as f:
            f.write(message.to_markdown())
    except OSError as e:
        raise InputFileError(
            f"Failed to open output file: {file_path} ({e.strerror or e})"
        ) from e
