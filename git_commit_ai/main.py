# Standard Library Imports
import argparse
import sys
from typing import List, Optional

# Third-Party Library Imports
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

# Internal Module Imports
from git_commit_ai._data.claude import CONNECT_TIMEOUT, REQUEST_TIMEOUT
from git_commit_ai._engine.claude import generate_commit_message
from git_commit_ai._engine.console import DebugChannel, console, err_console
from git_commit_ai._engine.files import (
    get_default_api_key_path,
    get_default_profile_path,
    read_api_key,
    read_profile,
    read_text_file,
    require_file,
    save_results_to_file,
)
from git_commit_ai._types.errors import CommitAIError, HttpError
from git_commit_ai._types.model import ClientSettings, CommitMessage
from git_commit_ai.animation.processing import spinner

EXAMPLES = """\
Examples:
  %(prog)s "$(git diff)"                         # Use defaults
  %(prog)s -k custom_key.txt "$(git diff)"       # Custom API key
  %(prog)s -p my_profile.txt "$(git diff)"       # Custom profile
  %(prog)s -d changes.diff                       # Read diff from file
  %(prog)s -o commit_message.md "$(git diff)"    # Save to file
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-commit-ai",
        description="Claude API client for git diff analysis.\n"
        "Sends your profile and a git diff to Claude and prints a commit title and description.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "git_diff",
        nargs="?",
        help="Git diff text. Ignored when -d is given.",
    )
    parser.add_argument(
        "-k",
        "--key-file",
        help="Path to file containing the API key (default: ~/.config/claude/api_key.txt)",
        type=str,
    )
    parser.add_argument(
        "-p",
        "--profile",
        help="Path to profile file (default: ~/.config/claude/profile.txt)",
        type=str,
    )
    parser.add_argument(
        "-d",
        "--diff-file",
        help="Read git diff from a file instead of the command line",
        type=str,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Save results to the specified file",
        type=str,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose/debug output",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=CONNECT_TIMEOUT,
        help="Seconds allowed to establish the connection. Default: %(default)s",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help="Seconds allowed for the whole request. Default: %(default)s",
    )
    return parser


def print_commit_message(message: CommitMessage) -> None:
    # Model output is printed without markup so brackets in it stay literal
    console.print("TITLE: ", style="bold cyan", end="")
    console.print(message.title, markup=False, highlight=False, soft_wrap=True)
    console.print()
    console.print("DESCRIPTION:", style="bold cyan")
    console.print(message.description, markup=False, highlight=False, soft_wrap=True)


def report_error(error: CommitAIError) -> None:
    err_console.print(
        Panel(
            Text(str(error), style="yellow"),
            title="[bold red]Error[/bold red]",
            border_style="red",
        )
    )
    if isinstance(error, HttpError):
        err_console.print("[bold red]Response:[/bold red]")
        err_console.print(error.body_text, markup=False, highlight=False, soft_wrap=True)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, load the inputs, call the API and print the result.

    Returns:
        int: Process exit code (0 on success, 1 on any failure).
    """
    # --- 1. Argument Parsing ---
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = DebugChannel(enabled=args.verbose)
    debug("Debug mode enabled")

    if not args.git_diff and not args.diff_file:
        err_console.print(
            "[error]Error:[/error] Git diff is required (either as an argument or via -d option)"
        )
        parser.print_help(sys.stderr)
        return 1

    try:
        settings = ClientSettings(
            connect_timeout=args.connect_timeout, total_timeout=args.timeout
        )
    except ValueError as e:
        err_console.print(f"[error]Error:[/error] Invalid timeout: {escape(str(e))}")
        return 1

    try:
        # --- 2. Inputs ---
        key_file_path = args.key_file or get_default_api_key_path()
        if not args.key_file:
            debug(f"Using default API key from: {key_file_path}")
        require_file(key_file_path, "API key", "-k")

        profile_path = args.profile or get_default_profile_path()
        if not args.profile:
            debug(f"Using default profile from: {profile_path}")
        require_file(profile_path, "Profile", "-p")

        api_key = read_api_key(key_file_path, debug)
        profile = read_profile(profile_path, debug)
        if args.diff_file:
            git_diff = read_text_file(args.diff_file, debug)
        else:
            git_diff = args.git_diff

        # --- 3. API Call ---
        with spinner("Sending request to Anthropic API..."):
            message = generate_commit_message(api_key, profile, git_diff, settings, debug)
    except CommitAIError as e:
        report_error(e)
        return 1

    # --- 4. Output ---
    print_commit_message(message)

    if args.output:
        try:
            save_results_to_file(args.output, message)
        except CommitAIError as e:
            report_error(e)
            return 1
        console.print(f"[success]Results saved to:[/success] {escape(args.output)}", highlight=False)

    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        err_console.print("\n[bold yellow]Operation cancelled by user.[/bold yellow]")
        sys.exit(130)


# --- Entry Point ---
if __name__ == "__main__":
    run()
