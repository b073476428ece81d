"""
git-commit-ai

Sends a developer profile and a git diff to Claude and turns the reply into
a commit title and description.
"""

__version__ = "1.0.0"
