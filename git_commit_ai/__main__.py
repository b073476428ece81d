from git_commit_ai.main import run

run()
