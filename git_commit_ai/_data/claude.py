BASE_URL: str = "https://api.anthropic.com/v1"
MESSAGES_ENDPOINT: str = f"{BASE_URL}/messages"

ANTHROPIC_VERSION: str = "2023-06-01"

DEFAULT_MODEL: str = "claude-3-7-sonnet-20250219"
MAX_TOKENS: int = 1024
TEMPERATURE: float = 0.5

# Seconds
CONNECT_TIMEOUT: float = 10
REQUEST_TIMEOUT: float = 120

# Response bodies larger than this are refused by the buffer
MAX_RESPONSE_BYTES: int = 16 * 1024 * 1024
CHUNK_SIZE: int = 8192

CONFIG_DIR: str = ".config/claude"
API_KEY_FILENAME: str = "api_key.txt"
PROFILE_FILENAME: str = "profile.txt"

PROMPT_TEMPLATE: str = (
    "Here is my profile:\n\n{profile}\n\n"
    "Here is a git diff that needs review:\n\n{diff}\n\n"
    "Please provide a concise title and description of the changes."
)
