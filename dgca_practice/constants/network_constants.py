"""Network configuration constants for the practice application."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
API_LOG_LEVEL: str = "info"
