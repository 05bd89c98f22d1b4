"""Practice-test constants shared across UI, API and core layers."""

UNANSWERED_OPTION_INDEX: int = -1

DEFAULT_QUESTION_COUNT: int = 10
MIN_QUESTION_COUNT: int = 1
MAX_QUESTION_COUNT: int = 50
QUESTION_COUNT_STEP: int = 5

DEFAULT_TIME_LIMIT_MINUTES: int = 15
MIN_TIME_LIMIT_MINUTES: int = 1
MAX_TIME_LIMIT_MINUTES: int = 60
TIME_LIMIT_STEP_MINUTES: int = 5

LOW_TIME_WARNING_SECONDS: int = 60
CLOCK_TICK_INTERVAL_MS: int = 1000

ALL_CATEGORIES: str = "all"
DEFAULT_CATEGORY: str = "general"
MIXED_TOPICS_LABEL: str = "Mixed Topics"
RECENT_RESULTS_LIMIT: int = 50

DEFAULT_QUESTION_BANK_PATH: str = "question_bank.txt"
