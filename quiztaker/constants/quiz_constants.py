"""Quiz-session constants shared across the core layers."""

DEFAULT_DURATION_MINUTES: int = 20
TICK_INTERVAL_MS: int = 1000
TIME_WARNING_WINDOW_SECONDS: int = 60

BLANK_PLACEHOLDER: str = "_____"

TRUE_INDEX: int = 0
FALSE_INDEX: int = 1
BOOLEAN_OPTIONS: tuple[str, str] = ("True", "False")
