from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(slots=True)
class Settings:
    """Application configuration loaded from environment variables."""

    headless: bool = True
    navigation_timeout_s: int = 30
    settle_delay_ms: int = 2000
    scroll_step_px: int = 500
    scroll_interval_ms: int = 200
    scroll_max_ms: int = 10_000
    post_scroll_delay_ms: int = 1000
    viewport_width: int = 1920
    viewport_height: int = 1080
    user_agent: str = DEFAULT_USER_AGENT
    max_concurrent_pages: int = 2
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    output_dir: Path = Path("output")
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origin: str = "*"
    rate_limit_max: int = 100
    rate_limit_window_s: int = 900
    environment: str = "development"

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            headless=_bool_env("HEADLESS", True),
            navigation_timeout_s=_int_env("NAVIGATION_TIMEOUT_S", 30),
            settle_delay_ms=_int_env("SETTLE_DELAY_MS", 2000),
            scroll_step_px=_int_env("SCROLL_STEP_PX", 500),
            scroll_interval_ms=_int_env("SCROLL_INTERVAL_MS", 200),
            scroll_max_ms=_int_env("SCROLL_MAX_MS", 10_000),
            post_scroll_delay_ms=_int_env("POST_SCROLL_DELAY_MS", 1000),
            viewport_width=_int_env("VIEWPORT_WIDTH", 1920),
            viewport_height=_int_env("VIEWPORT_HEIGHT", 1080),
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            max_concurrent_pages=max(1, _int_env("MAX_CONCURRENT_PAGES", 2)),
            verbose=_bool_env("VERBOSE", False),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 8080),
            cors_origin=os.getenv("CORS_ORIGIN", "*"),
            rate_limit_max=max(1, _int_env("RATE_LIMIT_MAX", 100)),
            rate_limit_window_s=max(1, _int_env("RATE_LIMIT_WINDOW_S", 900)),
            environment=os.getenv("APP_ENV", "development"),
        )
        return settings

    @property
    def navigation_timeout_ms(self) -> int:
        return self.navigation_timeout_s * 1000

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.verbose else self.log_level

    def ensure_directories(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)
