"""
Centralized logging configuration for WordPecker.

Every line carries a wall-clock timestamp, the seconds since start-up and a
short colored category tag:

    ENV   configuration and .env loading
    API   content provider calls
    SESS  learning session steps
    DB    progress store
    OK / WARN / ERR / INFO / DBG   general status

Usage:
    from wordpecker.logger import logger

    logger.api_call("chat.completions.create", model="gpt-4o-mini")
    logger.session_transition("LEARNING", "PRACTICE")
    logger.error("Failed to persist progress", exc_info=True)

Set WORDPECKER_DEBUG=false to silence the output. Warnings and errors go to
stderr, everything else to stdout.
"""

import os
import sys
import time
import traceback
from datetime import datetime
from typing import Optional


class ColorCodes:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"


_STDERR_TAGS = {"WARN", "ERR"}


class DebugLogger:
    """Categorized, color-coded output for development runs."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._started = datetime.now()

    def _emit(self, tag: str, color: str, message: str, exc_info: bool = False) -> None:
        if not self.enabled:
            return

        now = datetime.now()
        elapsed = (now - self._started).total_seconds()
        stamp = f"{now:%H:%M:%S}.{now.microsecond // 1000:03d} +{elapsed:.1f}s"
        stream = sys.stderr if tag in _STDERR_TAGS else sys.stdout
        indent = " " * (len(stamp) + 8)

        first, *rest = message.split("\n")
        print(f"{ColorCodes.DIM}{stamp}{ColorCodes.RESET} "
              f"{color}{ColorCodes.BOLD}[{tag:>4}]{ColorCodes.RESET} {first}",
              file=stream, flush=True)
        for line in rest:
            print(f"{indent}{line}", file=stream, flush=True)

        if exc_info:
            for line in traceback.format_exc().splitlines():
                if line.strip():
                    print(f"{indent}{ColorCodes.RED}{line}{ColorCodes.RESET}", file=sys.stderr, flush=True)

    # === Configuration ===
    def env(self, message: str, **kwargs) -> None:
        self._emit("ENV", ColorCodes.MAGENTA, message, **kwargs)

    def env_success(self, message: str, **kwargs) -> None:
        self._emit("ENV", ColorCodes.GREEN, f"✓ {message}", **kwargs)

    # === Content provider ===
    def api_call(self, endpoint: str, model: Optional[str] = None, **kwargs) -> None:
        suffix = f" [{model}]" if model else ""
        self._emit("API", ColorCodes.CYAN, f"→ {endpoint}{suffix}", **kwargs)

    def api_response(self, endpoint: str, duration_ms: Optional[float] = None, **kwargs) -> None:
        suffix = f" in {duration_ms:.0f}ms" if duration_ms else ""
        self._emit("API", ColorCodes.BRIGHT_CYAN, f"← {endpoint}{suffix}", **kwargs)

    def api_error(self, message: str, **kwargs) -> None:
        self._emit("API", ColorCodes.BRIGHT_RED, f"✗ {message}", **kwargs)

    # === Learning session ===
    def session(self, message: str, **kwargs) -> None:
        self._emit("SESS", ColorCodes.BLUE, message, **kwargs)

    def session_transition(self, from_step: str, to_step: str, **kwargs) -> None:
        self._emit("SESS", ColorCodes.BLUE, f"{from_step} ⇒ {to_step}", **kwargs)

    # === Progress store ===
    def db(self, message: str, **kwargs) -> None:
        self._emit("DB", ColorCodes.YELLOW, message, **kwargs)

    # === Status ===
    def success(self, message: str, **kwargs) -> None:
        self._emit("OK", ColorCodes.GREEN, f"✓ {message}", **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._emit("WARN", ColorCodes.BRIGHT_YELLOW, f"⚠ {message}", **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._emit("ERR", ColorCodes.BRIGHT_RED, f"✗ {message}", **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._emit("INFO", ColorCodes.WHITE, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._emit("DBG", ColorCodes.DIM, message, **kwargs)

    # === Terminal layout ===
    def separator(self, title: str = "") -> None:
        if self.enabled:
            rule = f" {title} ".center(60, "─") if title else "─" * 60
            print(f"\n{ColorCodes.DIM}{rule}{ColorCodes.RESET}\n", flush=True)

    def banner(self, text: str) -> None:
        if self.enabled:
            width = max(60, len(text) + 4)
            print(f"\n{ColorCodes.BRIGHT_CYAN}{'═' * width}\n"
                  f"{ColorCodes.BOLD}{text.center(width)}{ColorCodes.RESET}\n"
                  f"{ColorCodes.BRIGHT_CYAN}{'═' * width}{ColorCodes.RESET}\n", flush=True)


logger = DebugLogger(
    enabled=os.getenv("WORDPECKER_DEBUG", "true").strip().lower() not in ("0", "false", "no", "off")
)


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self):
        self.duration_ms: float = 0.0
        self._start: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        if self._start is not None:
            self.duration_ms = (time.perf_counter() - self._start) * 1000
