"""Colored stage logger — ANSI-colored console logging for the generate/publish workflow.

Color scheme:
    🟣 Magenta — Gemini generation
    🟢 Green   — Publish / Sitemap
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Stage Definitions ────────────────────────────────────────────────

class Stage:
    """Predefined workflow stages with colors and icons."""

    GENERATE = ("GENERATE", _Colors.MAGENTA, "🤖")
    PUBLISH = ("PUBLISH", _Colors.GREEN, "📰")
    SITEMAP = ("SITEMAP", _Colors.GREEN, "🗺️")


# ── StageLogger ──────────────────────────────────────────────────────

class StageLogger:
    """Color-coded logger for multi-step operations.

    Usage:
        log = StageLogger("GenerationService")
        with log.timed_step(Stage.GENERATE, "Drafting article", keyword="winter coats"):
            result = await generator.generate(keyword)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        self._logger.info(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}" + _format_details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time; re-raises failures."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s")


def _format_details(details: dict[str, Any]) -> str:
    if not details:
        return ""
    joined = " | ".join(f"{k}={v}" for k, v in details.items())
    return f" {_Colors.GRAY}({joined}){_Colors.RESET}"
