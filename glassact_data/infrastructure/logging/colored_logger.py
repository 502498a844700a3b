"""Colored generation logger — ANSI-colored console output for shape generation.

Provides a GenerationLogger with color-coded output per generation stage,
so a long ``generate-shapes`` run can be traced entity by entity.

Color scheme:
    🟢 Green   — Loading definitions
    🔵 Blue    — Projecting shapes
    🟡 Yellow  — Writing output files
    🔴 Red     — Errors
    ⚪ Gray    — Details / stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"


class GenerationStage:
    """Predefined generation stages with colors and icons."""

    LOAD = ("LOAD", _Colors.GREEN, "📂")
    PROJECT = ("PROJECT", _Colors.BLUE, "🧩")
    EMIT = ("EMIT", _Colors.YELLOW, "💾")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


Stage = tuple[str, str, str]


class GenerationLogger:
    """Color-coded logger for the shape generation run.

    Usage:
        log = GenerationLogger("generate-shapes")
        log.step_start(GenerationStage.PROJECT, "Inlay")
        log.detail("post.json", fields=9)
        log.step_complete(GenerationStage.PROJECT, "Inlay")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _details(kwargs))

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _details(kwargs))

    def step_error(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        """Log a step error in red, whatever the stage's own color."""
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + _details(kwargs))

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(GenerationStage.LOAD, "Compiling entities.yaml"):
                entities = compiler.compile()
        """
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


def _details(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"
