"""Demo driver: run the ten readers in order, print a banner before each result."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TextIO

from readkit import readers
from readkit.config import DEFAULT_URL, ON_ERROR_POLICIES
from readkit.resolver import ResourceResolver

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """One numbered demo step: which reader, and which configured input it reads."""

    number: int
    label: str
    source: str  # "primary", "binary", "channel" (demo.files keys) or "url"
    func: Callable[..., Any]


@dataclass
class StepOutcome:
    """Result of one executed step. Exactly one of value/error is meaningful."""

    number: int
    label: str
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


STEPS: list[Step] = [
    Step(1, "bundled resource stream", "primary", readers.read1),
    Step(2, "bundled file to string", "primary", readers.read2),
    Step(3, "first line, buffered reader", "primary", readers.read3),
    Step(4, "all lines", "primary", readers.read4),
    Step(5, "first line, path reader", "primary", readers.read5),
    Step(6, "lazy lines, upper-cased", "primary", readers.read6),
    Step(7, "first three tokens", "primary", readers.read7),
    Step(8, "byte buffer", "binary", readers.read8),
    Step(9, "memory-mapped buffer", "channel", readers.read9),
    Step(10, "remote URL", "url", readers.read10),
]

DEFAULT_FILES = {"primary": "file1.txt", "binary": "file2.txt", "channel": "file3.txt"}


def banner(number: int) -> str:
    return f"---- {number} ----"


def get_step(number: int) -> Step:
    """Return the step with this number. Raises ValueError if out of range."""
    for step in STEPS:
        if step.number == number:
            return step
    raise ValueError(f"No step {number} (expected 1-{len(STEPS)})")


def execute_step(
    step: Step,
    resolver: ResourceResolver,
    target: str,
    timeout: Any = None,
) -> Any:
    """Call the step's reader on target (a filename, or a URL for the url step)."""
    if step.source == "url":
        return step.func(target, timeout=timeout)
    return step.func(target, resolver)


def _target_for(step: Step, files: dict[str, str], url: str) -> str:
    if step.source == "url":
        return url
    return files.get(step.source) or DEFAULT_FILES[step.source]


def run_demo(
    resolver: ResourceResolver,
    files: dict[str, str] | None = None,
    url: str = DEFAULT_URL,
    on_error: str = "halt",
    timeout: Any = None,
    out: TextIO | None = None,
) -> list[StepOutcome]:
    """
    Run every step in order and print each result under its banner.

    With on_error="halt" the first failure prints its message once and stops
    the run. With on_error="continue" the message is printed in place of the
    result and the next step runs. Returns the outcomes of the steps that ran.
    """
    if on_error not in ON_ERROR_POLICIES:
        raise ValueError(f"on_error must be one of {ON_ERROR_POLICIES}, got {on_error!r}")
    files = files or {}

    def emit(text: str) -> None:
        print(text, file=out)

    outcomes: list[StepOutcome] = []
    for step in STEPS:
        target = _target_for(step, files, url)
        logger.info("Step %d (%s): %s", step.number, step.label, target)
        emit(banner(step.number))
        try:
            value = execute_step(step, resolver, target, timeout=timeout)
        except Exception as e:
            logger.debug("Step %d failed", step.number, exc_info=True)
            outcomes.append(StepOutcome(step.number, step.label, error=e))
            emit(str(e))
            if on_error == "halt":
                break
            continue
        emit(str(value))
        outcomes.append(StepOutcome(step.number, step.label, value=value))
    return outcomes
