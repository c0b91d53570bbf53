"""smartctl invocation: per-device serialization and process execution."""

from __future__ import annotations

import logging
import subprocess
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from smartdiag.models import CommandOutput

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Prefix of every lock key; the device path is appended to it
LOCK_PREFIX = "smartdiag.smartctl:"

# smartctl exit status bits that mean no usable output was produced
EXIT_CMDLINE_PARSE = 0x01
EXIT_DEVICE_OPEN = 0x02
FATAL_EXIT_MASK = EXIT_CMDLINE_PARSE | EXIT_DEVICE_OPEN

CommandRunner = Callable[[list[str]], CommandOutput]


class SmartDiagError(Exception):
    """Base class for smartdiag errors."""


class ExecutionError(SmartDiagError):
    """smartctl could not be run or reported a fatal exit status."""

    def __init__(self, command: list[str], output: list[str], exit_status: int):
        self.command = command
        self.output = output
        self.exit_status = exit_status
        last_line = output[-1] if output else ""
        super().__init__(
            f"{' '.join(command)} failed with exit status {exit_status}: {last_line}"
        )


class ExecutionGate:
    """Registry of locks allowing one smartctl run per device path.

    Invocations against the same path never overlap; different paths never
    block each other.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, device_path: str) -> threading.Lock:
        key = f"{LOCK_PREFIX}{device_path}"
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def exclusive(self, device_path: str) -> Iterator[None]:
        """Hold the lock of `device_path` for the duration of the block."""
        lock = self._lock_for(device_path)
        with lock:
            yield

    def run(self, device_path: str, body: Callable[[], T]) -> T:
        """Run `body` while holding the lock of `device_path`."""
        with self.exclusive(device_path):
            return body()


# Process-wide gate used unless an engine is given its own
default_gate = ExecutionGate()


def run_command(command: list[str], timeout: float | None = 60) -> CommandOutput:
    """Run a command, merging stderr into stdout."""
    logger.debug(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        output = e.output or ""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        raise ExecutionError(command, output.splitlines() + [f"Timed out after {timeout}s"], -1) from e
    except OSError as e:
        raise ExecutionError(command, [str(e)], -1) from e

    return CommandOutput(
        command=command,
        exit_status=result.returncode,
        lines=result.stdout.splitlines(),
    )


def check_exit_status(output: CommandOutput) -> None:
    """Raise ExecutionError if smartctl reported a fatal exit status.

    Bit 0 means the command line did not parse and bit 1 that the device
    could not be opened. The remaining bits report disk health problems and
    come with valid output.
    """
    if output.exit_status < 0 or output.exit_status & FATAL_EXIT_MASK:
        raise ExecutionError(output.command, output.lines, output.exit_status)

    if output.exit_status:
        logger.debug(
            f"{' '.join(output.command)} returned informational exit status "
            f"{output.exit_status:#04x}"
        )
